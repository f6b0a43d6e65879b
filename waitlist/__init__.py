"""Waitlist signup service: validate, dedupe, store."""

__version__ = "1.0.0"
