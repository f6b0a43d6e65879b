# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package: re-exports InterestRepository."""
from waitlist.repositories.interest_repository import InterestRepository

__all__ = ["InterestRepository"]
