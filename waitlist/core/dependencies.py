# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""FastAPI dependency injection wiring."""
from fastapi import Depends

from waitlist.core.database import get_engine
from waitlist.repositories.interest_repository import InterestRepository
from waitlist.services.interest_service import InterestService


def get_interest_repo() -> InterestRepository:
    return InterestRepository(get_engine())


def get_interest_service(
    repo: InterestRepository = Depends(get_interest_repo),
) -> InterestService:
    return InterestService(repo)
