from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.services.match_store import MatchStore
from app.services.matching import MatchingService


def get_match_store(db: AsyncSession = Depends(get_db)) -> MatchStore:
    return MatchStore(db)


def get_matching_service(store: MatchStore = Depends(get_match_store)) -> MatchingService:
    return MatchingService(store)
