"""
Search Router

Location autocomplete for the search bar.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.settings import settings
from src.estatehub.api.dependencies import get_db
from src.estatehub.api.schemas import SearchSuggestion
from src.estatehub.db.repository import PropertyRepository

router = APIRouter(prefix="/api/search", tags=["search"])

MIN_QUERY_LENGTH = 2


@router.get("/suggestions", response_model=List[SearchSuggestion])
def get_search_suggestions(
    q: Optional[str] = Query(None, description="Partial locality or city name"),
    db: Session = Depends(get_db),
):
    """
    Suggest localities matching the partial query.

    Queries shorter than two characters return an empty list.
    """
    if not q or len(q) < MIN_QUERY_LENGTH:
        return []
    return PropertyRepository().suggest_locations(db, q, limit=settings.suggestion_limit)
