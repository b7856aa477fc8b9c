"""
FastAPI Dependencies

Provides dependency injection for database sessions and search parameters.
"""
from typing import Generator, List, Optional

from fastapi import Query
from sqlalchemy.orm import Session

from config.settings import settings
from src.estatehub.api.schemas import PropertySearchParams, SortField
from src.estatehub.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Routers commit their own writes; anything left uncommitted is rolled
    back when the session closes.

    Yields:
        SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_search_params(
    location: Optional[str] = Query(None, description="Substring of locality or city"),
    property_type: Optional[str] = Query(None, alias="propertyType"),
    bhk_type: Optional[str] = Query(None, alias="bhkType", description="e.g. 2BHK"),
    city: Optional[str] = Query(None, description="Substring of city"),
    possession_status: Optional[str] = Query(None, alias="possessionStatus"),
    min_price: Optional[float] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[float] = Query(None, ge=0, alias="maxPrice"),
    min_area: Optional[int] = Query(None, ge=0, alias="minArea"),
    max_area: Optional[int] = Query(None, ge=0, alias="maxArea"),
    is_featured: Optional[bool] = Query(None, alias="isFeatured"),
    amenities: Optional[List[str]] = Query(None, description="Repeat or comma-separate labels"),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        settings.search_default_page_size,
        ge=1,
        le=settings.search_max_page_size,
        description="Items per page",
    ),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="price, area, createdAt or viewCount"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
) -> PropertySearchParams:
    """
    Property search query parameters.

    Unknown sortBy values fall back to createdAt rather than failing.
    """
    labels: List[str] = []
    for entry in amenities or []:
        labels.extend(part.strip() for part in entry.split(",") if part.strip())

    return PropertySearchParams(
        location=location,
        property_type=property_type,
        bhk_type=bhk_type,
        city=city,
        possession_status=possession_status,
        min_price=min_price,
        max_price=max_price,
        min_area=min_area,
        max_area=max_area,
        is_featured=is_featured,
        amenities=labels,
        page=page,
        limit=limit,
        sort_by=SortField.resolve(sort_by),
        sort_order=sort_order,
    )
