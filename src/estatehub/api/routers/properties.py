"""
Properties Router

Public listing search, featured listings, and listing detail.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from config.settings import settings
from src.estatehub.api.dependencies import get_db, get_search_params
from src.estatehub.api.schemas import PropertyListResponse, PropertyResponse, PropertySearchParams
from src.estatehub.db.repository import PropertyRepository

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=PropertyListResponse)
def search_properties(
    params: PropertySearchParams = Depends(get_search_params),
    db: Session = Depends(get_db),
):
    """
    Search active listings with filters, sorting, and pagination.

    Returns:
        One page of listings and the total number of matches
    """
    properties, total = PropertyRepository().search(db, params)
    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(p) for p in properties],
        total=total,
        page=params.page,
        limit=params.limit,
    )


# Registered before /{property_id} so "featured" is not parsed as an id
@router.get("/featured", response_model=List[PropertyResponse])
def get_featured_properties(
    limit: int = Query(
        settings.featured_default_limit,
        ge=1,
        le=settings.featured_max_limit,
        description="Number of listings to return",
    ),
    db: Session = Depends(get_db),
):
    """
    Get featured active listings, newest first.
    """
    return PropertyRepository().get_featured(db, limit=limit)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property_detail(
    property_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    """
    Get a single active listing and count the view.

    Raises:
        HTTPException: 404 if the listing does not exist or is inactive
    """
    property_obj = PropertyRepository().record_view(db, property_id)
    if not property_obj:
        raise HTTPException(status_code=404, detail="Property not found")
    db.commit()
    return property_obj
