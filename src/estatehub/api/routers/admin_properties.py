"""
Admin Properties Router

Listing management. Unlike the public router, inactive listings are visible
here and reads do not count views.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from src.estatehub.api.auth import TokenPayload, get_token_payload
from src.estatehub.api.dependencies import get_db, get_search_params
from src.estatehub.api.schemas import (
    MessageResponse,
    PropertyCreate,
    PropertyListResponse,
    PropertyResponse,
    PropertySearchParams,
    PropertyUpdate,
)
from src.estatehub.db.repository import PropertyRepository
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/admin/properties",
    tags=["admin"],
    dependencies=[Depends(get_token_payload)],
)


@router.get("", response_model=PropertyListResponse)
def list_properties(
    params: PropertySearchParams = Depends(get_search_params),
    db: Session = Depends(get_db),
):
    """
    Search all listings, including soft-deleted ones.
    """
    properties, total = PropertyRepository().search(db, params, include_inactive=True)
    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(p) for p in properties],
        total=total,
        page=params.page,
        limit=params.limit,
    )


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    """Get any listing by id without touching its view counter."""
    property_obj = PropertyRepository().get_by_id(db, property_id)
    if not property_obj:
        raise HTTPException(status_code=404, detail="Property not found")
    return property_obj


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
    token: TokenPayload = Depends(get_token_payload),
):
    """Create a listing."""
    property_obj = PropertyRepository().create(db, **property_data.model_dump())
    db.commit()
    logger.info("property_created", id=property_obj.id, admin=token.username)
    return property_obj


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_data: PropertyUpdate,
    property_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    token: TokenPayload = Depends(get_token_payload),
):
    """
    Update a listing. Only fields present in the body are changed.

    Raises:
        HTTPException: 404 if the listing does not exist
    """
    changes = property_data.model_dump(exclude_unset=True)
    property_obj = PropertyRepository().update(db, property_id, **changes)
    if not property_obj:
        raise HTTPException(status_code=404, detail="Property not found")
    db.commit()
    logger.info("property_updated", id=property_id, admin=token.username, fields=sorted(changes))
    return property_obj


@router.delete("/{property_id}", response_model=MessageResponse)
def delete_property(
    property_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    token: TokenPayload = Depends(get_token_payload),
):
    """
    Soft-delete a listing. The row is kept with isActive=false.

    Raises:
        HTTPException: 404 if the listing does not exist
    """
    if not PropertyRepository().soft_delete(db, property_id):
        raise HTTPException(status_code=404, detail="Property not found")
    db.commit()
    logger.info("property_deactivated", id=property_id, admin=token.username)
    return MessageResponse(message="Property deleted successfully")
