"""
Admin Leads Router

Lead review and follow-up.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from src.estatehub.api.auth import TokenPayload, get_token_payload
from src.estatehub.api.dependencies import get_db
from src.estatehub.api.schemas import LeadListResponse, LeadResponse, LeadUpdate, MessageResponse
from src.estatehub.db.models import LeadStatus
from src.estatehub.db.repository import LeadRepository
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/admin/leads",
    tags=["admin"],
    dependencies=[Depends(get_token_payload)],
)


@router.get("", response_model=LeadListResponse)
def list_leads(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    status: Optional[LeadStatus] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db),
):
    """
    List leads newest first.

    Filters:
    - **status**: new, contacted, qualified, or closed
    """
    leads, total = LeadRepository().list_leads(db, page=page, limit=limit, status=status)
    return LeadListResponse(
        leads=[LeadResponse.model_validate(lead) for lead in leads],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{lead_id}", response_model=LeadResponse)
def get_lead(
    lead_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    lead = LeadRepository().get_by_id(db, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.put("/{lead_id}", response_model=LeadResponse)
def update_lead(
    lead_data: LeadUpdate,
    lead_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    token: TokenPayload = Depends(get_token_payload),
):
    """
    Update a lead. Status may be set to any value regardless of its current one.

    Raises:
        HTTPException: 404 if the lead does not exist
    """
    changes = lead_data.model_dump(exclude_unset=True)
    lead = LeadRepository().update(db, lead_id, **changes)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    db.commit()
    logger.info("lead_updated", id=lead_id, admin=token.username, fields=sorted(changes))
    return lead


@router.delete("/{lead_id}", response_model=MessageResponse)
def delete_lead(
    lead_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    token: TokenPayload = Depends(get_token_payload),
):
    """
    Permanently remove a lead.

    Raises:
        HTTPException: 404 if the lead does not exist
    """
    if not LeadRepository().delete(db, lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")
    db.commit()
    logger.info("lead_removed", id=lead_id, admin=token.username)
    return MessageResponse(message="Lead deleted successfully")
