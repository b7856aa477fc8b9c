"""
Leads Router

Public contact form submission.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.estatehub.api.dependencies import get_db
from src.estatehub.api.schemas import LeadCreate, LeadResponse
from src.estatehub.db.models import LeadStatus
from src.estatehub.db.repository import LeadRepository
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/leads", tags=["leads"])


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
def create_lead(
    lead_data: LeadCreate,
    db: Session = Depends(get_db),
):
    """
    Record an inquiry from the contact form.

    - **name**, **email**, **phone**: contact details
    - **message**: optional free text
    - **propertyId**: listing the inquiry is about; omitted for general inquiries
    """
    lead = LeadRepository().create(
        db,
        **lead_data.model_dump(),
        status=LeadStatus.NEW,
    )
    db.commit()
    logger.info("lead_created", lead_id=lead.id, property_id=lead.property_id, source=lead.source)
    return lead
