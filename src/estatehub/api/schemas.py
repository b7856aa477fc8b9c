"""
Pydantic Schemas for API Request/Response Models

These schemas define the JSON structure for API endpoints. Field names are
snake_case in Python and camelCase on the wire.
"""
import enum
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from config.settings import settings
from src.estatehub.db.models import AdminRole, LeadStatus


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys; accepts either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Property search
# ---------------------------------------------------------------------------

class SortField(str, enum.Enum):
    """Sortable listing fields, keyed by their wire names."""
    PRICE = "price"
    AREA = "area"
    CREATED_AT = "createdAt"
    VIEW_COUNT = "viewCount"

    @classmethod
    def resolve(cls, key: Optional[str]) -> "SortField":
        """Map a requested sort key to a field, falling back to createdAt."""
        for member in cls:
            if key == member.value or key == member.name.lower():
                return member
        return cls.CREATED_AT


class PropertySearchParams(CamelModel):
    """Validated property search/filter/pagination parameters."""
    location: Optional[str] = None
    property_type: Optional[str] = None
    bhk_type: Optional[str] = None
    city: Optional[str] = None
    possession_status: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    min_area: Optional[int] = Field(None, ge=0)
    max_area: Optional[int] = Field(None, ge=0)
    is_featured: Optional[bool] = None
    amenities: List[str] = Field(default_factory=list)
    page: int = Field(1, ge=1)
    limit: int = Field(settings.search_default_page_size, ge=1, le=settings.search_max_page_size)
    sort_by: SortField = SortField.CREATED_AT
    sort_order: Literal["asc", "desc"] = "desc"

    @model_validator(mode="before")
    @classmethod
    def _resolve_sort_key(cls, data):
        if isinstance(data, dict):
            for key in ("sort_by", "sortBy"):
                if key in data:
                    data = dict(data)
                    data[key] = SortField.resolve(data[key])
        return data

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

class PropertyBase(CamelModel):
    """Fields an admin may set on a listing."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    property_type: str = Field(..., min_length=1, max_length=50)
    bhk_type: Optional[str] = Field(None, max_length=20)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    price_per_sqft: Optional[Decimal] = Field(None, ge=0, max_digits=8, decimal_places=2)
    area: int = Field(..., gt=0)
    location: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: Optional[str] = Field(None, max_length=10)
    address: Optional[str] = None
    builder_name: Optional[str] = Field(None, max_length=255)
    project_status: Optional[str] = Field(None, max_length=50)
    possession_status: Optional[str] = Field(None, max_length=50)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    floor: Optional[int] = None
    total_floors: Optional[int] = Field(None, ge=0)
    facing: Optional[str] = Field(None, max_length=50)
    furnishing: Optional[str] = Field(None, max_length=50)
    parking_spaces: int = Field(0, ge=0)
    balconies: int = Field(0, ge=0)
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    virtual_tour_url: Optional[str] = None
    featured_image_url: Optional[str] = None
    is_featured: bool = False
    is_active: bool = True


class PropertyCreate(PropertyBase):
    """Payload for creating a listing."""


_REQUIRED_PROPERTY_FIELDS = (
    "title", "property_type", "price", "area", "location", "city", "state",
    "parking_spaces", "balconies", "amenities", "images", "is_featured", "is_active",
)


class PropertyUpdate(CamelModel):
    """Partial update; only fields present in the payload are written."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    property_type: Optional[str] = Field(None, min_length=1, max_length=50)
    bhk_type: Optional[str] = Field(None, max_length=20)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    price_per_sqft: Optional[Decimal] = Field(None, ge=0, max_digits=8, decimal_places=2)
    area: Optional[int] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    pincode: Optional[str] = Field(None, max_length=10)
    address: Optional[str] = None
    builder_name: Optional[str] = Field(None, max_length=255)
    project_status: Optional[str] = Field(None, max_length=50)
    possession_status: Optional[str] = Field(None, max_length=50)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    floor: Optional[int] = None
    total_floors: Optional[int] = Field(None, ge=0)
    facing: Optional[str] = Field(None, max_length=50)
    furnishing: Optional[str] = Field(None, max_length=50)
    parking_spaces: Optional[int] = Field(None, ge=0)
    balconies: Optional[int] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    virtual_tour_url: Optional[str] = None
    featured_image_url: Optional[str] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in _REQUIRED_PROPERTY_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


class PropertyResponse(CamelModel):
    """Listing as returned by the API."""
    id: int
    title: str
    description: Optional[str] = None
    property_type: str
    bhk_type: Optional[str] = None
    price: float
    price_per_sqft: Optional[float] = None
    area: int
    location: str
    city: str
    state: str
    pincode: Optional[str] = None
    address: Optional[str] = None
    builder_name: Optional[str] = None
    project_status: Optional[str] = None
    possession_status: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    floor: Optional[int] = None
    total_floors: Optional[int] = None
    facing: Optional[str] = None
    furnishing: Optional[str] = None
    parking_spaces: int = 0
    balconies: int = 0
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    virtual_tour_url: Optional[str] = None
    featured_image_url: Optional[str] = None
    is_featured: bool
    is_active: bool
    view_count: int
    created_at: datetime
    updated_at: datetime


class PropertyListResponse(CamelModel):
    """One page of search results plus the unpaginated match count."""
    properties: List[PropertyResponse]
    total: int
    page: int
    limit: int


class SearchSuggestion(CamelModel):
    """Location autocomplete entry."""
    value: str
    label: str


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------

class LeadCreate(CamelModel):
    """Contact form submission."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=20)
    message: Optional[str] = None
    property_id: Optional[int] = Field(None, gt=0)
    source: str = Field("website", min_length=1, max_length=50)


class LeadUpdate(CamelModel):
    """Partial lead update. Status may move between any two values."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=5, max_length=20)
    message: Optional[str] = None
    property_id: Optional[int] = Field(None, gt=0)
    source: Optional[str] = Field(None, min_length=1, max_length=50)
    status: Optional[LeadStatus] = None

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in ("name", "email", "phone", "source", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


class LeadResponse(CamelModel):
    """Lead as returned by the API."""
    id: int
    name: str
    email: str
    phone: str
    message: Optional[str] = None
    property_id: Optional[int] = None
    source: str
    status: LeadStatus
    created_at: datetime
    updated_at: datetime


class LeadListResponse(CamelModel):
    """Paginated lead listing."""
    leads: List[LeadResponse]
    total: int
    page: int
    limit: int


# ---------------------------------------------------------------------------
# Admin / auth
# ---------------------------------------------------------------------------

class LoginRequest(CamelModel):
    """Admin credentials."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class AdminResponse(CamelModel):
    """Public view of an admin account. Never includes the password hash."""
    id: int
    username: str
    email: str
    role: AdminRole


class LoginResponse(CamelModel):
    """Issued token plus the authenticated admin."""
    token: str
    admin: AdminResponse


class VerifyResponse(CamelModel):
    admin: AdminResponse


class DashboardStats(CamelModel):
    """Admin dashboard statistics."""
    total_properties: int
    active_listings: int
    featured_listings: int
    total_views: int
    total_leads: int
    new_leads_last_7_days: int = Field(..., description="Leads created in last 7 days")
    leads_by_status: Dict[str, int]


class MessageResponse(CamelModel):
    message: str


class HealthCheck(CamelModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    database: str = "connected"
    timestamp: datetime
