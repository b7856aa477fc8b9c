"""
SQLAlchemy ORM Models

Listings, inbound leads, and admin accounts.
"""
import enum
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    String, Integer, Numeric, Boolean, Text,
    ForeignKey, CheckConstraint, Index, Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.estatehub.db.base import Base, TimestampMixin, SoftDeleteMixin, JSONList


class LeadStatus(str, enum.Enum):
    """Lead pipeline status. Any status may move to any other."""
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CLOSED = "closed"


class AdminRole(str, enum.Enum):
    """Admin account role."""
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Property(Base, TimestampMixin, SoftDeleteMixin):
    """
    Property listing.

    Rows are never removed by the application; is_active=False hides a
    listing from every public read.
    """
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Classification
    property_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="apartment, villa, plot, commercial"
    )
    bhk_type: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        comment="Bedroom configuration label (1BHK, 2BHK, 3BHK, 4+BHK)"
    )

    # Pricing and size
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    price_per_sqft: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 2), nullable=True)
    area: Mapped[int] = mapped_column(Integer, nullable=False, comment="Area in square feet")

    # Location hierarchy
    location: Mapped[str] = mapped_column(String(255), nullable=False, comment="Locality")
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    pincode: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Project
    builder_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    project_status: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="ongoing, completed, ready"
    )
    possession_status: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="ready, under-construction"
    )

    # Structure
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_floors: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    facing: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    furnishing: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="furnished, semi-furnished, unfurnished"
    )
    parking_spaces: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    balconies: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Media and features
    amenities: Mapped[List[str]] = mapped_column(JSONList, default=list, nullable=False)
    images: Mapped[List[str]] = mapped_column(JSONList, default=list, nullable=False)
    virtual_tour_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    featured_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Flags and counters
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    leads: Mapped[List["Lead"]] = relationship("Lead", back_populates="property")

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_price_non_negative"),
        CheckConstraint("price_per_sqft >= 0", name="check_price_per_sqft_non_negative"),
        CheckConstraint("view_count >= 0", name="check_view_count_non_negative"),
        Index("idx_properties_city", "city"),
        Index("idx_properties_property_type", "property_type"),
        Index("idx_properties_price", "price"),
        Index("idx_properties_is_active", "is_active"),
        Index("idx_properties_featured", "is_featured", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title!r}, city={self.city})>"


class Lead(Base, TimestampMixin):
    """
    Inbound contact or inquiry.

    property_id is a loose reference: general inquiries carry none, and
    the listing may have been deactivated since.
    """
    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    property_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("properties.id"),
        nullable=True,
    )
    source: Mapped[str] = mapped_column(
        String(50),
        default="website",
        nullable=False,
        comment="website, phone, whatsapp"
    )
    status: Mapped[LeadStatus] = mapped_column(
        SQLEnum(
            LeadStatus,
            name="lead_status",
            native_enum=False,
            length=20,
            values_callable=_enum_values,
        ),
        default=LeadStatus.NEW,
        nullable=False,
    )

    property: Mapped[Optional["Property"]] = relationship("Property", back_populates="leads")

    __table_args__ = (
        Index("idx_leads_status", "status"),
        Index("idx_leads_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Lead(id={self.id}, email={self.email}, status={self.status})>"


class Admin(Base, TimestampMixin):
    """Operator account. password holds a bcrypt hash only."""
    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[AdminRole] = mapped_column(
        SQLEnum(
            AdminRole,
            name="admin_role",
            native_enum=False,
            length=20,
            values_callable=_enum_values,
        ),
        default=AdminRole.ADMIN,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, username={self.username}, role={self.role})>"
