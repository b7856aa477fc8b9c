"""
Repository Pattern for Data Access

Provides CRUD operations and domain-specific queries for listings, leads,
and admin accounts.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import and_, func, or_, select, type_coerce, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from src.estatehub.api.schemas import PropertySearchParams, SortField
from src.estatehub.db.models import Admin, AdminRole, Lead, LeadStatus, Property
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


# Explicit mapping from sort key to column; SortField.resolve already
# collapses unknown keys to CREATED_AT.
SORT_COLUMNS = {
    SortField.PRICE: Property.price,
    SortField.AREA: Property.area,
    SortField.CREATED_AT: Property.created_at,
    SortField.VIEW_COUNT: Property.view_count,
}


class BaseRepository:
    """
    Base repository with common CRUD operations.

    Generic repository that can be extended for specific models.
    """

    def __init__(self, model: Type[T]):
        """
        Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get_by_id(self, session: Session, id_value: Any) -> Optional[T]:
        """
        Get single record by primary key.

        Args:
            session: Database session
            id_value: Primary key value

        Returns:
            Model instance or None
        """
        result = session.get(self.model, id_value)
        logger.debug(
            "repository_get_by_id",
            model=self.model.__name__,
            id=id_value,
            found=result is not None
        )
        return result

    def create(self, session: Session, **kwargs) -> T:
        """
        Create new record.

        Args:
            session: Database session
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        session.flush()
        session.refresh(instance)
        logger.info("repository_created", model=self.model.__name__, id=getattr(instance, 'id', None))
        return instance

    def update(self, session: Session, id_value: Any, **kwargs) -> Optional[T]:
        """
        Update existing record.

        Args:
            session: Database session
            id_value: Primary key value
            **kwargs: Fields to update

        Returns:
            Updated model instance or None
        """
        instance = self.get_by_id(session, id_value)
        if not instance:
            logger.warning("repository_update_not_found", model=self.model.__name__, id=id_value)
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        session.flush()
        session.refresh(instance)
        logger.info("repository_updated", model=self.model.__name__, id=id_value, fields=sorted(kwargs))
        return instance


class PropertyRepository(BaseRepository):
    """Repository for Property model with search and listing queries."""

    def __init__(self):
        super().__init__(Property)

    # -- reads ---------------------------------------------------------------

    def get_active(self, session: Session, property_id: int) -> Optional[Property]:
        """
        Get a listing visible to the public.

        Returns:
            Property or None when absent or soft-deleted
        """
        query = select(Property).where(
            Property.id == property_id,
            Property.is_active.is_(True),
        )
        return session.execute(query).scalar_one_or_none()

    def build_filters(
        self,
        session: Session,
        params: PropertySearchParams,
        include_inactive: bool = False,
    ) -> List[ColumnElement]:
        """
        Translate search parameters into WHERE predicates.

        Every returned predicate is ANDed by the caller.
        """
        conditions: List[ColumnElement] = []

        if not include_inactive:
            conditions.append(Property.is_active.is_(True))

        if params.location:
            # Wildcard characters in user text match literally
            conditions.append(
                or_(
                    Property.location.icontains(params.location, autoescape=True),
                    Property.city.icontains(params.location, autoescape=True),
                )
            )

        if params.property_type:
            conditions.append(Property.property_type == params.property_type)

        if params.bhk_type:
            conditions.append(Property.bhk_type == params.bhk_type)

        if params.city:
            conditions.append(Property.city.icontains(params.city, autoescape=True))

        if params.possession_status:
            conditions.append(Property.possession_status == params.possession_status)

        if params.min_price is not None:
            conditions.append(Property.price >= params.min_price)

        if params.max_price is not None:
            conditions.append(Property.price <= params.max_price)

        if params.min_area is not None:
            conditions.append(Property.area >= params.min_area)

        if params.max_area is not None:
            conditions.append(Property.area <= params.max_area)

        # is_featured=False imposes no restriction.
        if params.is_featured:
            conditions.append(Property.is_featured.is_(True))

        if params.amenities:
            conditions.append(self._amenities_contain(session, params.amenities))

        return conditions

    @staticmethod
    def _amenities_contain(session: Session, amenities: List[str]) -> ColumnElement:
        """Listing amenities must be a superset of the requested labels."""
        if session.get_bind().dialect.name == "postgresql":
            return type_coerce(Property.amenities, JSONB).contains(list(amenities))

        clauses = []
        for amenity in amenities:
            entries = func.json_each(Property.amenities).table_valued("value")
            clauses.append(
                select(entries.c.value).where(entries.c.value == amenity).exists()
            )
        return and_(*clauses)

    def search(
        self,
        session: Session,
        params: PropertySearchParams,
        include_inactive: bool = False,
    ) -> Tuple[List[Property], int]:
        """
        Filtered, sorted, paginated listing search.

        Args:
            session: Database session
            params: Validated search parameters
            include_inactive: Admin view; skips the is_active restriction

        Returns:
            (page of listings, total matches ignoring pagination)
        """
        conditions = self.build_filters(session, params, include_inactive=include_inactive)

        count_query = select(func.count()).select_from(Property).where(*conditions)
        total = session.scalar(count_query) or 0

        sort_column = SORT_COLUMNS.get(params.sort_by, Property.created_at)
        if params.sort_order == "asc":
            order = (sort_column.asc(), Property.id.asc())
        else:
            order = (sort_column.desc(), Property.id.desc())

        query = (
            select(Property)
            .where(*conditions)
            .order_by(*order)
            .offset(params.offset)
            .limit(params.limit)
        )
        results = list(session.execute(query).scalars().all())

        logger.debug(
            "property_search",
            total=total,
            returned=len(results),
            page=params.page,
            limit=params.limit,
            sort_by=params.sort_by.value,
            sort_order=params.sort_order,
            include_inactive=include_inactive,
        )
        return results, total

    def get_featured(self, session: Session, limit: int = 6) -> List[Property]:
        """
        Get active featured listings, newest first.

        Args:
            session: Database session
            limit: Maximum number of listings

        Returns:
            List of featured listings
        """
        query = (
            select(Property)
            .where(
                Property.is_featured.is_(True),
                Property.is_active.is_(True),
            )
            .order_by(Property.created_at.desc(), Property.id.desc())
            .limit(limit)
        )
        return list(session.execute(query).scalars().all())

    def suggest_locations(self, session: Session, query_text: str, limit: int = 5) -> List[Dict[str, str]]:
        """
        Location autocomplete from the most viewed matching listings.

        Returns:
            [{"value": location, "label": "location, city"}], unique by value
        """
        params = PropertySearchParams(
            location=query_text,
            page=1,
            limit=limit,
            sort_by=SortField.VIEW_COUNT,
            sort_order="desc",
        )
        listings, _ = self.search(session, params)

        suggestions: List[Dict[str, str]] = []
        seen = set()
        for listing in listings:
            if listing.location in seen:
                continue
            seen.add(listing.location)
            suggestions.append({
                "value": listing.location,
                "label": f"{listing.location}, {listing.city}",
            })
        return suggestions

    # -- writes --------------------------------------------------------------

    def record_view(self, session: Session, property_id: int) -> Optional[Property]:
        """
        Increment the view counter of an active listing and return it.

        The increment is a single UPDATE evaluated by the database, so
        concurrent views never overwrite each other.

        Returns:
            Refreshed listing, or None when absent or soft-deleted
        """
        stmt = (
            update(Property)
            .where(
                Property.id == property_id,
                Property.is_active.is_(True),
            )
            .values(view_count=Property.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = session.execute(stmt)
        if result.rowcount == 0:
            logger.debug("property_view_not_found", id=property_id)
            return None

        query = (
            select(Property)
            .where(Property.id == property_id)
            .execution_options(populate_existing=True)
        )
        return session.execute(query).scalar_one()

    def soft_delete(self, session: Session, property_id: int) -> bool:
        """
        Hide a listing by setting is_active=False. The row is kept.

        Returns:
            True if the listing exists, False otherwise
        """
        instance = self.get_by_id(session, property_id)
        if not instance:
            logger.warning("property_soft_delete_not_found", id=property_id)
            return False

        instance.is_active = False
        session.flush()
        logger.info("property_soft_deleted", id=property_id)
        return True


class LeadRepository(BaseRepository):
    """Repository for Lead model."""

    def __init__(self):
        super().__init__(Lead)

    def list_leads(
        self,
        session: Session,
        page: int = 1,
        limit: int = 20,
        status: Optional[LeadStatus] = None,
    ) -> Tuple[List[Lead], int]:
        """
        Get leads newest first.

        Args:
            session: Database session
            page: 1-indexed page number
            limit: Page size
            status: Optional status filter

        Returns:
            (page of leads, total matching leads)
        """
        conditions = []
        if status is not None:
            conditions.append(Lead.status == status)

        total = session.scalar(
            select(func.count()).select_from(Lead).where(*conditions)
        ) or 0
        query = (
            select(Lead)
            .where(*conditions)
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(session.execute(query).scalars().all()), total

    def delete(self, session: Session, lead_id: int) -> bool:
        """
        Remove a lead row (hard delete).

        Returns:
            True if deleted, False if not found
        """
        instance = self.get_by_id(session, lead_id)
        if not instance:
            logger.warning("lead_delete_not_found", id=lead_id)
            return False

        session.delete(instance)
        session.flush()
        logger.info("lead_deleted", id=lead_id)
        return True


class AdminRepository(BaseRepository):
    """Repository for Admin accounts."""

    def __init__(self):
        super().__init__(Admin)

    def get_active_by_username(self, session: Session, username: str) -> Optional[Admin]:
        query = select(Admin).where(
            Admin.username == username,
            Admin.is_active.is_(True),
        )
        return session.execute(query).scalar_one_or_none()

    def get_active_by_id(self, session: Session, admin_id: int) -> Optional[Admin]:
        query = select(Admin).where(
            Admin.id == admin_id,
            Admin.is_active.is_(True),
        )
        return session.execute(query).scalar_one_or_none()

    def get_by_username(self, session: Session, username: str) -> Optional[Admin]:
        return session.execute(
            select(Admin).where(Admin.username == username)
        ).scalar_one_or_none()

    def create_admin(
        self,
        session: Session,
        username: str,
        email: str,
        password: str,
        role: AdminRole = AdminRole.ADMIN,
    ) -> Admin:
        """
        Provision an admin account. The password is stored as a bcrypt hash.
        """
        from src.estatehub.api.auth import hash_password

        return self.create(
            session,
            username=username,
            email=email,
            password=hash_password(password),
            role=role,
        )

    def set_password(self, session: Session, admin_id: int, password: str) -> Optional[Admin]:
        from src.estatehub.api.auth import hash_password

        return self.update(session, admin_id, password=hash_password(password))

    def deactivate(self, session: Session, admin_id: int) -> Optional[Admin]:
        return self.update(session, admin_id, is_active=False)


def get_dashboard_stats(session: Session) -> Dict[str, Any]:
    """
    Aggregate counts for the admin dashboard.

    Returns:
        Dictionary matching the DashboardStats schema
    """
    property_row = session.execute(
        select(
            func.count(Property.id),
            func.count(Property.id).filter(Property.is_active.is_(True)),
            func.count(Property.id).filter(
                and_(Property.is_active.is_(True), Property.is_featured.is_(True))
            ),
            func.coalesce(func.sum(Property.view_count), 0),
        )
    ).one()

    status_counts = dict(
        session.execute(
            select(Lead.status, func.count(Lead.id)).group_by(Lead.status)
        ).all()
    )
    leads_by_status = {status.value: status_counts.get(status, 0) for status in LeadStatus}

    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    new_leads = session.scalar(
        select(func.count(Lead.id)).where(Lead.created_at >= week_ago)
    ) or 0

    return {
        "total_properties": property_row[0] or 0,
        "active_listings": property_row[1] or 0,
        "featured_listings": property_row[2] or 0,
        "total_views": int(property_row[3] or 0),
        "total_leads": sum(leads_by_status.values()),
        "new_leads_last_7_days": new_leads,
        "leads_by_status": leads_by_status,
    }
