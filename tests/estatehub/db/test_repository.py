"""
Tests for Repository Pattern

Search predicates and pagination, view counting, soft and hard deletes,
admin provisioning, and dashboard aggregates.
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.estatehub.api.auth import verify_password
from src.estatehub.api.schemas import PropertySearchParams, SortField
from src.estatehub.db.base import Base
from src.estatehub.db.models import Lead, LeadStatus, Property
from src.estatehub.db.repository import (
    AdminRepository,
    LeadRepository,
    PropertyRepository,
    get_dashboard_stats,
)


def _search(session, include_inactive=False, **params):
    return PropertyRepository().search(session, PropertySearchParams(**params), include_inactive=include_inactive)


class TestPropertySearch:
    """Tests for PropertyRepository.search."""

    def test_mumbai_price_band_example(self, test_db, make_property):
        """Two cheapest listings in the band, total counts the whole band."""
        for price in (4000000, 5500000, 6000000, 9000000, 12000000):
            make_property(city="Mumbai", price=price)
        make_property(city="Pune", price=6500000)

        results, total = _search(
            test_db,
            city="mumbai",
            min_price=5000000,
            max_price=10000000,
            sort_by="price",
            sort_order="asc",
            page=1,
            limit=2,
        )

        assert [float(p.price) for p in results] == [5500000.0, 6000000.0]
        assert total == 3

    def test_total_independent_of_window(self, test_db, make_property):
        for _ in range(7):
            make_property()

        page_one, total_one = _search(test_db, page=1, limit=3)
        page_three, total_three = _search(test_db, page=3, limit=3)
        beyond, total_beyond = _search(test_db, page=10, limit=3)

        assert total_one == total_three == total_beyond == 7
        assert len(page_one) == 3
        assert len(page_three) == 1
        assert beyond == []

    def test_pages_do_not_overlap(self, test_db, make_property):
        for _ in range(5):
            make_property()

        first, _ = _search(test_db, page=1, limit=2)
        second, _ = _search(test_db, page=2, limit=2)
        third, _ = _search(test_db, page=3, limit=2)

        ids = [p.id for p in first + second + third]
        assert len(ids) == len(set(ids)) == 5

    def test_location_matches_locality_or_city(self, test_db, make_property):
        make_property(location="Koregaon Park", city="Pune")
        make_property(location="Powai", city="Mumbai")
        make_property(location="Whitefield", city="Bengaluru")

        results, total = _search(test_db, location="PUNE")
        assert total == 1
        assert results[0].city == "Pune"

        results, total = _search(test_db, location="pow")
        assert total == 1
        assert results[0].location == "Powai"

    def test_wildcard_characters_match_literally(self, test_db, make_property):
        make_property(location="Andheri West", city="Mumbai")
        make_property(location="Baner", city="Pune")
        make_property(location="Sector_5 100%", city="Noida")

        assert _search(test_db, city="%")[1] == 0
        assert _search(test_db, location="_")[1] == 1
        assert _search(test_db, location="100%")[1] == 1
        assert _search(test_db, location="r_5")[1] == 1
        assert _search(test_db, location="%a%")[1] == 0
        assert PropertyRepository().suggest_locations(test_db, "%") == [
            {"value": "Sector_5 100%", "label": "Sector_5 100%, Noida"},
        ]

    def test_exact_match_fields_are_case_sensitive(self, test_db, make_property):
        make_property(property_type="villa", bhk_type="4+BHK", possession_status="ready")
        make_property(property_type="apartment", bhk_type="2BHK", possession_status="under-construction")

        assert _search(test_db, property_type="villa")[1] == 1
        assert _search(test_db, property_type="Villa")[1] == 0
        assert _search(test_db, bhk_type="2BHK")[1] == 1
        assert _search(test_db, bhk_type="2bhk")[1] == 0
        assert _search(test_db, possession_status="ready")[1] == 1

    def test_area_bounds_inclusive(self, test_db, make_property):
        for area in (800, 1000, 1200, 1500):
            make_property(area=area)

        results, total = _search(test_db, min_area=1000, max_area=1200, sort_by="area", sort_order="asc")

        assert total == 2
        assert [p.area for p in results] == [1000, 1200]

    def test_is_featured_only_restricts_when_true(self, test_db, make_property):
        make_property(is_featured=True)
        make_property(is_featured=False)

        assert _search(test_db, is_featured=True)[1] == 1
        assert _search(test_db, is_featured=False)[1] == 2
        assert _search(test_db)[1] == 2

    def test_amenities_require_every_label(self, test_db, make_property):
        make_property(title="both", amenities=["Gym", "Pool", "Security"])
        make_property(title="gym only", amenities=["Gym"])
        make_property(title="none", amenities=[])

        results, total = _search(test_db, amenities=["Gym", "Pool"])
        assert total == 1
        assert results[0].title == "both"

        assert _search(test_db, amenities=["Gym"])[1] == 2
        assert _search(test_db, amenities=[])[1] == 3

    def test_inactive_excluded_unless_admin(self, test_db, make_property):
        make_property()
        make_property(is_active=False)

        assert _search(test_db)[1] == 1
        assert _search(test_db, include_inactive=True)[1] == 2

    def test_default_sort_newest_first(self, test_db, make_property):
        older = make_property()
        newer = make_property()

        results, _ = _search(test_db)

        assert [p.id for p in results] == [newer.id, older.id]

    def test_unknown_sort_key_falls_back_to_created_at(self, test_db, make_property):
        first = make_property(price=9000000)
        second = make_property(price=1000000)

        params = PropertySearchParams(sort_by="title; DROP TABLE properties", sort_order="asc")
        assert params.sort_by == SortField.CREATED_AT

        results, _ = PropertyRepository().search(test_db, params)
        assert [p.id for p in results] == [first.id, second.id]

    def test_sort_by_view_count(self, test_db, make_property):
        quiet = make_property(view_count=1)
        popular = make_property(view_count=50)

        results, _ = _search(test_db, sort_by="viewCount", sort_order="desc")

        assert [p.id for p in results] == [popular.id, quiet.id]

    def test_ties_break_on_id(self, test_db, make_property):
        same_time = datetime(2026, 3, 1, tzinfo=timezone.utc)
        a = make_property(created_at=same_time)
        b = make_property(created_at=same_time)

        asc, _ = _search(test_db, sort_order="asc")
        desc, _ = _search(test_db, sort_order="desc")

        assert [p.id for p in asc] == [a.id, b.id]
        assert [p.id for p in desc] == [b.id, a.id]


class TestPropertyQueries:
    """Tests for fixed listing queries."""

    def test_get_active_hides_soft_deleted(self, test_db, make_property):
        listing = make_property(is_active=False)
        repo = PropertyRepository()

        assert repo.get_active(test_db, listing.id) is None
        assert repo.get_by_id(test_db, listing.id) is not None

    def test_get_featured(self, test_db, make_property):
        old = make_property(is_featured=True)
        new = make_property(is_featured=True)
        make_property(is_featured=False)
        make_property(is_featured=True, is_active=False)

        featured = PropertyRepository().get_featured(test_db)
        assert [p.id for p in featured] == [new.id, old.id]

        assert len(PropertyRepository().get_featured(test_db, limit=1)) == 1

    def test_suggest_locations(self, test_db, make_property):
        make_property(location="Andheri West", city="Mumbai", view_count=10)
        make_property(location="Andheri West", city="Mumbai", view_count=5)
        make_property(location="Andheri East", city="Mumbai", view_count=20)
        make_property(location="Baner", city="Pune")
        make_property(location="Andheri Hidden", city="Mumbai", is_active=False)

        suggestions = PropertyRepository().suggest_locations(test_db, "andheri")

        assert suggestions == [
            {"value": "Andheri East", "label": "Andheri East, Mumbai"},
            {"value": "Andheri West", "label": "Andheri West, Mumbai"},
        ]


class TestViewCounting:
    """Tests for PropertyRepository.record_view."""

    def test_record_view_increments(self, test_db, make_property):
        listing = make_property(view_count=3)

        viewed = PropertyRepository().record_view(test_db, listing.id)
        test_db.commit()

        assert viewed.view_count == 4

    def test_record_view_ignores_inactive_and_missing(self, test_db, make_property):
        listing = make_property(is_active=False)
        repo = PropertyRepository()

        assert repo.record_view(test_db, listing.id) is None
        assert repo.record_view(test_db, 9999) is None

    def test_two_stale_sessions_count_two_views(self, tmp_path):
        """Both increments land even when each session read the old value."""
        engine = create_engine(f"sqlite:///{tmp_path / 'views.db'}")
        Base.metadata.create_all(engine)
        Session = sessionmaker(bind=engine, expire_on_commit=False)

        with Session() as setup:
            listing = Property(
                title="Loft", property_type="apartment", price=5000000, area=700,
                location="Lower Parel", city="Mumbai", state="Maharashtra",
            )
            setup.add(listing)
            setup.commit()
            listing_id = listing.id

        repo = PropertyRepository()
        first, second = Session(), Session()
        try:
            assert first.get(Property, listing_id).view_count == 0
            assert second.get(Property, listing_id).view_count == 0

            repo.record_view(first, listing_id)
            first.commit()
            viewed = repo.record_view(second, listing_id)
            second.commit()

            assert viewed.view_count == 2
        finally:
            first.close()
            second.close()

        with Session() as check:
            assert check.get(Property, listing_id).view_count == 2
        engine.dispose()

    def test_concurrent_views_are_not_lost(self, tmp_path):
        """Views recorded from parallel threads all land."""
        engine = create_engine(
            f"sqlite:///{tmp_path / 'concurrent.db'}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        Base.metadata.create_all(engine)
        Session = sessionmaker(bind=engine, expire_on_commit=False)

        with Session() as setup:
            listing = Property(
                title="Loft", property_type="apartment", price=5000000, area=700,
                location="Lower Parel", city="Mumbai", state="Maharashtra",
            )
            setup.add(listing)
            setup.commit()
            listing_id = listing.id

        def view_repeatedly(times):
            repo = PropertyRepository()
            for _ in range(times):
                with Session() as session:
                    repo.record_view(session, listing_id)
                    session.commit()

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [pool.submit(view_repeatedly, 10) for _ in range(4)]
            for future in futures:
                future.result()

        with Session() as check:
            assert check.get(Property, listing_id).view_count == 40
        engine.dispose()


class TestSoftDelete:
    """Tests for PropertyRepository.soft_delete."""

    def test_soft_delete_keeps_row(self, test_db, make_property):
        listing = make_property()
        repo = PropertyRepository()

        assert repo.soft_delete(test_db, listing.id) is True
        test_db.commit()

        assert repo.get_active(test_db, listing.id) is None
        assert _search(test_db)[1] == 0
        stored = repo.get_by_id(test_db, listing.id)
        assert stored is not None
        assert stored.is_active is False

    def test_soft_delete_missing(self, test_db):
        assert PropertyRepository().soft_delete(test_db, 404) is False


class TestLeadRepository:
    """Tests for LeadRepository."""

    def _lead(self, test_db, **overrides):
        fields = dict(name="Asha", email="asha@example.com", phone="9876543210")
        fields.update(overrides)
        return LeadRepository().create(test_db, **fields)

    def test_list_newest_first_with_status_filter(self, test_db):
        base = datetime(2026, 5, 1, tzinfo=timezone.utc)
        oldest = self._lead(test_db, created_at=base)
        middle = self._lead(test_db, created_at=base + timedelta(days=1), status=LeadStatus.CONTACTED)
        newest = self._lead(test_db, created_at=base + timedelta(days=2))
        test_db.commit()

        repo = LeadRepository()
        leads, total = repo.list_leads(test_db)
        assert total == 3
        assert [lead.id for lead in leads] == [newest.id, middle.id, oldest.id]

        leads, total = repo.list_leads(test_db, status=LeadStatus.NEW, limit=1)
        assert total == 2
        assert [lead.id for lead in leads] == [newest.id]

    def test_status_moves_freely(self, test_db):
        lead = self._lead(test_db, status=LeadStatus.CLOSED)
        repo = LeadRepository()

        updated = repo.update(test_db, lead.id, status=LeadStatus.NEW)

        assert updated.status == LeadStatus.NEW

    def test_delete_removes_row(self, test_db):
        lead = self._lead(test_db)
        test_db.commit()
        repo = LeadRepository()

        assert repo.delete(test_db, lead.id) is True
        test_db.commit()

        assert repo.get_by_id(test_db, lead.id) is None
        assert repo.delete(test_db, lead.id) is False


class TestAdminRepository:
    """Tests for AdminRepository."""

    def test_create_admin_hashes_password(self, test_db):
        admin = AdminRepository().create_admin(test_db, "ops", "ops@example.com", "s3cret-pass")

        assert admin.password != "s3cret-pass"
        assert verify_password("s3cret-pass", admin.password)

    def test_deactivate_hides_from_active_lookups(self, test_db):
        repo = AdminRepository()
        admin = repo.create_admin(test_db, "ops", "ops@example.com", "s3cret-pass")

        repo.deactivate(test_db, admin.id)

        assert repo.get_active_by_username(test_db, "ops") is None
        assert repo.get_active_by_id(test_db, admin.id) is None
        assert repo.get_by_username(test_db, "ops") is not None

    def test_set_password(self, test_db):
        repo = AdminRepository()
        admin = repo.create_admin(test_db, "ops", "ops@example.com", "old-password")

        repo.set_password(test_db, admin.id, "new-password")

        assert verify_password("new-password", admin.password)
        assert not verify_password("old-password", admin.password)


class TestDashboardStats:
    """Tests for get_dashboard_stats."""

    def test_counts(self, test_db, make_property):
        make_property(view_count=10, is_featured=True)
        make_property(view_count=5)
        make_property(view_count=2, is_active=False)

        repo = LeadRepository()
        repo.create(test_db, name="A", email="a@example.com", phone="9000000001")
        repo.create(test_db, name="B", email="b@example.com", phone="9000000002", status=LeadStatus.CLOSED)
        repo.create(
            test_db, name="C", email="c@example.com", phone="9000000003",
            created_at=datetime.now(timezone.utc) - timedelta(days=30),
        )
        test_db.commit()

        stats = get_dashboard_stats(test_db)

        assert stats["total_properties"] == 3
        assert stats["active_listings"] == 2
        assert stats["featured_listings"] == 1
        assert stats["total_views"] == 17
        assert stats["total_leads"] == 3
        assert stats["new_leads_last_7_days"] == 2
        assert stats["leads_by_status"] == {"new": 2, "contacted": 0, "qualified": 0, "closed": 1}

    def test_empty_database(self, test_db):
        stats = get_dashboard_stats(test_db)

        assert stats["total_properties"] == 0
        assert stats["total_views"] == 0
        assert stats["leads_by_status"]["new"] == 0
