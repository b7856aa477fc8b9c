"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_list = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, comment='Timestamp when record was created'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, comment='Timestamp when record was last updated'),
    ]


def upgrade() -> None:
    # Listings
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('property_type', sa.String(length=50), nullable=False, comment='apartment, villa, plot, commercial'),
        sa.Column('bhk_type', sa.String(length=20), nullable=True, comment='Bedroom configuration label (1BHK, 2BHK, 3BHK, 4+BHK)'),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('price_per_sqft', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('area', sa.Integer(), nullable=False, comment='Area in square feet'),
        sa.Column('location', sa.String(length=255), nullable=False, comment='Locality'),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=100), nullable=False),
        sa.Column('pincode', sa.String(length=10), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('builder_name', sa.String(length=255), nullable=True),
        sa.Column('project_status', sa.String(length=50), nullable=True, comment='ongoing, completed, ready'),
        sa.Column('possession_status', sa.String(length=50), nullable=True, comment='ready, under-construction'),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column('floor', sa.Integer(), nullable=True),
        sa.Column('total_floors', sa.Integer(), nullable=True),
        sa.Column('facing', sa.String(length=50), nullable=True),
        sa.Column('furnishing', sa.String(length=50), nullable=True, comment='furnished, semi-furnished, unfurnished'),
        sa.Column('parking_spaces', sa.Integer(), server_default='0', nullable=False),
        sa.Column('balconies', sa.Integer(), server_default='0', nullable=False),
        sa.Column('amenities', json_list, server_default='[]', nullable=False),
        sa.Column('images', json_list, server_default='[]', nullable=False),
        sa.Column('virtual_tour_url', sa.Text(), nullable=True),
        sa.Column('featured_image_url', sa.Text(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False, comment='Soft delete flag - False indicates deleted record'),
        sa.CheckConstraint('price >= 0', name='check_price_non_negative'),
        sa.CheckConstraint('price_per_sqft >= 0', name='check_price_per_sqft_non_negative'),
        sa.CheckConstraint('view_count >= 0', name='check_view_count_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_properties_city', 'properties', ['city'])
    op.create_index('idx_properties_property_type', 'properties', ['property_type'])
    op.create_index('idx_properties_price', 'properties', ['price'])
    op.create_index('idx_properties_is_active', 'properties', ['is_active'])
    op.create_index('idx_properties_featured', 'properties', ['is_featured', 'is_active'])

    # Inquiries
    op.create_table(
        'leads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('source', sa.String(length=50), server_default='website', nullable=False, comment='website, phone, whatsapp'),
        sa.Column('status', sa.String(length=20), server_default='new', nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_leads_status', 'leads', ['status'])
    op.create_index('idx_leads_created_at', 'leads', ['created_at'])

    # Operator accounts
    op.create_table(
        'admins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='admin', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )


def downgrade() -> None:
    op.drop_table('admins')
    op.drop_index('idx_leads_created_at', table_name='leads')
    op.drop_index('idx_leads_status', table_name='leads')
    op.drop_table('leads')
    op.drop_index('idx_properties_featured', table_name='properties')
    op.drop_index('idx_properties_is_active', table_name='properties')
    op.drop_index('idx_properties_price', table_name='properties')
    op.drop_index('idx_properties_property_type', table_name='properties')
    op.drop_index('idx_properties_city', table_name='properties')
    op.drop_table('properties')
