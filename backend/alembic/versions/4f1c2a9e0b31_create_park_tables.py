"""Create users, gates, sightings and accommodation tables

Revision ID: 4f1c2a9e0b31
Revises: 
Create Date: 2025-11-20 09:12:41.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '4f1c2a9e0b31'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint("role IN ('admin', 'ranger', 'visitor')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'park_gates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('gate_name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('gate_name'),
    )
    op.create_index(op.f('ix_park_gates_id'), 'park_gates', ['id'], unique=False)

    # Sightings reference gates and users; reads outer-join both
    op.create_table(
        'wildlife_sightings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('gate_id', sa.Integer(), nullable=True),
        sa.Column('animal_type', sa.String(), nullable=False),
        sa.Column('probability', sa.String(length=10), nullable=False),
        sa.Column('confidence', sa.String(length=10), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('reported_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint("probability IN ('high', 'medium', 'low')", name='ck_sightings_probability'),
        sa.CheckConstraint("confidence IN ('confirmed', 'reported', 'suspected')", name='ck_sightings_confidence'),
        sa.ForeignKeyConstraint(['gate_id'], ['park_gates.id']),
        sa.ForeignKeyConstraint(['reported_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_wildlife_sightings_id'), 'wildlife_sightings', ['id'], unique=False)
    op.create_index(op.f('ix_wildlife_sightings_gate_id'), 'wildlife_sightings', ['gate_id'], unique=False)
    op.create_index(op.f('ix_wildlife_sightings_animal_type'), 'wildlife_sightings', ['animal_type'], unique=False)
    op.create_index(op.f('ix_wildlife_sightings_created_at'), 'wildlife_sightings', ['created_at'], unique=False)

    op.create_table(
        'accommodations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('star_rating', sa.Integer(), nullable=True),
        sa.Column('guest_rating', sa.Float(), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=False),
        sa.Column('price_tier', sa.Integer(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('proximity_to_gates', sa.String(), nullable=True),
        sa.Column('contact_info', sa.String(), nullable=True),
        sa.Column('website_url', sa.String(), nullable=True),
        sa.Column('booking_info', sa.String(), nullable=True),
        sa.Column('is_women_owned', sa.Boolean(), nullable=False),
        sa.Column('is_eco_friendly', sa.Boolean(), nullable=False),
        sa.Column('is_family_friendly', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint('star_rating IS NULL OR (star_rating >= 1 AND star_rating <= 5)', name='ck_accommodations_stars'),
        sa.CheckConstraint('price_tier IS NULL OR (price_tier >= 1 AND price_tier <= 4)', name='ck_accommodations_price'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_accommodations_id'), 'accommodations', ['id'], unique=False)
    op.create_index(op.f('ix_accommodations_name'), 'accommodations', ['name'], unique=False)
    op.create_index(op.f('ix_accommodations_type'), 'accommodations', ['type'], unique=False)

    op.create_table(
        'accommodation_amenities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('accommodation_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.ForeignKeyConstraint(['accommodation_id'], ['accommodations.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('accommodation_id', 'name', name='uq_accommodation_amenity'),
    )
    op.create_index(op.f('ix_accommodation_amenities_accommodation_id'), 'accommodation_amenities', ['accommodation_id'], unique=False)
    op.create_index(op.f('ix_accommodation_amenities_name'), 'accommodation_amenities', ['name'], unique=False)

    op.create_table(
        'accommodation_reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('accommodation_id', sa.Integer(), nullable=False),
        sa.Column('guest_name', sa.String(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating'),
        sa.ForeignKeyConstraint(['accommodation_id'], ['accommodations.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_accommodation_reviews_id'), 'accommodation_reviews', ['id'], unique=False)
    op.create_index(op.f('ix_accommodation_reviews_accommodation_id'), 'accommodation_reviews', ['accommodation_id'], unique=False)

    op.create_table(
        'accommodation_images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('accommodation_id', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('caption', sa.String(), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['accommodation_id'], ['accommodations.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_accommodation_images_id'), 'accommodation_images', ['id'], unique=False)
    op.create_index(op.f('ix_accommodation_images_accommodation_id'), 'accommodation_images', ['accommodation_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Children first so foreign keys never dangle
    op.drop_table('accommodation_images')
    op.drop_table('accommodation_reviews')
    op.drop_table('accommodation_amenities')
    op.drop_table('accommodations')
    op.drop_table('wildlife_sightings')
    op.drop_table('park_gates')
    op.drop_table('users')
