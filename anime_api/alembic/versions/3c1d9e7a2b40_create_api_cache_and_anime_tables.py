"""Create api_cache and anime tables

Revision ID: 3c1d9e7a2b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1d9e7a2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the TTL result cache and the anime record cache."""
    op.create_table(
        'api_cache',
        sa.Column('key', sa.String(length=255), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('key')
    )
    op.create_index(op.f('ix_api_cache_expires_at'), 'api_cache', ['expires_at'], unique=False)

    op.create_table(
        'anime',
        sa.Column('mal_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('title', sa.String(length=512), nullable=False),
        sa.Column('title_english', sa.String(length=512), nullable=True),
        sa.Column('title_japanese', sa.String(length=512), nullable=True),
        sa.Column('synopsis', sa.Text(), nullable=True),
        sa.Column('small_image_url', sa.String(length=1024), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('large_image_url', sa.String(length=1024), nullable=True),
        sa.Column('score', sa.Float(), nullable=True),
        sa.Column('episodes', sa.Integer(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=True),
        sa.Column('rating', sa.String(length=64), nullable=True),
        sa.Column('popularity', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(length=32), nullable=True),
        sa.Column('source', sa.String(length=64), nullable=True),
        sa.Column('duration', sa.String(length=64), nullable=True),
        sa.Column('genres', sa.JSON(), nullable=False),
        sa.Column('themes', sa.JSON(), nullable=False),
        sa.Column('demographics', sa.JSON(), nullable=False),
        sa.Column('studios', sa.JSON(), nullable=False),
        sa.Column('trailer_url', sa.String(length=512), nullable=True),
        sa.Column('trailer_youtube_id', sa.String(length=64), nullable=True),
        sa.Column('aired_from', sa.String(length=64), nullable=True),
        sa.Column('aired_to', sa.String(length=64), nullable=True),
        sa.Column('aired_text', sa.String(length=255), nullable=True),
        sa.Column('broadcast_day', sa.String(length=32), nullable=True),
        sa.Column('broadcast_time', sa.String(length=16), nullable=True),
        sa.Column('broadcast_timezone', sa.String(length=64), nullable=True),
        sa.Column('broadcast_text', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('mal_id')
    )


def downgrade() -> None:
    """Drop both cache tables."""
    op.drop_table('anime')
    op.drop_index(op.f('ix_api_cache_expires_at'), table_name='api_cache')
    op.drop_table('api_cache')
