"""Create catalog tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Artist-owned records: albums, uploads, events, merchandise and NFT
collections/tokens.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000002'
down_revision: Union[str, None] = '20261019_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create the catalog tables."""
    op.create_table(
        'albums',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('artist_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('genre', sa.String(length=50), nullable=False),
        sa.Column(
            'album_type',
            sa.Enum('album', 'ep', 'single', 'compilation', name='album_type', create_constraint=True),
            nullable=False,
            server_default='album'
        ),
        sa.Column('cover_art_url', sa.String(length=500), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('draft', 'published', name='album_status', create_constraint=True),
            nullable=False,
            server_default='draft'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_albums_artist_id', 'albums', ['artist_id'])
    op.create_index('ix_albums_status', 'albums', ['status'])

    op.create_table(
        'artist_uploads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('artist_id', sa.String(length=64), nullable=False),
        sa.Column('album_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('genre', sa.String(length=50), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('audio_file_url', sa.String(length=500), nullable=False),
        sa.Column('artwork_url', sa.String(length=500), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('file_size', sa.BigInteger(), nullable=True),
        sa.Column('file_format', sa.String(length=20), nullable=True),
        sa.Column(
            'license_type',
            sa.Enum(
                'all_rights_reserved', 'creative_commons', 'public_domain',
                name='license_type', create_constraint=True
            ),
            nullable=False,
            server_default='all_rights_reserved'
        ),
        sa.Column('is_explicit', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('track_number', sa.Integer(), nullable=True),
        sa.Column('play_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column(
            'status',
            sa.Enum('processing', 'draft', 'published', 'failed', name='upload_status', create_constraint=True),
            nullable=False,
            server_default='processing'
        ),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['album_id'],
            ['albums.id'],
            name='fk_artist_uploads_album_id',
            ondelete='SET NULL'
        ),
    )
    op.create_index('ix_artist_uploads_artist_id', 'artist_uploads', ['artist_id'])
    op.create_index('ix_artist_uploads_album_id', 'artist_uploads', ['album_id'])
    op.create_index('ix_artist_uploads_status', 'artist_uploads', ['status'])

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('artist_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('event_type', sa.String(length=50), nullable=False, server_default='concert'),
        sa.Column('event_date', sa.DateTime(), nullable=False),
        sa.Column('genre', sa.String(length=50), nullable=True),
        sa.Column('ticket_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('max_capacity', sa.Integer(), nullable=True),
        sa.Column('current_attendance', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_virtual', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('stream_url', sa.String(length=500), nullable=True),
        sa.Column(
            'age_restriction',
            sa.Enum('all_ages', '18+', '21+', name='age_restriction', create_constraint=True),
            nullable=True
        ),
        sa.Column(
            'status',
            sa.Enum('draft', 'published', 'cancelled', 'completed', name='event_status', create_constraint=True),
            nullable=False,
            server_default='draft'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_events_artist_id', 'events', ['artist_id'])
    op.create_index('ix_events_event_date', 'events', ['event_date'])
    op.create_index('ix_events_status', 'events', ['status'])

    op.create_table(
        'merch_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('artist_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=10), nullable=False, server_default='USD'),
        sa.Column('inventory_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('active', 'inactive', name='merch_status', create_constraint=True),
            nullable=False,
            server_default='active'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_merch_items_artist_id', 'merch_items', ['artist_id'])
    op.create_index('ix_merch_items_status', 'merch_items', ['status'])

    op.create_table(
        'nft_collections',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('artist_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('symbol', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('contract_address', sa.String(length=42), nullable=True),
        sa.Column('network', sa.String(length=32), nullable=False, server_default='base'),
        sa.Column('max_supply', sa.Integer(), nullable=True),
        sa.Column('current_supply', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('royalty_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column(
            'status',
            sa.Enum('active', 'inactive', name='collection_status', create_constraint=True),
            nullable=False,
            server_default='active'
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_nft_collections_artist_id', 'nft_collections', ['artist_id'])
    op.create_index('ix_nft_collections_status', 'nft_collections', ['status'])

    op.create_table(
        'nft_tokens',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('collection_id', sa.Integer(), nullable=False),
        sa.Column('token_id', sa.String(length=78), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('metadata_uri', sa.String(length=500), nullable=True),
        sa.Column('creator_address', sa.String(length=42), nullable=False),
        sa.Column('owner_address', sa.String(length=42), nullable=False),
        sa.Column('track_id', sa.String(length=64), nullable=True),
        sa.Column('price', sa.Numeric(precision=20, scale=6), nullable=True),
        sa.Column('is_for_sale', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('royalty_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['collection_id'],
            ['nft_collections.id'],
            name='fk_nft_tokens_collection_id',
            ondelete='CASCADE'
        ),
        sa.UniqueConstraint('collection_id', 'token_id', name='uq_nft_tokens_collection_token'),
    )
    op.create_index('ix_nft_tokens_collection_id', 'nft_tokens', ['collection_id'])
    op.create_index('ix_nft_tokens_owner_address', 'nft_tokens', ['owner_address'])
    op.create_index('ix_nft_tokens_is_for_sale', 'nft_tokens', ['is_for_sale'])


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_index('ix_nft_tokens_is_for_sale', table_name='nft_tokens')
    op.drop_index('ix_nft_tokens_owner_address', table_name='nft_tokens')
    op.drop_index('ix_nft_tokens_collection_id', table_name='nft_tokens')
    op.drop_table('nft_tokens')

    op.drop_index('ix_nft_collections_status', table_name='nft_collections')
    op.drop_index('ix_nft_collections_artist_id', table_name='nft_collections')
    op.drop_table('nft_collections')

    op.drop_index('ix_merch_items_status', table_name='merch_items')
    op.drop_index('ix_merch_items_artist_id', table_name='merch_items')
    op.drop_table('merch_items')

    op.drop_index('ix_events_status', table_name='events')
    op.drop_index('ix_events_event_date', table_name='events')
    op.drop_index('ix_events_artist_id', table_name='events')
    op.drop_table('events')

    op.drop_index('ix_artist_uploads_status', table_name='artist_uploads')
    op.drop_index('ix_artist_uploads_album_id', table_name='artist_uploads')
    op.drop_index('ix_artist_uploads_artist_id', table_name='artist_uploads')
    op.drop_table('artist_uploads')

    op.drop_index('ix_albums_status', table_name='albums')
    op.drop_index('ix_albums_artist_id', table_name='albums')
    op.drop_table('albums')
