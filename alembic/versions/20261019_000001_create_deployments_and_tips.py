"""Create contract_deployments and artist_tips tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Deployment receipts written by the deploy-contracts endpoint and the artist
tips ledger.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the contract_deployments and artist_tips tables."""
    op.create_table(
        'contract_deployments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('contract_name', sa.String(length=64), nullable=False),
        sa.Column('contract_address', sa.String(length=42), nullable=False),
        sa.Column('transaction_hash', sa.String(length=66), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=False),
        sa.Column('gas_used', sa.BigInteger(), nullable=False),
        sa.Column('deployer_address', sa.String(length=42), nullable=False),
        sa.Column('network', sa.String(length=32), nullable=False, server_default='base'),
        sa.Column('deployed_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('transaction_hash', name='uq_contract_deployments_transaction_hash'),
    )
    op.create_index('ix_contract_deployments_contract_name', 'contract_deployments', ['contract_name'])
    op.create_index(
        'ix_contract_deployments_network_deployed_at',
        'contract_deployments',
        ['network', 'deployed_at']
    )

    op.create_table(
        'artist_tips',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('artist_id', sa.String(length=64), nullable=False),
        sa.Column('artist_name', sa.String(length=100), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=6), nullable=False),
        sa.Column(
            'currency',
            sa.Enum('ETH', 'BASE', 'SOL', 'USDC', 'DAI', name='tip_currency', create_constraint=True),
            nullable=False
        ),
        sa.Column(
            'status',
            sa.Enum('pending', 'confirmed', 'failed', name='tip_status', create_constraint=True),
            nullable=False,
            server_default='pending'
        ),
        sa.Column('transaction_hash', sa.String(length=128), nullable=True),
        sa.Column('message', sa.String(length=280), nullable=True),
        sa.Column('wallet_address', sa.String(length=64), nullable=False),
        sa.Column('artist_wallet_address', sa.String(length=64), nullable=True),
        sa.Column('network', sa.String(length=32), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('confirmed_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    # Create indexes for common queries
    op.create_index('ix_artist_tips_user_id', 'artist_tips', ['user_id'])
    op.create_index('ix_artist_tips_artist_id', 'artist_tips', ['artist_id'])
    op.create_index('ix_artist_tips_status', 'artist_tips', ['status'])
    op.create_index('ix_artist_tips_transaction_hash', 'artist_tips', ['transaction_hash'])


def downgrade() -> None:
    """Drop the artist_tips and contract_deployments tables."""
    op.drop_index('ix_artist_tips_transaction_hash', table_name='artist_tips')
    op.drop_index('ix_artist_tips_status', table_name='artist_tips')
    op.drop_index('ix_artist_tips_artist_id', table_name='artist_tips')
    op.drop_index('ix_artist_tips_user_id', table_name='artist_tips')
    op.drop_table('artist_tips')

    op.drop_index('ix_contract_deployments_network_deployed_at', table_name='contract_deployments')
    op.drop_index('ix_contract_deployments_contract_name', table_name='contract_deployments')
    op.drop_table('contract_deployments')
