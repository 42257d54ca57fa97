"""Create players, player_aliases, payments and memberships

Revision ID: 4e1c9a7b2d30
Revises:
Create Date: 2026-10-19 12:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers, used by Alembic
revision: str = '4e1c9a7b2d30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        # PDGA numbers are unique when present; NULLs don't collide
        sa.Column('registry_number', sa.String(20), nullable=True, unique=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('idx_players_full_name', 'players', ['full_name'])

    op.create_table(
        'player_aliases',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'player_id', sa.Integer(),
            sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('alias', sa.String(255), nullable=False),
        sa.Column('source', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('player_id', 'alias', name='uq_player_alias'),
    )
    op.create_index('idx_player_aliases_alias', 'player_aliases', ['alias'])

    op.create_table(
        'payments',
        sa.Column('confirmation_code', sa.String(100), primary_key=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('transaction_date', sa.Date(), nullable=True),
        sa.Column('amount', sa.String(50), nullable=True),
        sa.Column('source', sa.String(100), nullable=True),
        sa.Column('detail', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'memberships',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'player_id', sa.Integer(),
            sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('valid_from', sa.Date(), nullable=False),
        sa.Column('valid_until', sa.Date(), nullable=False),
        sa.Column(
            'payment_confirmation_code', sa.String(100),
            sa.ForeignKey('payments.confirmation_code'), nullable=True, unique=True,
        ),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(
        'idx_memberships_player_range',
        'memberships',
        ['player_id', 'valid_from', 'valid_until'],
    )


def downgrade() -> None:
    op.drop_index('idx_memberships_player_range', table_name='memberships')
    op.drop_table('memberships')
    op.drop_table('payments')
    op.drop_index('idx_player_aliases_alias', table_name='player_aliases')
    op.drop_table('player_aliases')
    op.drop_index('idx_players_full_name', table_name='players')
    op.drop_table('players')
