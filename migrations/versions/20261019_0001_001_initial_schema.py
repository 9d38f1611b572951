"""Initial schema - tournaments table

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the tournaments table: lifecycle status, owner, entrant list and
generated bracket (JSON), plus the version counter used for optimistic
concurrency on bracket updates.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ### Tournaments table ###
    op.create_table(
        'tournaments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('owner_id', sa.String(64), nullable=False),
        sa.Column('max_entrants', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), server_default='not_started'),
        sa.Column('bracket_size', sa.Integer(), nullable=True),
        sa.Column('champion_entrant_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('entrants_json', sa.Text(), nullable=True),
        sa.Column('bracket_json', sa.Text(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
    )

    op.create_index('ix_tournaments_owner_id', 'tournaments', ['owner_id'])
    op.create_index('ix_tournaments_status', 'tournaments', ['status'])


def downgrade() -> None:
    op.drop_index('ix_tournaments_status', 'tournaments')
    op.drop_index('ix_tournaments_owner_id', 'tournaments')
    op.drop_table('tournaments')
