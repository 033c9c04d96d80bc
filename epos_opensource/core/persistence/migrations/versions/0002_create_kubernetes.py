"""create kubernetes environments table

Revision ID: 0002_create_kubernetes
Revises: 0001_create_docker
Create Date: 2025-06-02 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '0002_create_kubernetes'
down_revision: Union[str, None] = '0001_create_docker'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'kubernetes',
        sa.Column('name', sa.String(), primary_key=True),
        sa.Column('directory', sa.String(), nullable=False),
        sa.Column('context', sa.String(), nullable=False),
        sa.Column('api_url', sa.String(), nullable=False),
        sa.Column('gui_url', sa.String(), nullable=False),
        sa.Column('backoffice_url', sa.String(), nullable=False),
        sa.Column('protocol', sa.String(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('kubernetes')
