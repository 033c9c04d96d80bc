"""create docker environments table

Revision ID: 0001_create_docker
Revises:
Create Date: 2025-06-02 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '0001_create_docker'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'docker',
        sa.Column('name', sa.String(), primary_key=True),
        sa.Column('directory', sa.String(), nullable=False),
        sa.Column('api_url', sa.String(), nullable=False),
        sa.Column('gui_url', sa.String(), nullable=False),
        sa.Column('backoffice_url', sa.String(), nullable=False),
        sa.Column('api_port', sa.Integer(), nullable=False),
        sa.Column('gui_port', sa.Integer(), nullable=False),
        sa.Column('backoffice_port', sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('docker')
