"""create_documents

Revision ID: 001_create_documents
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_documents'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'documents',
        sa.Column('collection', sa.String(), primary_key=True),
        sa.Column('key', sa.String(), primary_key=True),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=False), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=False), server_default=sa.text("timezone('utc', now())"), nullable=False),
    )


def downgrade():
    op.drop_table('documents')
