"""Documents table

Revision ID: 001_documents
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_documents'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Roles, preferences, announcements, events and notifications share one table
    op.create_table(
        'documents',
        sa.Column('collection', sa.String(), nullable=False),
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('data', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('seq', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('collection', 'id')
    )
    op.create_index('ix_documents_collection_seq', 'documents', ['collection', 'seq'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_documents_collection_seq', table_name='documents')
    op.drop_table('documents')
