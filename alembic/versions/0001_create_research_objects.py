"""create research_objects table

Revision ID: 0001_create_research_objects
Revises:
Create Date: 2026-10-19 09:00:00.000000

Indexes:
1. GIN (jsonb_path_ops) on the document, serving the Status and Repository
   containment filters
2. GIN full-text index over the document values (english configuration)
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_create_research_objects"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "research_objects",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("document", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("ingested_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.execute(
        "CREATE INDEX ix_research_objects_document_path "
        "ON research_objects USING GIN (document jsonb_path_ops)"
    )
    op.execute(
        "CREATE INDEX ix_research_objects_fulltext "
        "ON research_objects USING GIN (to_tsvector('english'::regconfig, document))"
    )


def downgrade() -> None:
    op.drop_index("ix_research_objects_fulltext", table_name="research_objects")
    op.drop_index("ix_research_objects_document_path", table_name="research_objects")
    op.drop_table("research_objects")
