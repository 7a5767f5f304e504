"""Create snippets table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `snippets` table with owner and creation-time indexes.
Rollback: downgrade() drops the table entirely (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the snippets table. See snipnet/models/snippet.py for column docs."""
    op.create_table(
        "snippets",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Server-generated UUID string",
        ),
        sa.Column(
            "user_id",
            sa.String(255),
            nullable=False,
            comment="Owner id, taken from the authenticated session",
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this snippet was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this snippet was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # GET /api/users/{userid}/snippets filters on the owner
    op.create_index("idx_snippets_user_id", "snippets", ["user_id"])
    op.create_index(
        "idx_snippets_created_at",
        "snippets",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop the snippets table. WARNING: all snippet data is lost."""
    op.drop_index("idx_snippets_created_at", table_name="snippets")
    op.drop_index("idx_snippets_user_id", table_name="snippets")
    op.drop_table("snippets")
