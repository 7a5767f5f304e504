"""
Snipnet Backend — Snippet SQLAlchemy Model
============================================

What:  ORM model representing the `snippets` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SqlSnippetStore for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - id: UUID string generated by the API on create (never by the client)
    - user_id: Owner id copied from the authenticated session; immutable
    - title / description / code: Client-editable content
    - created_at / updated_at: UTC with timezone, maintained by the store

    Portable column types (String, Text, DateTime) keep the model usable on
    both PostgreSQL and SQLite.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snipnet.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Snippet(Base):
    """
    A stored code or text fragment owned by one user.

    Query Patterns:
        - Get one: WHERE id = :id → primary key lookup
        - List all: ORDER BY created_at DESC → idx_snippets_created_at
        - List for user: WHERE user_id = :uid → idx_snippets_user_id
    """

    __tablename__ = "snippets"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Server-generated UUID string",
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owner id, taken from the authenticated session",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    code: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this snippet was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this snippet was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_snippets_user_id", "user_id"),
        Index("idx_snippets_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, user_id='{self.user_id}', title='{self.title}')>"
