"""
Notekeeper Backend - User SQLAlchemy Model
============================================

What:  ORM model for the `users` table (the credential store's records).
Who:   Read and written only through notekeeper.stores.users.UserStore.

Table Design:
    - UUID primary key, generated in Python so SQLite and PostgreSQL behave alike
    - email: unique index; compared exactly as stored (case-sensitive)
    - password_hash: bcrypt output, never the plaintext
    - created_at: UTC timestamp

Users are never updated or deleted by the application.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base, UTCDateTime


class User(Base):
    """A registered account that owns notes."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque user identifier embedded in session tokens",
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Login email, unique and case-sensitive",
    )

    # bcrypt hashes are 60 characters; the extra room covers other encodings
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted bcrypt hash of the password",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the account was registered (UTC)",
    )

    __table_args__ = (
        Index("uq_users_email", "email", unique=True),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
