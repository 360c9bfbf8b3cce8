"""Create users and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the credential table (`users`) and the owner-scoped `notes` table.
How:   Portable column types (sa.Uuid, DateTime(timezone=True)) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Opaque user identifier embedded in session tokens"),
        sa.Column("email", sa.String(320), nullable=False, comment="Login email, unique and case-sensitive"),
        sa.Column("password_hash", sa.String(255), nullable=False, comment="Salted bcrypt hash of the password"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When the account was registered (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_users_email", "users", ["email"], unique=True)

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Unique note identifier"),
        sa.Column("text", sa.Text(), nullable=False, comment="Note body"),
        sa.Column("owner_id", sa.Uuid(), nullable=False, comment="User that owns this note"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="When the text was last replaced (UTC)",
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    # Serves "this owner's notes, newest first"
    op.create_index(
        "idx_notes_owner_created_at",
        "notes",
        ["owner_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_notes_owner_created_at", table_name="notes")
    op.drop_table("notes")
    op.drop_index("uq_users_email", table_name="users")
    op.drop_table("users")
