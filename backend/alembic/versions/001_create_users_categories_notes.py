"""Create users, categories and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Baseline schema for accounts, categories and notes.
How:   Portable column types (Uuid, DateTime with time zone) so the same
       revision applies to PostgreSQL and SQLite.

Rollback: downgrade() drops all three tables (all data lost).
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
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("username", sa.String(256), nullable=False),
        sa.Column("normalized_username", sa.String(256), nullable=False),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("normalized_email", sa.String(256), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_normalized_username", "users", ["normalized_username"], unique=True)
    op.create_index("ix_users_normalized_email", "users", ["normalized_email"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_categories_user_id"),
    )
    op.create_index("ix_categories_user_id", "categories", ["user_id"])

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content_markdown", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_notes"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_notes_user_id"),
        # No ON DELETE: categories with notes are refused by the handlers
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], name="fk_notes_category_id"),
    )
    op.create_index("idx_notes_user_id", "notes", ["user_id"])
    op.create_index("idx_notes_category_id", "notes", ["category_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_category_id", table_name="notes")
    op.drop_index("idx_notes_user_id", table_name="notes")
    op.drop_table("notes")
    op.drop_index("ix_categories_user_id", table_name="categories")
    op.drop_table("categories")
    op.drop_index("ix_users_normalized_email", table_name="users")
    op.drop_index("ix_users_normalized_username", table_name="users")
    op.drop_table("users")
