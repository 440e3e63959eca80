# @TASK P0-T0.5 - Initial catalog schema

"""Create users, time_signatures, tags, notes and note_tags tables.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Apply schema migrations."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "time_signatures",
        sa.Column("id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(10), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tags_name", "tags", ["name"], unique=False)

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer, nullable=False),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("time_signature_id", sa.Integer, nullable=True),
        sa.Column("pdf_url", sa.Text, nullable=True),
        sa.Column("audio_url", sa.Text, nullable=True),
        sa.Column("cover_image_url", sa.Text, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("difficulty", sa.String(20), nullable=True),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["time_signature_id"], ["time_signatures.id"], ondelete="SET NULL"),
        sa.CheckConstraint("views >= 0", name="ck_notes_views_non_negative"),
    )
    op.create_index("idx_notes_user_id", "notes", ["user_id"], unique=False)
    op.create_index("idx_notes_time_signature_id", "notes", ["time_signature_id"], unique=False)
    op.create_index("idx_notes_created_at", "notes", ["created_at"], unique=False)

    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.Integer, nullable=False),
        sa.Column("tag_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("note_id", "tag_id"),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_note_tags_tag_id", "note_tags", ["tag_id"], unique=False)


def downgrade() -> None:
    """Revert schema migrations."""
    op.drop_index("idx_note_tags_tag_id", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_index("idx_notes_time_signature_id", table_name="notes")
    op.drop_index("idx_notes_user_id", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_tags_name", table_name="tags")
    op.drop_table("tags")
    op.drop_table("time_signatures")
    op.drop_table("users")
