"""Users and the three game session tables.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _session_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create users, mathmode_sessions, snake_sessions and typemaster_sessions."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(20), nullable=True),
        sa.Column("username_normalized", sa.String(20), nullable=True, unique=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("wallet_address", sa.String(255), nullable=True),
        sa.Column("total_games_played", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # --- MathMode ---
    op.create_table(
        "mathmode_sessions",
        *_session_columns(),
        sa.Column("operator", sa.String(1), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False),
        sa.Column("incorrect_answers", sa.Integer(), nullable=False),
        sa.Column("difficulty", sa.Numeric(4, 2), nullable=False),
        sa.Column("digits1", sa.Integer(), nullable=True),
        sa.Column("digits2", sa.Integer(), nullable=True),
    )
    op.create_index("ix_mathmode_sessions_user_id", "mathmode_sessions", ["user_id"])
    op.create_index("ix_mathmode_sessions_operator", "mathmode_sessions", ["operator"])
    op.create_index("ix_mathmode_sessions_created_at", "mathmode_sessions", ["created_at"])

    # --- Snake ---
    op.create_table(
        "snake_sessions",
        *_session_columns(),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("high_score", sa.Integer(), nullable=False),
    )
    op.create_index("ix_snake_sessions_user_id", "snake_sessions", ["user_id"])
    op.create_index("ix_snake_sessions_created_at", "snake_sessions", ["created_at"])

    # --- TypeMaster ---
    op.create_table(
        "typemaster_sessions",
        *_session_columns(),
        sa.Column("lesson_id", sa.String(100), nullable=False),
        sa.Column("wpm", sa.Integer(), nullable=False),
        sa.Column("accuracy", sa.Numeric(5, 2), nullable=False),
        sa.Column("total_keys", sa.Integer(), nullable=False),
        sa.Column("correct_keys", sa.Integer(), nullable=False),
        sa.Column("mistakes", sa.Integer(), nullable=False),
        sa.Column("duration_seconds", sa.Integer(), nullable=False),
        sa.Column("words_completed", sa.Integer(), nullable=False),
        sa.Column("custom_list_name", sa.String(255), nullable=True),
    )
    op.create_index("ix_typemaster_sessions_user_id", "typemaster_sessions", ["user_id"])
    op.create_index("ix_typemaster_sessions_lesson_id", "typemaster_sessions", ["lesson_id"])
    op.create_index("ix_typemaster_sessions_created_at", "typemaster_sessions", ["created_at"])


def downgrade() -> None:
    op.drop_table("typemaster_sessions")
    op.drop_table("snake_sessions")
    op.drop_table("mathmode_sessions")
    op.drop_table("users")
