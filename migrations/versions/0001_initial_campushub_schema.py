"""initial campushub schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def _owner(column: str) -> sa.Column:
    return sa.Column(column, sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)


def upgrade() -> None:
    """Create users, audit_events, notices, events, lost_and_found_posts and feedback."""
    # Check if tables already exist (idempotent)
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = set(inspector.get_table_names())

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(50), nullable=False),
            sa.Column("email", sa.String(320), nullable=False, unique=True),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column("role", sa.String(16), nullable=False, server_default="student"),
            sa.Column("enrollment_number", sa.String(64), nullable=True),
            sa.Column("department", sa.String(128), nullable=True),
            *_timestamps(),
            sqlite_autoincrement=True,
        )
        op.create_index("idx_users_role", "users", ["role"])

    if "audit_events" not in existing_tables:
        op.create_table(
            "audit_events",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column("request_id", sa.String(64), nullable=True),
            _owner("actor_user_id"),
            sa.Column("actor_user_email", sa.String(320), nullable=True),
            sa.Column("action", sa.String(128), nullable=False),
            sa.Column("entity_type", sa.String(128), nullable=True),
            sa.Column("entity_id", sa.String(128), nullable=True),
            sa.Column("reason", sa.String(512), nullable=True),
            sa.Column("metadata_json", sa.Text(), nullable=True),
            sa.Column("client_ip", sa.String(64), nullable=True),
        )
        op.create_index("idx_audit_events_action", "audit_events", ["action"])

    if "notices" not in existing_tables:
        op.create_table(
            "notices",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(200), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("category", sa.String(32), nullable=False, server_default="General"),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("expiry_date", sa.Date(), nullable=True),
            _owner("posted_by_user_id"),
            *_timestamps(),
        )
        op.create_index("idx_notices_category_active", "notices", ["category", "is_active"])
        op.create_index("idx_notices_created_at", "notices", ["created_at"])

    if "events" not in existing_tables:
        op.create_table(
            "events",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(200), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("event_date", sa.Date(), nullable=False),
            sa.Column("time", sa.String(64), nullable=False),
            sa.Column("venue", sa.String(255), nullable=False),
            sa.Column("organizer", sa.String(255), nullable=True),
            sa.Column("category", sa.String(32), nullable=False, server_default="Cultural"),
            _owner("posted_by_user_id"),
            *_timestamps(),
        )
        op.create_index("idx_events_date_category", "events", ["event_date", "category"])
        op.create_index("idx_events_created_at", "events", ["created_at"])

    if "lost_and_found_posts" not in existing_tables:
        op.create_table(
            "lost_and_found_posts",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("type", sa.String(16), nullable=False),
            sa.Column("item_name", sa.String(100), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("category", sa.String(32), nullable=False, server_default="Other"),
            sa.Column("location", sa.String(255), nullable=True),
            sa.Column("item_date", sa.Date(), nullable=True),
            sa.Column("contact_info", sa.String(255), nullable=False),
            sa.Column("image_url", sa.String(2048), nullable=True),
            sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
            _owner("posted_by_user_id"),
            *_timestamps(),
        )
        op.create_index(
            "idx_lostfound_type_status_category", "lost_and_found_posts", ["type", "status", "category"]
        )
        op.create_index("idx_lostfound_created_at", "lost_and_found_posts", ["created_at"])
        op.create_index("idx_lostfound_posted_by", "lost_and_found_posts", ["posted_by_user_id"])

    if "feedback" not in existing_tables:
        op.create_table(
            "feedback",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("subject", sa.String(200), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("category", sa.String(32), nullable=False, server_default="Other"),
            sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
            _owner("submitted_by_user_id"),
            sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
            *_timestamps(),
        )
        op.create_index("idx_feedback_category_status", "feedback", ["category", "status"])
        op.create_index("idx_feedback_created_at", "feedback", ["created_at"])


def downgrade() -> None:
    """Drop all campushub tables (children first)."""
    for table in ("feedback", "lost_and_found_posts", "events", "notices", "audit_events", "users"):
        op.drop_table(table)
