from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.campushub.constants import ROLE_ADMIN, ROLE_STUDENT


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"
    # AUTOINCREMENT keeps SQLite from handing a deleted user's id to the next account.
    __table_args__ = (Index("idx_users_role", "role"), {"sqlite_autoincrement": True})

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_STUDENT)  # student | admin
    enrollment_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    department: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "enrollmentNumber": self.enrollment_number,
            "department": self.department,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


def owner_summary(user: User | None, *, with_email: bool = False) -> dict | None:
    """Embedded owner reference: {id, name} (plus email for admin views)."""
    if user is None:
        return None
    out = {"id": user.id, "name": user.name}
    if with_email:
        out["email"] = user.email
    return out


class AuditEvent(Base):
    """
    Append-only audit trail event.
    Covers auth, account management, content writes and moderation transitions.
    """

    __tablename__ = "audit_events"
    __table_args__ = (Index("idx_audit_events_action", "action"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    request_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    actor_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    actor_user_email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    action: Mapped[str] = mapped_column(String(128), nullable=False)  # e.g. "lostfound.approve"
    entity_type: Mapped[str | None] = mapped_column(String(128), nullable=True)  # e.g. "LostAndFound"
    entity_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    reason: Mapped[str | None] = mapped_column(String(512), nullable=True)
    metadata_json: Mapped[str | None] = mapped_column(Text, nullable=True)  # small JSON string
    client_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.campushub.modules.notices.models import Notice  # noqa: E402,F401
from app.campushub.modules.events.models import Event  # noqa: E402,F401
from app.campushub.modules.lostfound.models import LostAndFound  # noqa: E402,F401
from app.campushub.modules.feedback.models import Feedback  # noqa: E402,F401
