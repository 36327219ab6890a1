from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.campushub.models import Base, User


class Notice(Base):
    __tablename__ = "notices"
    __table_args__ = (
        Index("idx_notices_category_active", "category", "is_active"),
        Index("idx_notices_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="General")

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Owner; set at creation, never reassigned
    posted_by_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    posted_by: Mapped[User | None] = relationship("User", lazy="joined")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
