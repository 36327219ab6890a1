from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.campushub.models import Base, User


class LostAndFound(Base):
    __tablename__ = "lost_and_found_posts"
    __table_args__ = (
        Index("idx_lostfound_type_status_category", "type", "status", "category"),
        Index("idx_lostfound_created_at", "created_at"),
        Index("idx_lostfound_posted_by", "posted_by_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    type: Mapped[str] = mapped_column(String(16), nullable=False)  # lost | found
    item_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="Other")
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    item_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    contact_info: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # pending | approved | rejected | claimed (see app.campushub.lifecycle)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")

    posted_by_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    posted_by: Mapped[User | None] = relationship("User", lazy="joined")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
