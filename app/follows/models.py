# app/follows/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    Integer,
    DateTime,
    func,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from app.db.base import Base


class Follow(Base):
    """
    Arista dirigida follower → following.
    Una sola por par ordenado, y nadie se sigue a sí mismo.
    """
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follow"),
        CheckConstraint("follower_id <> following_id", name="ck_follow_not_self"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    follower_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    following_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
