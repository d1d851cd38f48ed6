from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from domains.carpark.database.base import Base
from domains.carpark.models.carpark import Carpark


class User(Base):
    """Read side of accounts provisioned by the auth service."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(default=uuid4, primary_key=True)
    username: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class UserFavoriteCarpark(Base):
    __tablename__ = "user_favorite_carparks"
    __table_args__ = (
        UniqueConstraint("user_id", "carpark_id", name="uq_user_favorite_carpark"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(User.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    carpark_id: Mapped[UUID] = mapped_column(
        ForeignKey(Carpark.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
