from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from domains.carpark.database.base import Base
from domains.carpark.models.reference import CarParkType, ParkingSystemType


class Carpark(Base):
    """A car park facility keyed externally by ``car_park_no``."""

    __tablename__ = "carparks"

    id: Mapped[UUID] = mapped_column(default=uuid4, primary_key=True)
    car_park_no: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(String(255))
    x_coord: Mapped[float | None] = mapped_column(Float)
    y_coord: Mapped[float | None] = mapped_column(Float)
    short_term_parking: Mapped[str | None] = mapped_column(String(64))
    free_parking: Mapped[str | None] = mapped_column(String(64), index=True)
    night_parking: Mapped[bool | None] = mapped_column(Boolean, index=True)
    car_park_decks: Mapped[int | None] = mapped_column(Integer)
    gantry_height: Mapped[float | None] = mapped_column(Float, index=True)
    car_park_basement: Mapped[bool | None] = mapped_column(Boolean)
    car_park_type_id: Mapped[int] = mapped_column(
        ForeignKey(CarParkType.id),
        nullable=False,
        index=True,
    )
    parking_system_type_id: Mapped[int] = mapped_column(
        ForeignKey(ParkingSystemType.id),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    car_park_type: Mapped[CarParkType] = relationship(lazy="joined")
    parking_system_type: Mapped[ParkingSystemType] = relationship(lazy="joined")
