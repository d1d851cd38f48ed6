from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from domains.carpark.database.base import Base


class CarParkType(Base):
    """Lookup of car park construction types (e.g. MULTI-STOREY CAR PARK)."""

    __tablename__ = "car_park_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)


class ParkingSystemType(Base):
    """Lookup of parking systems (e.g. ELECTRONIC PARKING)."""

    __tablename__ = "parking_system_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
