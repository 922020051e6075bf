"""
Storage entity for parking spot registrations.

``ParkingSpot`` is what the repository reads and writes; the API
schemas in ``schemas.parking_spot`` are mapped to and from it
explicitly.  Lookups by id return either ``SpotFound`` or
``SpotNotFound`` so callers have to handle the missing case.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Dict, Union
from uuid import UUID


@dataclass
class ParkingSpot:
    id: UUID
    parking_spot_number: str
    license_plate_car: str
    model_car: str
    brand_car: str
    color_car: str
    responsible_name: str
    apartment: str
    block: str
    registration_date: datetime

    def to_row(self) -> Dict[str, Any]:
        """Return column values ready to be bound to an SQL statement."""
        return {
            "id": str(self.id),
            "parking_spot_number": self.parking_spot_number,
            "license_plate_car": self.license_plate_car,
            "model_car": self.model_car,
            "brand_car": self.brand_car,
            "color_car": self.color_car,
            "responsible_name": self.responsible_name,
            "apartment": self.apartment,
            "block": self.block,
            "registration_date": format_timestamp(self.registration_date),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "ParkingSpot":
        return cls(
            id=UUID(row["id"]),
            parking_spot_number=row["parking_spot_number"],
            license_plate_car=row["license_plate_car"],
            model_car=row["model_car"],
            brand_car=row["brand_car"],
            color_car=row["color_car"],
            responsible_name=row["responsible_name"],
            apartment=row["apartment"],
            block=row["block"],
            registration_date=datetime.fromisoformat(row["registration_date"]),
        )


def format_timestamp(value: datetime) -> str:
    """Serialise ``value`` as a fixed-width UTC ISO‑8601 string.

    Naive datetimes are taken to be UTC.  The fixed width keeps textual
    ``ORDER BY`` consistent with chronological order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


@dataclass(frozen=True)
class SpotFound:
    spot: ParkingSpot


@dataclass(frozen=True)
class SpotNotFound:
    id: UUID


SpotLookup = Union[SpotFound, SpotNotFound]


# Column names in declaration order; also the set of sortable properties.
COLUMNS = tuple(f.name for f in fields(ParkingSpot))
