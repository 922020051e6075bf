"""
SQLite persistence for parking spots.

The repository knows nothing about HTTP or the service layer.  Writes
accept an optional connection so that a caller can group several
statements under one ``Database.transaction``; without one, each call
opens and closes its own connection.

Uniqueness of license plate, spot number and apartment/block is
enforced by unique indices (see ``core.db``).  A violation surfaces as
``ConflictError`` with the same message the API uses for its upfront
checks, so a race between two concurrent creates still ends in a 409.

All queries use parameterized statements.  Sort columns are checked
against ``COLUMNS`` before being interpolated into ``ORDER BY``.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import ContextManager, Iterator, Optional
from uuid import UUID

from parking_control_api.app.core.db import Database
from parking_control_api.app.core.exceptions import (
    APARTMENT_BLOCK_IN_USE,
    LICENSE_PLATE_IN_USE,
    PARKING_SPOT_IN_USE,
    ConflictError,
    ValidationError,
)
from parking_control_api.app.models.page import ASC, DESC, Page, PageRequest
from parking_control_api.app.models.parking_spot import (
    COLUMNS,
    ParkingSpot,
    SpotFound,
    SpotLookup,
    SpotNotFound,
)

logger = logging.getLogger(__name__)

# Checked in order against the text of an IntegrityError.
_UNIQUE_VIOLATIONS = (
    ("parking_spots.license_plate_car", LICENSE_PLATE_IN_USE),
    ("parking_spots.parking_spot_number", PARKING_SPOT_IN_USE),
    ("parking_spots.apartment", APARTMENT_BLOCK_IN_USE),
)

_INSERT = """
    INSERT INTO parking_spots (
        id, parking_spot_number, license_plate_car, model_car, brand_car,
        color_car, responsible_name, apartment, block, registration_date
    )
    VALUES (
        :id, :parking_spot_number, :license_plate_car, :model_car, :brand_car,
        :color_car, :responsible_name, :apartment, :block, :registration_date
    )
"""

_UPDATE = """
    UPDATE parking_spots SET
        parking_spot_number = :parking_spot_number,
        license_plate_car = :license_plate_car,
        model_car = :model_car,
        brand_car = :brand_car,
        color_car = :color_car,
        responsible_name = :responsible_name,
        apartment = :apartment,
        block = :block,
        registration_date = :registration_date
    WHERE id = :id
"""


def conflict_message(error: sqlite3.IntegrityError) -> Optional[str]:
    """Return the API message for a unique index violation, if it is one."""
    text = str(error)
    if "UNIQUE constraint failed" not in text:
        return None
    for column, message in _UNIQUE_VIOLATIONS:
        if column in text:
            return message
    return None


class ParkingSpotRepository:
    """Data access for the ``parking_spots`` table."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def transaction(self) -> ContextManager[sqlite3.Connection]:
        return self.database.transaction()

    @contextmanager
    def _use(self, conn: Optional[sqlite3.Connection]) -> Iterator[sqlite3.Connection]:
        if conn is not None:
            yield conn
            return
        with self.database.connection() as own:
            yield own

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, spot: ParkingSpot, conn: Optional[sqlite3.Connection] = None) -> ParkingSpot:
        """Insert ``spot`` or replace the stored record with the same id."""
        with self._use(conn) as c:
            try:
                row = spot.to_row()
                if c.execute(_UPDATE, row).rowcount == 0:
                    c.execute(_INSERT, row)
            except sqlite3.IntegrityError as exc:
                message = conflict_message(exc)
                if message is None:
                    raise
                logger.debug("Unique index rejected parking spot %s: %s", spot.id, exc)
                raise ConflictError(message) from exc
        return spot

    def delete(self, spot: ParkingSpot, conn: Optional[sqlite3.Connection] = None) -> None:
        with self._use(conn) as c:
            c.execute("DELETE FROM parking_spots WHERE id = ?", (str(spot.id),))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_by_id(self, spot_id: UUID) -> SpotLookup:
        with self._use(None) as c:
            row = c.execute(
                "SELECT * FROM parking_spots WHERE id = ?", (str(spot_id),)
            ).fetchone()
        if row is None:
            return SpotNotFound(spot_id)
        return SpotFound(ParkingSpot.from_row(row))

    def exists_by_license_plate_car(self, license_plate_car: str) -> bool:
        return self._exists("license_plate_car = ?", (license_plate_car,))

    def exists_by_parking_spot_number(self, parking_spot_number: str) -> bool:
        return self._exists("parking_spot_number = ?", (parking_spot_number,))

    def exists_by_apartment_and_block(self, apartment: str, block: str) -> bool:
        return self._exists("apartment = ? AND block = ?", (apartment, block))

    def _exists(self, where: str, params: tuple) -> bool:
        with self._use(None) as c:
            row = c.execute(
                f"SELECT EXISTS(SELECT 1 FROM parking_spots WHERE {where}) AS found",
                params,
            ).fetchone()
        return bool(row["found"])

    def find_all(self, request: PageRequest) -> Page[ParkingSpot]:
        """Return one page of a full scan ordered by ``request.sort``.

        ``id`` is appended as a final tiebreaker so pages are stable.
        Raises ``ValidationError`` for an unknown sort property or
        direction.
        """
        order_by = []
        for order in request.sort:
            if order.property not in COLUMNS:
                raise ValidationError(f"Unknown sort property: {order.property}")
            if order.direction not in (ASC, DESC):
                raise ValidationError(f"Unknown sort direction: {order.direction}")
            order_by.append(f"{order.property} {order.direction}")
        if not any(order.property == "id" for order in request.sort):
            order_by.append("id ASC")

        with self._use(None) as c:
            total = c.execute("SELECT COUNT(*) AS total FROM parking_spots").fetchone()["total"]
            rows = c.execute(
                f"SELECT * FROM parking_spots ORDER BY {', '.join(order_by)} LIMIT ? OFFSET ?",
                (request.size, request.offset),
            ).fetchall()
        return Page(
            content=[ParkingSpot.from_row(row) for row in rows],
            total_elements=total,
            request=request,
        )
