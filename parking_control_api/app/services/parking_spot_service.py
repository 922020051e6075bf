"""
Service layer for parking spot registrations.

The service is a thin pass-through to ``ParkingSpotRepository``.  Its
one contract of its own is that ``save`` and ``delete`` run inside a
single database transaction: if the write fails nothing is committed.
Lookups and existence checks are read-only and run without one.

Uniqueness rules are checked by the API layer before calling ``save``;
the storage engine enforces them again and ``save`` propagates the
resulting ``ConflictError``.
"""

from __future__ import annotations

import logging
from uuid import UUID

from parking_control_api.app.models.page import Page, PageRequest
from parking_control_api.app.models.parking_spot import ParkingSpot, SpotLookup
from parking_control_api.app.repositories.parking_spot_repository import ParkingSpotRepository

logger = logging.getLogger(__name__)


class ParkingSpotService:
    """Service class for managing parking spots."""

    def __init__(self, repository: ParkingSpotRepository) -> None:
        self.repository = repository

    def save(self, spot: ParkingSpot) -> ParkingSpot:
        with self.repository.transaction() as conn:
            saved = self.repository.save(spot, conn=conn)
        logger.info("Saved parking spot %s (spot %s)", spot.id, spot.parking_spot_number)
        return saved

    def delete(self, spot: ParkingSpot) -> None:
        with self.repository.transaction() as conn:
            self.repository.delete(spot, conn=conn)
        logger.info("Deleted parking spot %s", spot.id)

    def exists_by_license_plate_car(self, license_plate_car: str) -> bool:
        return self.repository.exists_by_license_plate_car(license_plate_car)

    def exists_by_parking_spot_number(self, parking_spot_number: str) -> bool:
        return self.repository.exists_by_parking_spot_number(parking_spot_number)

    def exists_by_apartment_and_block(self, apartment: str, block: str) -> bool:
        return self.repository.exists_by_apartment_and_block(apartment, block)

    def find_all(self, request: PageRequest) -> Page[ParkingSpot]:
        return self.repository.find_all(request)

    def find_by_id(self, spot_id: UUID) -> SpotLookup:
        return self.repository.find_by_id(spot_id)
