"""Domain-level exception hierarchy for the service and repository layers.

The API layer translates these into HTTP responses through the
exception handlers registered in ``main.create_app``.
"""

from __future__ import annotations


class ParkingControlError(Exception):
    """Base class for domain-specific failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ParkingControlError):
    """Raised when input fails validation below the schema layer."""


class ConflictError(ParkingControlError):
    """Raised when a uniqueness rule would be violated."""


class NotFoundError(ParkingControlError):
    """Raised when a requested parking spot does not exist."""


class StorageError(ParkingControlError):
    """Raised when the database cannot complete an operation."""


LICENSE_PLATE_IN_USE = "Conflict: License Plate Car is already in use!"
PARKING_SPOT_IN_USE = "Conflict: Parking Spot is already in use!"
APARTMENT_BLOCK_IN_USE = "Conflict: Parking spot already registered for this apartment/block!"
PARKING_SPOT_NOT_FOUND = "Parking Spot not found"
