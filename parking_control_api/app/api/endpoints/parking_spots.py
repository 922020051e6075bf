"""
Parking spot endpoints.

CRUD routes mounted under ``/parking-spot``.  Creation checks, in
order, that the license plate, the spot number and the
apartment/block pair are free, and answers 409 on the first one that
is taken.  Updates replace every mutable field but keep the stored
``id`` and ``registrationDate``.

Errors are raised as domain exceptions (``NotFoundError``,
``ConflictError``, ``ValidationError``) and turned into responses by
the handlers registered in ``main.create_app``.
"""

from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Query, Request, status

from parking_control_api.app.core.exceptions import (
    APARTMENT_BLOCK_IN_USE,
    LICENSE_PLATE_IN_USE,
    PARKING_SPOT_IN_USE,
    PARKING_SPOT_NOT_FOUND,
    ConflictError,
    NotFoundError,
)
from parking_control_api.app.models.page import DEFAULT_PAGE_SIZE, PageRequest
from parking_control_api.app.models.parking_spot import ParkingSpot, SpotNotFound
from parking_control_api.app.schemas.parking_spot import (
    MessageRead,
    ParkingSpotCreate,
    ParkingSpotPage,
    ParkingSpotRead,
    parse_sort,
    to_entity,
    to_page,
    to_read,
)
from parking_control_api.app.services.parking_spot_service import ParkingSpotService

router = APIRouter()


def get_parking_spot_service(request: Request) -> ParkingSpotService:
    """Return the service instance built by ``create_app``."""
    return request.app.state.parking_spot_service


def _require_spot(service: ParkingSpotService, spot_id: UUID) -> ParkingSpot:
    lookup = service.find_by_id(spot_id)
    if isinstance(lookup, SpotNotFound):
        raise NotFoundError(PARKING_SPOT_NOT_FOUND)
    return lookup.spot


@router.post("", response_model=ParkingSpotRead, status_code=status.HTTP_201_CREATED)
def save_parking_spot(
    spot_in: ParkingSpotCreate,
    service: ParkingSpotService = Depends(get_parking_spot_service),
) -> ParkingSpotRead:
    """Register a new parking spot.

    The upfront checks give a readable message in the common case; the
    unique indices in the database catch whatever slips past them
    between the check and the insert.
    """
    if service.exists_by_license_plate_car(spot_in.license_plate_car):
        raise ConflictError(LICENSE_PLATE_IN_USE)
    if service.exists_by_parking_spot_number(spot_in.parking_spot_number):
        raise ConflictError(PARKING_SPOT_IN_USE)
    if service.exists_by_apartment_and_block(spot_in.apartment, spot_in.block):
        raise ConflictError(APARTMENT_BLOCK_IN_USE)

    spot = to_entity(spot_in, spot_id=uuid4(), registration_date=datetime.now(timezone.utc))
    return to_read(service.save(spot))


@router.get("", response_model=ParkingSpotPage)
def get_all_parking_spots(
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
    sort: List[str] = Query(["id,asc"]),
    service: ParkingSpotService = Depends(get_parking_spot_service),
) -> ParkingSpotPage:
    """Return one page of parking spots.

    ``sort`` may be repeated, e.g. ``?sort=block&sort=apartment,desc``.
    Out-of-range ``page`` and ``size`` values are clamped, not rejected.
    """
    page_request = PageRequest.clamped(page, size, parse_sort(sort))
    return to_page(service.find_all(page_request))


@router.get("/{spot_id}", response_model=ParkingSpotRead)
def get_one_parking_spot(
    spot_id: UUID,
    service: ParkingSpotService = Depends(get_parking_spot_service),
) -> ParkingSpotRead:
    return to_read(_require_spot(service, spot_id))


@router.delete("/{spot_id}", response_model=MessageRead)
def delete_parking_spot(
    spot_id: UUID,
    service: ParkingSpotService = Depends(get_parking_spot_service),
) -> MessageRead:
    spot = _require_spot(service, spot_id)
    service.delete(spot)
    return MessageRead(message="Parking Spot deleted successfully")


@router.put("/{spot_id}", response_model=ParkingSpotRead)
def update_parking_spot(
    spot_id: UUID,
    spot_in: ParkingSpotCreate,
    service: ParkingSpotService = Depends(get_parking_spot_service),
) -> ParkingSpotRead:
    """Replace all mutable fields of a parking spot.

    ``id`` and ``registrationDate`` always come from the stored record.
    A value that collides with another registration is rejected by the
    database and answered with 409.
    """
    existing = _require_spot(service, spot_id)
    spot = to_entity(
        spot_in,
        spot_id=existing.id,
        registration_date=existing.registration_date,
    )
    return to_read(service.save(spot))
