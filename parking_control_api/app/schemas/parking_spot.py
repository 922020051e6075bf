"""
Pydantic schemas for parking spot registrations.

Fields are snake_case in Python and camelCase on the wire
(``licensePlateCar``, ``registrationDate``...).  Input accepts either
spelling.  ``id`` and ``registrationDate`` are assigned by the server;
if a client sends them in a request body they are ignored.

Conversion between schemas and the storage entity goes through
``to_entity`` and ``to_read``, which list every field explicitly.
"""

from datetime import datetime
from typing import List, Tuple
from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from parking_control_api.app.core.exceptions import ValidationError
from parking_control_api.app.models.page import ASC, DESC, Page, PageRequest, SortOrder
from parking_control_api.app.models.parking_spot import COLUMNS, ParkingSpot


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        # ``model_car`` would otherwise clash with pydantic's reserved prefix.
        "protected_namespaces": (),
    }


class ParkingSpotCreate(CamelModel):
    """Schema for creating a parking spot or replacing one in full."""

    parking_spot_number: str = Field(..., examples=["A1"])
    license_plate_car: str = Field(..., examples=["ABC123"])
    model_car: str = Field(..., examples=["Civic"])
    brand_car: str = Field(..., examples=["Honda"])
    color_car: str = Field(..., examples=["Black"])
    responsible_name: str = Field(..., examples=["Jane Doe"])
    apartment: str = Field(..., examples=["101"])
    block: str = Field(..., examples=["B"])

    @field_validator(
        "parking_spot_number",
        "license_plate_car",
        "model_car",
        "brand_car",
        "color_car",
        "responsible_name",
        "apartment",
        "block",
    )
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class ParkingSpotRead(CamelModel):
    """Schema for reading a parking spot from the API."""

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


class SortRead(CamelModel):
    property: str
    direction: str


class ParkingSpotPage(CamelModel):
    """One page of parking spots plus navigation totals."""

    content: List[ParkingSpotRead]
    total_elements: int
    total_pages: int
    size: int
    number: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool
    sort: List[SortRead]


class MessageRead(BaseModel):
    message: str


def to_entity(data: ParkingSpotCreate, *, spot_id: UUID, registration_date: datetime) -> ParkingSpot:
    return ParkingSpot(
        id=spot_id,
        parking_spot_number=data.parking_spot_number,
        license_plate_car=data.license_plate_car,
        model_car=data.model_car,
        brand_car=data.brand_car,
        color_car=data.color_car,
        responsible_name=data.responsible_name,
        apartment=data.apartment,
        block=data.block,
        registration_date=registration_date,
    )


def to_read(spot: ParkingSpot) -> ParkingSpotRead:
    return ParkingSpotRead(
        id=spot.id,
        parking_spot_number=spot.parking_spot_number,
        license_plate_car=spot.license_plate_car,
        model_car=spot.model_car,
        brand_car=spot.brand_car,
        color_car=spot.color_car,
        responsible_name=spot.responsible_name,
        apartment=spot.apartment,
        block=spot.block,
        registration_date=spot.registration_date,
    )


def to_page(page: Page[ParkingSpot]) -> ParkingSpotPage:
    return ParkingSpotPage(
        content=[to_read(spot) for spot in page.content],
        total_elements=page.total_elements,
        total_pages=page.total_pages,
        size=page.size,
        number=page.number,
        number_of_elements=page.number_of_elements,
        first=page.first,
        last=page.last,
        empty=page.empty,
        sort=[
            SortRead(property=to_camel(order.property), direction=order.direction)
            for order in page.request.sort
        ],
    )


# Accept both wire (camelCase) and python (snake_case) property names.
_SORT_PROPERTIES = {to_camel(column): column for column in COLUMNS}
_SORT_PROPERTIES.update({column: column for column in COLUMNS})


def parse_sort(values: List[str]) -> Tuple[SortOrder, ...]:
    """Parse ``sort`` query values such as ``"licensePlateCar,desc"``.

    Each value holds one or more property names optionally followed by
    ``asc`` or ``desc`` (case insensitive, default ``asc``), applied to
    every property in that value.  Raises ``ValidationError`` for an
    unknown property.
    """
    orders: List[SortOrder] = []
    for value in values:
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        direction = ASC
        if len(tokens) > 1 and tokens[-1].upper() in (ASC, DESC):
            direction = tokens.pop().upper()
        for token in tokens:
            column = _SORT_PROPERTIES.get(token)
            if column is None:
                raise ValidationError(f"Unknown sort property: {token}")
            orders.append(SortOrder(column, direction))
    return tuple(orders) or PageRequest().sort
