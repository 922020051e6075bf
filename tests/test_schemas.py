import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as SchemaValidationError

from parking_control_api.app.core.exceptions import ValidationError
from parking_control_api.app.models.page import ASC, DESC, Page, PageRequest, SortOrder
from parking_control_api.app.schemas.parking_spot import (
    ParkingSpotCreate,
    parse_sort,
    to_entity,
    to_read,
)


def test_to_entity_copies_every_field(spot_payload):
    data = ParkingSpotCreate(**spot_payload)
    spot_id = uuid.uuid4()
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)

    spot = to_entity(data, spot_id=spot_id, registration_date=when)
    read = to_read(spot)

    assert read.model_dump(by_alias=True) == {**spot_payload, "id": spot_id, "registrationDate": when}


def test_create_schema_rejects_blank_values(spot_payload):
    with pytest.raises(SchemaValidationError):
        ParkingSpotCreate(**{**spot_payload, "block": ""})


@pytest.mark.parametrize(
    "values, expected",
    [
        ([], (SortOrder("id", ASC),)),
        (["id"], (SortOrder("id", ASC),)),
        (["licensePlateCar,desc"], (SortOrder("license_plate_car", DESC),)),
        (["block,apartment,DESC"], (SortOrder("block", DESC), SortOrder("apartment", DESC))),
        (["registration_date,asc", "id,desc"], (SortOrder("registration_date", ASC), SortOrder("id", DESC))),
    ],
)
def test_parse_sort(values, expected):
    assert parse_sort(values) == expected


def test_parse_sort_rejects_unknown_property():
    with pytest.raises(ValidationError):
        parse_sort(["colour"])


def test_page_metadata():
    page = Page(content=[1, 2], total_elements=5, request=PageRequest(page=2, size=2))

    assert page.total_pages == 3
    assert page.number_of_elements == 2
    assert page.last
    assert not page.first
    assert PageRequest(page=2, size=2).offset == 4


@pytest.mark.parametrize(
    "page, size, expected_page, expected_size",
    [
        (-3, 0, 0, 10),
        (1, 2001, 1, 2000),
        (2**70, 10, (2**63 - 1) // 10, 10),
    ],
)
def test_page_request_clamped(page, size, expected_page, expected_size):
    request = PageRequest.clamped(page, size, PageRequest().sort)

    assert (request.page, request.size) == (expected_page, expected_size)
    assert request.offset <= 2**63 - 1
