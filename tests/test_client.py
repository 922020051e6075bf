import uuid

import pytest
import requests

from parking_control_client import ParkingControlAPI


@pytest.fixture
def api(client):
    # TestClient speaks the same request() interface as requests.Session.
    return ParkingControlAPI(base_url="http://testserver/", session=client)


def test_create_get_update_delete(api, spot_payload):
    created, error = api.create_parking_spot(spot_payload)
    assert error is None
    spot_id = created["id"]

    fetched, error = api.get_parking_spot(spot_id)
    assert error is None
    assert fetched == created

    updated, error = api.update_parking_spot(spot_id, {**spot_payload, "colorCar": "Green"})
    assert error is None
    assert updated["colorCar"] == "Green"
    assert updated["registrationDate"] == created["registrationDate"]

    deleted, error = api.delete_parking_spot(spot_id)
    assert deleted is True
    assert error is None

    missing, error = api.get_parking_spot(spot_id)
    assert missing is None
    assert error == {"status_code": 404, "message": "Parking Spot not found"}


def test_conflict_is_reported(api, spot_payload):
    api.create_parking_spot(spot_payload)

    data, error = api.create_parking_spot({**spot_payload, "parkingSpotNumber": "Z9"})

    assert data is None
    assert error["status_code"] == 409
    assert error["message"] == "Conflict: License Plate Car is already in use!"


def test_list_passes_pagination_and_sort(api, spot_payload):
    api.create_parking_spot(spot_payload)
    api.create_parking_spot(
        {**spot_payload, "parkingSpotNumber": "A2", "licensePlateCar": "DEF456", "apartment": "102"}
    )

    page, error = api.list_parking_spots(page=0, size=1, sort="parkingSpotNumber,desc")

    assert error is None
    assert page["size"] == 1
    assert page["totalElements"] == 2
    assert page["content"][0]["parkingSpotNumber"] == "A2"


def test_list_error_returns_empty_page(api):
    page, error = api.list_parking_spots(sort=["nope"])

    assert page == {}
    assert error["status_code"] == 400


def test_delete_unknown_spot(api):
    deleted, error = api.delete_parking_spot(uuid.uuid4())

    assert deleted is False
    assert error["status_code"] == 404


class _FailingSession:
    def request(self, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_transport_failure_is_reported():
    api = ParkingControlAPI(base_url="http://localhost:1", session=_FailingSession())

    data, error = api.get_parking_spot(uuid.uuid4())

    assert data is None
    assert error == {"status_code": None, "message": "connection refused"}
