import pytest
from fastapi.testclient import TestClient

from parking_control_api.app.core.config import Settings
from parking_control_api.app.core.db import Database
from parking_control_api.app.main import create_app
from parking_control_api.app.repositories.parking_spot_repository import ParkingSpotRepository
from parking_control_api.app.services.parking_spot_service import ParkingSpotService


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "parking.db"))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which applies migrations.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(tmp_path):
    db = Database(str(tmp_path / "repo.db"))
    db.init()
    return db


@pytest.fixture
def repository(database):
    return ParkingSpotRepository(database)


@pytest.fixture
def service(repository):
    return ParkingSpotService(repository)


@pytest.fixture
def spot_payload():
    return {
        "parkingSpotNumber": "A1",
        "licensePlateCar": "ABC123",
        "modelCar": "Civic",
        "brandCar": "Honda",
        "colorCar": "Black",
        "responsibleName": "J",
        "apartment": "101",
        "block": "B",
    }


@pytest.fixture
def create_spot(client, spot_payload):
    def _create(**overrides):
        payload = {**spot_payload, **overrides}
        response = client.post("/parking-spot", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
