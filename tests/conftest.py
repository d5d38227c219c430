"""Pytest configuration and fixtures"""

import pytest
import tempfile
import json
from pathlib import Path

from skysep.schemas.raw_flight import RawFlight


def make_raw_flight(acid="AC101", route="45.0N/75.0W 46.0N/74.0W", altitude=35000,
                    departure_time=0, speed=480, **overrides) -> RawFlight:
    """Build a validated raw flight record with sensible defaults"""
    record = {
        "ACID": acid,
        "Plane type": "A320",
        "route": route,
        "altitude": altitude,
        "departure airport": "CYOW",
        "arrival airport": "CYUL",
        "departure time": departure_time,
        "aircraft speed": speed,
        "passengers": 150,
        "is_cargo": False,
    }
    record.update(overrides)
    return RawFlight.model_validate(record)


@pytest.fixture
def temp_dir():
    """Temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def raw_flight_factory():
    """Factory for raw flight records"""
    return make_raw_flight


@pytest.fixture
def sample_flight_records():
    """Two valid records in the uploaded JSON shape"""
    return [
        {
            "ACID": "AC101",
            "Plane type": "A320",
            "route": "45.0N/75.0W 46.0N/74.0W",
            "altitude": 35000,
            "departure airport": "CYOW",
            "arrival airport": "CYUL",
            "departure time": 0,
            "aircraft speed": 480,
            "passengers": 150,
            "is_cargo": False
        },
        {
            "ACID": "CG202",
            "Plane type": "B763",
            "route": "43.6N/79.6W 45.5N/73.7W",
            "altitude": 33000,
            "departure airport": "CYYZ",
            "arrival airport": "CYUL",
            "departure time": 600,
            "aircraft speed": 450,
            "passengers": 0,
            "is_cargo": True
        }
    ]


@pytest.fixture
def sample_json_text(sample_flight_records):
    return json.dumps(sample_flight_records)


@pytest.fixture
def crossing_pair():
    """Two parallel eastbound flights 2 NM apart that share only the t=120s tick at 60s steps"""
    return [
        make_raw_flight("AAA1", route="0.0N/0.0E 0.0N/0.1E", altitude=30000,
                        departure_time=100, speed=480),
        make_raw_flight("BBB2", route="0.033333N/0.0E 0.033333N/0.1E", altitude=30000,
                        departure_time=100, speed=480),
    ]


@pytest.fixture
def head_on_pair():
    """Two opposite-direction flights on the same track and level"""
    return [
        make_raw_flight("ZED9", route="40.0N/80.0W 40.0N/78.0W", altitude=35000,
                        departure_time=0, speed=450),
        make_raw_flight("ALF1", route="40.0N/78.0W 40.0N/80.0W", altitude=35000,
                        departure_time=0, speed=450),
    ]
