from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from consent_daemon.main import app

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "consent_fixtures.yml"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def consent_fixtures() -> dict:
    """Known consent strings and their decoded values, loaded from YAML."""
    with open(FIXTURES_PATH) as f:
        return yaml.safe_load(f)


@pytest.fixture(scope="session")
def fixture_header(consent_fixtures) -> dict:
    """The header shared by every fixture, with timestamps as UTC datetimes."""
    header = dict(consent_fixtures["header"])
    for key in ("created", "last_updated"):
        seconds, tenths = divmod(header.pop(f"{key}_ds"), 10)
        header[key] = EPOCH + timedelta(seconds=seconds, milliseconds=tenths * 100)
    header["purposes_allowed"] = frozenset(header["purposes_allowed"])
    return header


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Synchronous TestClient fixture for FastAPI.
    Use this for standard API endpoint testing.
    """
    with TestClient(app=app, base_url="http://test") as c:
        yield c
