from __future__ import annotations

from pathlib import Path
from typing import Iterable

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi.testclient import TestClient

from fastephem.altitude import GeographicLocation


@pytest.fixture(scope="session")
def seattle() -> GeographicLocation:
    return GeographicLocation(longitude=-122.3321, latitude=47.6062)


@pytest.fixture(scope="session")
def svalbard() -> GeographicLocation:
    return GeographicLocation(longitude=15.6469, latitude=78.2232)


@pytest.fixture(scope="session")
def api_client() -> Iterable[TestClient]:
    from ephemeris_api import app

    with TestClient(app) as client:
        yield client
