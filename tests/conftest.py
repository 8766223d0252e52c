"""
Shared test fixtures: test client, estimate sessions, worked-example inputs.
"""

import copy
import os

import pytest
from fastapi.testclient import TestClient

# Pin config before importing app modules
os.environ["DEFAULT_UNIT_SYSTEM"] = "imperial"
os.environ["EXPORT_BASENAME"] = "paint-estimate"

from backend.catalog import DEFAULT_SETTINGS, EXAMPLE_ESTIMATE
from backend.estimate import EstimateSession
from backend.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def session():
    """Empty imperial estimate session."""
    return EstimateSession("imperial")


@pytest.fixture
def example_session():
    """Session loaded with the Living Room + Master Bedroom example."""
    s = EstimateSession()
    s.load_example()
    return s


@pytest.fixture
def example_rooms():
    return copy.deepcopy(EXAMPLE_ESTIMATE["rooms"])


@pytest.fixture
def default_settings():
    return dict(DEFAULT_SETTINGS)


@pytest.fixture
def example_payload():
    """Request body for the estimate endpoints."""
    return copy.deepcopy(EXAMPLE_ESTIMATE)
