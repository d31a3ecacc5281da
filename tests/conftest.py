"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client():
    """Test client fixture."""
    return TestClient(app)


@pytest.fixture
def mock_points_response():
    """Mock NWS points API response."""
    return {
        "properties": {
            "gridId": "OKX",
            "gridX": 33,
            "gridY": 35,
            "forecast": "https://api.weather.gov/gridpoints/OKX/33,35/forecast",
        }
    }


@pytest.fixture
def mock_forecast_response():
    """Mock NWS forecast API response."""
    return {
        "properties": {
            "periods": [
                {
                    "number": 1,
                    "name": "Today",
                    "shortForecast": "Sunny",
                    "temperature": 85,
                    "temperatureUnit": "F",
                },
                {
                    "number": 2,
                    "name": "Tonight",
                    "shortForecast": "Mostly Clear",
                    "temperature": 68,
                    "temperatureUnit": "F",
                },
            ]
        }
    }
