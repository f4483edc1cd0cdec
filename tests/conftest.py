"""Shared fixtures for crbmnl tests."""

from __future__ import annotations

import zoneinfo
from collections.abc import AsyncIterator
from typing import Any

import pytest

from crbmnl.config_loader import Config
from crbmnl.core.http_client import close_all_clients
from crbmnl.models import TemperatureReading, TemperatureReport
from tests.fixtures.factories import FakeGlyphRenderer


@pytest.fixture
def fake_glyphs() -> FakeGlyphRenderer:
    return FakeGlyphRenderer()


@pytest.fixture
def warsaw() -> zoneinfo.ZoneInfo:
    """Deterministic timezone so tests do not depend on the host's."""
    return zoneinfo.ZoneInfo("Europe/Warsaw")


@pytest.fixture
def config_data() -> dict[str, Any]:
    """Raw config mapping as it would come out of crbmnl.yaml."""
    return {
        "timezone": "Europe/Warsaw",
        "locale": "en",
        "home_assistant": {
            "host": "http://ha.test:8123",
            "api_key": "secret-token",
            "calendar_entity": "calendar.family",
        },
        "temperature": {
            "primary": {
                "name": "Living room",
                "temperature_entity": "sensor.living_temperature",
                "humidity_entity": "sensor.living_humidity",
            },
            "secondaries": [
                {
                    "name": "Outside",
                    "temperature_entity": "sensor.outside_temperature",
                    "humidity_entity": "sensor.outside_humidity",
                },
                {
                    "name": "Bedroom",
                    "temperature_entity": "sensor.bedroom_temperature",
                    "humidity_entity": "sensor.bedroom_humidity",
                },
            ],
        },
        "device": {
            "base_url": "http://192.168.0.32:8080",
            "api_key": "device-key",
            "friendly_id": "ABC123",
            "refresh_rate": 120,
        },
    }


@pytest.fixture
def sample_config(config_data: dict[str, Any]) -> Config:
    return Config.from_dict(config_data)


@pytest.fixture
def sample_report() -> TemperatureReport:
    return TemperatureReport(
        primary=TemperatureReading(name="Living room", temperature=21.54, humidity=40.0),
        secondaries=[
            TemperatureReading(name="Outside", temperature=-3.25, humidity=87.6),
            TemperatureReading(name="Bedroom", temperature=19.0, humidity=45.2),
        ],
    )


@pytest.fixture(autouse=True)
async def cleanup_shared_http_clients() -> AsyncIterator[None]:
    """Close shared httpx clients after every test to avoid leaking connections."""
    yield
    await close_all_clients()
