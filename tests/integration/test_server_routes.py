"""Integration tests for the crbmnl aiohttp application.

The application is built by ``_make_app`` with fake collaborators and a fake
glyph renderer and exercised over HTTP with aiohttp's test client.
"""

import datetime
import io

import pytest
from aiohttp.test_utils import TestClient, TestServer
from PIL import Image

from crbmnl.api.server import _make_app
from crbmnl.config_loader import Config
from crbmnl.exceptions import CalendarFetchError, TemperatureFetchError
from crbmnl.rendering.bitmap import decode_bitmap_header
from tests.fixtures.factories import FakeCalendar, FakeTemperature, timed_event

FIXED_NOW = datetime.datetime(2024, 3, 5, 13, 3, 27, tzinfo=datetime.timezone.utc)


@pytest.fixture
def calendar(warsaw):
    start = datetime.datetime(2024, 3, 5, 9, 5, tzinfo=warsaw)
    return FakeCalendar([timed_event("Standup", start, start + datetime.timedelta(minutes=55))])


@pytest.fixture
def temperature(sample_report):
    return FakeTemperature(sample_report)


@pytest.fixture
async def make_client(sample_config, fake_glyphs, calendar, temperature):
    """Factory building a started test client; closed at teardown."""
    clients = []

    async def _make(config=None, **overrides):
        collaborators = {
            "glyphs": fake_glyphs,
            "calendar": calendar,
            "temperature": temperature,
            "time_provider": lambda: FIXED_NOW,
        }
        collaborators.update(overrides)
        app = await _make_app(config or sample_config, **collaborators)
        client = TestClient(TestServer(app))
        await client.start_server()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.close()


@pytest.fixture
async def test_client(make_client):
    return await make_client()


@pytest.mark.integration
class TestRenderRoute:
    """Integration tests for GET /render.bmp."""

    async def test_returns_bitmap(self, test_client, fake_glyphs):
        response = await test_client.get("/render.bmp")

        assert response.status == 200
        assert response.content_type == "image/bmp"
        body = await response.read()
        assert len(body) == 48062
        header = decode_bitmap_header(body)
        assert (header.width, header.height) == (800, 480)
        assert "X-Request-ID" in response.headers
        assert "9:05-10:00 Standup" in fake_glyphs.texts()

    async def test_uses_configured_timezone_and_window(self, test_client, calendar, fake_glyphs):
        await test_client.get("/render.bmp")

        days, now = calendar.requests[0]
        assert days == 14
        assert now == FIXED_NOW
        assert now.utcoffset() == datetime.timedelta(hours=1)
        assert "5 March 2024" in fake_glyphs.texts()
        assert "Generated: 2024-03-05 14:03:27 CET" in fake_glyphs.texts()

    async def test_bitmap_decodes_with_title_at_top(self, test_client):
        response = await test_client.get("/render.bmp")

        image = Image.open(io.BytesIO(await response.read())).convert("L")
        assert image.getpixel((10, 10)) == 0
        assert image.getpixel((10, 469)) == 255

    async def test_locale_from_config(self, make_client, config_data, fake_glyphs):
        config_data["locale"] = "pl"
        client = await make_client(Config.from_dict(config_data))

        await client.get("/render.bmp")

        assert "5 marca 2024" in fake_glyphs.texts()

    async def test_calendar_failure_returns_502(self, make_client):
        client = await make_client(calendar=FakeCalendar(error=CalendarFetchError("calendar down")))

        response = await client.get("/render.bmp")

        assert response.status == 502
        data = await response.json()
        assert data["error"] == "data fetch failed"
        assert "calendar down" in data["detail"]

    async def test_temperature_failure_returns_502(self, make_client, sample_report):
        failing = FakeTemperature(sample_report, error=TemperatureFetchError("sensor unavailable"))
        client = await make_client(temperature=failing)

        response = await client.get("/render.bmp")

        assert response.status == 502

    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/render.bmp", headers={"X-Request-ID": "render-1"})

        assert response.headers["X-Request-ID"] == "render-1"


@pytest.mark.integration
class TestStaticImageRoute:
    async def test_returns_test_pattern(self, test_client, calendar):
        response = await test_client.get("/static/rover.bmp")

        assert response.status == 200
        assert response.content_type == "image/bmp"
        image = Image.open(io.BytesIO(await response.read())).convert("L")
        assert image.getpixel((400, 240)) == 0
        assert image.getpixel((10, 10)) == 255
        assert calendar.requests == []


@pytest.mark.integration
class TestDeviceRoutes:
    """Integration tests for the device polling protocol."""

    async def test_setup(self, test_client):
        response = await test_client.get("/api/setup", headers={"ID": "AA:BB:CC:DD:EE:FF"})

        assert response.status == 200
        assert await response.json() == {
            "api_key": "device-key",
            "friendly_id": "ABC123",
            "image_url": "http://192.168.0.32:8080/render.bmp",
            "message": "Welcome to crbmnl",
            "status": 200,
        }

    async def test_display(self, test_client):
        response = await test_client.get("/api/display", headers={"battery-voltage": "3.7"})

        assert response.status == 200
        assert await response.json() == {
            "filename": "render.bmp",
            "firmware_url": None,
            "image_url": "http://192.168.0.32:8080/render.bmp",
            "image_url_timeout": 60,
            "refresh_rate": 120,
            "special_function": "none",
            "reset_firmware": False,
            "update_firmware": False,
        }

    async def test_display_with_nan_battery_voltage(self, test_client):
        response = await test_client.get("/api/display", headers={"battery-voltage": "nan"})

        assert response.status == 200
        assert (await response.json())["refresh_rate"] == 120

    async def test_display_with_static_image(self, make_client, config_data):
        config_data["device"]["use_static_image"] = True
        client = await make_client(Config.from_dict(config_data))

        data = await (await client.get("/api/display")).json()

        assert data["filename"] == "rover.bmp"
        assert data["image_url"] == "http://192.168.0.32:8080/static/rover.bmp"

    async def test_logs_accepted(self, test_client):
        response = await test_client.post("/api/logs", data=b'{"log":{"logs_array":[]}}')

        assert response.status == 200
        assert await response.read() == b""

    async def test_unknown_api_path_acknowledged(self, test_client):
        response = await test_client.get("/api/firmware/latest")

        assert response.status == 200
        assert await response.read() == b""

    async def test_unknown_non_api_path_is_404(self, test_client):
        response = await test_client.get("/favicon.ico")

        assert response.status == 404
