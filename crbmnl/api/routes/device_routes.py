"""Device polling protocol routes.

The display firmware calls /api/setup once, then polls /api/display for the
image URL and refresh rate, and posts its own logs to /api/logs. Any other
/api/* call is logged and acknowledged.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from aiohttp import web

from ...config_loader import Config
from ..models import DisplayResponse, SetupResponse

logger = logging.getLogger(__name__)

MAX_BATTERY_VOLTAGE = 4.5
BATTERY_STEP_VOLTAGE = 0.45


def battery_level(header_value: str | None) -> float | None:
    """Battery percentage in steps of 10 from the ``battery-voltage`` header.

    Returns None when the header is missing or not a usable number (NaN included).
    """
    if header_value is None:
        return None
    try:
        voltage = float(header_value)
    except ValueError:
        return None
    if math.isnan(voltage):
        return None
    clamped = min(max(voltage, 0.0), MAX_BATTERY_VOLTAGE)
    return math.floor(clamped / BATTERY_STEP_VOLTAGE) * 10.0


def register_device_routes(app: Any, config: Config) -> None:
    """Register the device protocol routes.

    Args:
        app: aiohttp web application
        config: Application configuration (device section)
    """
    device = config.device

    async def setup(request: web.Request) -> web.Response:
        logger.info("setup called: %s", dict(request.headers))
        body = SetupResponse(
            api_key=device.api_key,
            friendly_id=device.friendly_id,
            image_url=device.image_url,
            message="Welcome to crbmnl",
        )
        return web.json_response(body.model_dump(mode="json"))

    async def display(request: web.Request) -> web.Response:
        level = battery_level(request.headers.get("battery-voltage"))
        logger.info("display called (battery: %s): %s", level, dict(request.headers))
        body = DisplayResponse(
            filename=device.image_filename,
            firmware_url=device.firmware_url,
            image_url=device.image_url,
            image_url_timeout=device.image_url_timeout,
            refresh_rate=device.refresh_rate,
        )
        return web.json_response(body.model_dump(mode="json"))

    async def logs(request: web.Request) -> web.Response:
        body = await request.text()
        logger.info("logs called: %s", body)
        return web.Response(status=200)

    async def other(request: web.Request) -> web.Response:
        logger.info("other called: %s, %s", request.path, dict(request.headers))
        return web.Response(status=200)

    app.router.add_get("/api/setup", setup)
    app.router.add_get("/api/display", display)
    app.router.add_post("/api/logs", logs)
    # Catch-all must come after the specific /api routes
    app.router.add_get("/api/{tail:.*}", other)

    logger.debug("Device routes registered")
