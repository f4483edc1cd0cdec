"""Bitmap routes: the rendered status image and the static test pattern."""

from __future__ import annotations

import logging
from typing import Any

from aiohttp import web

from ...config_loader import Config
from ...core.timezone_utils import Clock, now_in
from ...domain.status_render import (
    EventSource,
    ReadingSource,
    collect_render_input,
    render_bitmap,
    render_test_pattern,
)
from ...exceptions import DataFetchError, EncodingPreconditionError
from ...rendering.fonts import GlyphRenderer

logger = logging.getLogger(__name__)

BMP_CONTENT_TYPE = "image/bmp"


def register_image_routes(
    app: Any,
    config: Config,
    glyphs: GlyphRenderer,
    calendar: EventSource,
    temperature: ReadingSource,
    time_provider: Clock,
) -> None:
    """Register the image routes.

    Args:
        app: aiohttp web application
        config: Application configuration
        glyphs: Font renderer shared by all requests
        calendar: Calendar collaborator
        temperature: Temperature collaborator
        time_provider: Callable returning the current aware UTC time
    """

    async def render(_request: web.Request) -> web.Response:
        logger.info("image requested")
        now = now_in(config.tzinfo, time_provider)
        try:
            data = await collect_render_input(
                calendar,
                temperature,
                now=now,
                days=config.calendar_days,
                locale=config.locale,
            )
            body = render_bitmap(data, glyphs)
        except DataFetchError as exc:
            logger.error("Render aborted, data fetch failed: %s", exc)
            return web.json_response({"error": "data fetch failed", "detail": str(exc)}, status=502)
        except EncodingPreconditionError:
            logger.exception("Render aborted, bitmap encoding precondition violated")
            return web.json_response({"error": "encoding failed"}, status=500)

        logger.info("Rendered status image: %d bytes", len(body))
        return web.Response(body=body, content_type=BMP_CONTENT_TYPE)

    async def static_image(_request: web.Request) -> web.Response:
        logger.info("static image requested")
        return web.Response(body=render_test_pattern(), content_type=BMP_CONTENT_TYPE)

    app.router.add_get("/render.bmp", render)
    app.router.add_get("/static/rover.bmp", static_image)

    logger.debug("Image routes registered")
