"""crbmnl.api.server: aiohttp server for the e-ink status display.

This module:
- builds the aiohttp application (device protocol routes and bitmap routes)
- wires the Home Assistant collaborators to a pooled httpx client
- loads the fonts once at startup and shares them across requests
- runs until SIGINT/SIGTERM and closes the HTTP clients on the way out
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

import httpx
from aiohttp import web

from ..config_loader import Config
from ..core.http_client import close_all_clients, get_shared_client
from ..core.timezone_utils import Clock, now_utc
from ..domain.status_render import EventSource, ReadingSource
from ..homeassistant import CalendarClient, TemperatureClient
from ..middleware import correlation_id_middleware
from ..rendering.fonts import FontBook, GlyphRenderer
from .routes import register_device_routes, register_image_routes

logger = logging.getLogger(__name__)


async def _make_app(
    config: Config,
    glyphs: GlyphRenderer | None = None,
    calendar: EventSource | None = None,
    temperature: ReadingSource | None = None,
    time_provider: Clock = now_utc,
    http_client: httpx.AsyncClient | None = None,
) -> web.Application:
    """Create the aiohttp application.

    Collaborators not passed in are built from ``config``; tests pass fakes
    for all of them.
    """
    if calendar is None or temperature is None:
        client = http_client or await get_shared_client("home_assistant")
        calendar = calendar or CalendarClient(config, client)
        temperature = temperature or TemperatureClient(config, client)
    if glyphs is None:
        glyphs = FontBook.load(config.font_dir)

    app = web.Application(middlewares=[correlation_id_middleware])
    app["config"] = config

    register_image_routes(
        app=app,
        config=config,
        glyphs=glyphs,
        calendar=calendar,
        temperature=temperature,
        time_provider=time_provider,
    )
    register_device_routes(app, config)

    async def _shutdown(_app: web.Application) -> None:
        await close_all_clients()

    app.on_cleanup.append(_shutdown)
    logger.debug("Web application created")
    return app


async def _serve(config: Config, external_stop_event: asyncio.Event | None = None) -> None:
    """Run the server until signalled to stop.

    Args:
        config: Server configuration.
        external_stop_event: Optional event to signal shutdown. If provided,
            signal handlers are NOT registered (caller owns signal handling).
    """
    stop_event = external_stop_event or asyncio.Event()

    app = await _make_app(config)
    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, host=config.server_bind, port=config.server_port)
    try:
        await site.start()
    except OSError:
        logger.exception("Failed to start server on %s:%d", config.server_bind, config.server_port)
        await runner.cleanup()
        raise

    logger.info("Server started on %s:%d", config.server_bind, config.server_port)
    logger.info("Device image URL: %s", config.device.image_url)

    if external_stop_event is None:
        loop = asyncio.get_running_loop()

        def _on_signal() -> None:
            logger.info("Shutdown signal received")
            stop_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, _on_signal)

    await stop_event.wait()
    logger.info("Stop event received, shutting down")
    await runner.cleanup()
    logger.info("Server stopped")


def start_server(config: Config) -> None:
    """Run the server on a fresh event loop; blocks until shutdown."""
    asyncio.run(_serve(config))
