"""Per-request render pipeline: fetch -> layout -> pack -> encode."""

from __future__ import annotations

import asyncio
import datetime
import logging
from typing import Protocol

from ..models import CalendarEvent, RenderInput, TemperatureReport
from ..rendering.bitmap import encode_bitmap, pack_monochrome
from ..rendering.canvas import BLACK, Canvas
from ..rendering.fonts import GlyphRenderer
from ..rendering.layout import LayoutEngine

logger = logging.getLogger(__name__)

TEST_SQUARE = (350, 190, 100, 100)


class EventSource(Protocol):
    async def get_next_n_days(
        self, n: int, now: datetime.datetime | None = None
    ) -> list[CalendarEvent]: ...


class ReadingSource(Protocol):
    async def get_report(self) -> TemperatureReport: ...


async def collect_render_input(
    calendar: EventSource,
    temperature: ReadingSource,
    *,
    now: datetime.datetime,
    days: int = 14,
    locale: str = "en",
) -> RenderInput:
    """Fetch events and readings concurrently and bundle them for the layout.

    Args:
        calendar: calendar collaborator
        temperature: temperature collaborator
        now: aware "current" time in the display's timezone
        days: size of the calendar window starting at local midnight
        locale: language of the drawn dates and labels

    Raises:
        DataFetchError: if either collaborator fails; nothing is rendered
    """
    events, report = await asyncio.gather(
        calendar.get_next_n_days(days, now),
        temperature.get_report(),
    )
    logger.info(
        "Fetched %d events and %d sensor readings",
        len(events),
        1 + len(report.secondaries),
    )
    return RenderInput(
        today=now.date(),
        events=events,
        primary_reading=report.primary,
        secondary_readings=report.secondaries,
        generated_at=now,
        locale=locale,
    )


def render_bitmap(data: RenderInput, glyphs: GlyphRenderer) -> bytes:
    """Draw, pack and encode the status image."""
    canvas = LayoutEngine(glyphs).render(data)
    return encode_bitmap(pack_monochrome(canvas))


def render_test_pattern() -> bytes:
    """White image with a black 100x100 square in the middle.

    Served as a static image to check the device shows what it downloads.
    """
    canvas = Canvas()
    canvas.fill_rect(*TEST_SQUARE, BLACK)
    canvas.flip_vertical()
    return encode_bitmap(pack_monochrome(canvas))
