"""Layout engine for the status image.

Places the agenda (left column, grouped by day) and the temperature panel
(right column) on an 800x480 canvas and flips it into bitmap row order.

Vertical space is tight, so the agenda truncates:
- a new day group is not started once the cursor is below
  ``CANVAS_HEIGHT - 3 * line_height``; that group and all later ones are dropped
- an event is skipped once the cursor is below ``CANVAS_HEIGHT - 2 * line_height``;
  later groups are still visited but will hit the first rule
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable

from ..models import CalendarEvent, RenderInput
from .canvas import CANVAS_HEIGHT, CANVAS_WIDTH, WHITE, Canvas
from .fonts import FontStyle, GlyphRenderer
from .text_format import (
    format_date,
    format_event_line,
    format_generated,
    format_primary_temperature,
    format_secondary_reading,
)

logger = logging.getLogger(__name__)

MARGIN = 10
TITLE_FONT_SIZE = 54.0
BODY_FONT_SIZE = 28.0
PRIMARY_TEMPERATURE_FONT_SIZE = 108.0
AGENDA_START_Y = 91


def line_height(font_size: float) -> int:
    """Vertical advance for one line of ``font_size`` text (1.5x, truncated)."""
    return int(1.5 * font_size)


def group_events_by_date(
    events: Iterable[CalendarEvent],
) -> list[tuple[datetime.date, list[CalendarEvent]]]:
    """Group events by start date, ascending.

    Events sharing a date land in one group wherever they appear in the
    input; inside a group the input order is kept.
    """
    groups: dict[datetime.date, list[CalendarEvent]] = {}
    for event in events:
        groups.setdefault(event.start_date, []).append(event)
    return sorted(groups.items(), key=lambda item: item[0])


class LayoutEngine:
    """Draw a ``RenderInput`` onto a fresh canvas."""

    def __init__(
        self,
        glyphs: GlyphRenderer,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
    ):
        self.glyphs = glyphs
        self.width = width
        self.height = height

    def render(self, data: RenderInput) -> Canvas:
        """Return the fully drawn and vertically flipped canvas."""
        canvas = Canvas(self.width, self.height)
        canvas.fill(WHITE)

        self.glyphs.draw_text(
            canvas,
            MARGIN,
            MARGIN,
            TITLE_FONT_SIZE,
            FontStyle.BOLD,
            format_date(data.today, data.locale),
        )
        drawn = self._draw_agenda(canvas, data)
        self._draw_temperatures(canvas, data)
        self._draw_right_aligned(
            canvas,
            self.height - line_height(BODY_FONT_SIZE),
            BODY_FONT_SIZE,
            format_generated(data.generated_at, data.locale),
        )

        canvas.flip_vertical()
        logger.debug("Layout drew %d of %d events", drawn, len(data.events))
        return canvas

    def _draw_agenda(self, canvas: Canvas, data: RenderInput) -> int:
        step = line_height(BODY_FONT_SIZE)
        group_limit = self.height - 3 * step
        event_limit = self.height - 2 * step
        y = AGENDA_START_Y
        drawn = 0

        for day, events in group_events_by_date(data.events):
            if y > group_limit:
                break

            if day != data.today:
                self.glyphs.draw_text(
                    canvas, MARGIN, y, BODY_FONT_SIZE, FontStyle.BOLD, format_date(day, data.locale)
                )
                y += step

            for event in events:
                if y > event_limit:
                    continue
                self.glyphs.draw_text(
                    canvas, MARGIN, y, BODY_FONT_SIZE, FontStyle.NORMAL, format_event_line(event)
                )
                y += step
                drawn += 1

            # blank line between days, also after a group whose tail was skipped
            y += step

        return drawn

    def _draw_temperatures(self, canvas: Canvas, data: RenderInput) -> None:
        self._draw_right_aligned(
            canvas,
            MARGIN,
            PRIMARY_TEMPERATURE_FONT_SIZE,
            format_primary_temperature(data.primary_reading),
        )

        y = line_height(PRIMARY_TEMPERATURE_FONT_SIZE) + MARGIN
        for reading in data.secondary_readings:
            self._draw_right_aligned(canvas, y, BODY_FONT_SIZE, format_secondary_reading(reading))
            y += line_height(BODY_FONT_SIZE)

    def _draw_right_aligned(self, canvas: Canvas, y: int, size: float, text: str) -> None:
        width = self.glyphs.measure_text(size, FontStyle.NORMAL, text)
        self.glyphs.draw_text(canvas, self.width - MARGIN - width, y, size, FontStyle.NORMAL, text)
