"""Strings drawn on the status image: dates, agenda lines, readings, timestamp."""

from __future__ import annotations

import datetime

from ..models import CalendarEvent, TemperatureReading

# Polish dates read "18 października 2026", so months are in the genitive
MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "en": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
    "pl": (
        "stycznia",
        "lutego",
        "marca",
        "kwietnia",
        "maja",
        "czerwca",
        "lipca",
        "sierpnia",
        "września",
        "października",
        "listopada",
        "grudnia",
    ),
}

GENERATED_LABELS: dict[str, str] = {
    "en": "Generated",
    "pl": "Wygenerowano",
}


def format_date(day: datetime.date, locale: str = "en") -> str:
    """Format ``day`` as "<day> <month name> <year>", e.g. "5 March 2024"."""
    months = MONTH_NAMES.get(locale, MONTH_NAMES["en"])
    return f"{day.day} {months[day.month - 1]} {day.year}"


def _clock(value: datetime.datetime) -> str:
    return f"{value.hour}:{value.minute:02d}"


def format_event_line(event: CalendarEvent) -> str:
    """Agenda line for ``event``.

    Timed events read "9:05-10:00 Summary" (24h clock, unpadded hour); all-day
    events show only the summary.
    """
    start, end = event.start.instant, event.end.instant
    if start is not None and end is not None:
        return f"{_clock(start)}-{_clock(end)} {event.summary}"
    return event.summary


def format_primary_temperature(reading: TemperatureReading) -> str:
    return f"{reading.temperature:.1f}°C"


def format_secondary_reading(reading: TemperatureReading) -> str:
    return f"{reading.name}: {reading.temperature:.1f}°C, {reading.humidity:.0f}%"


def format_generated(generated_at: datetime.datetime, locale: str = "en") -> str:
    """Footer timestamp, e.g. "Generated: 2024-01-05 14:03:27 CET"."""
    label = GENERATED_LABELS.get(locale, GENERATED_LABELS["en"])
    stamp = generated_at.strftime("%Y-%m-%d %H:%M:%S %Z").rstrip()
    return f"{label}: {stamp}"
