"""Data models for calendar events, sensor readings and render input."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventTime(BaseModel):
    """Start or end of a calendar event.

    Either a timezone-aware instant (``dateTime`` on the wire) or a bare
    calendar date (``date`` on the wire, all-day events). Exactly one of the
    two is set.
    """

    instant: Optional[datetime] = Field(default=None, alias="dateTime")
    day: Optional[date] = Field(default=None, alias="date")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="after")
    def _check_variant(self) -> EventTime:
        if (self.instant is None) == (self.day is None):
            raise ValueError("exactly one of 'dateTime' or 'date' must be set")
        if self.instant is not None and self.instant.utcoffset() is None:
            raise ValueError("'dateTime' must carry a UTC offset")
        return self

    @classmethod
    def of(cls, value: Union[date, datetime]) -> EventTime:
        """Build an EventTime from a datetime (instant) or a date (all-day)."""
        if isinstance(value, datetime):
            return cls(instant=value)
        return cls(day=value)

    @property
    def is_instant(self) -> bool:
        return self.instant is not None

    def calendar_date(self) -> date:
        """Calendar date of this point, in the instant's own offset."""
        if self.instant is not None:
            return self.instant.date()
        if self.day is None:
            raise ValueError("EventTime has neither an instant nor a day")
        return self.day

    def astimezone(self, tz: tzinfo) -> EventTime:
        """Return a copy with the instant converted to ``tz``; dates are unchanged."""
        if self.instant is None:
            return self
        return EventTime(instant=self.instant.astimezone(tz))


class CalendarEvent(BaseModel):
    """A single calendar entry as returned by the Home Assistant calendar API."""

    summary: str
    start: EventTime
    end: EventTime
    description: Optional[str] = None
    location: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_all_day(self) -> bool:
        return not (self.start.is_instant and self.end.is_instant)

    @property
    def start_date(self) -> date:
        """Date the event is grouped under (its start date)."""
        return self.start.calendar_date()

    def astimezone(self, tz: tzinfo) -> CalendarEvent:
        return self.model_copy(
            update={"start": self.start.astimezone(tz), "end": self.end.astimezone(tz)}
        )


class TemperatureReading(BaseModel):
    """Temperature (°C) and relative humidity (%) of one sensor."""

    name: str = ""
    temperature: float
    humidity: float


class TemperatureReport(BaseModel):
    """Readings of the primary sensor and all secondaries, in configured order."""

    primary: TemperatureReading
    secondaries: list[TemperatureReading] = Field(default_factory=list)


class RenderInput(BaseModel):
    """Everything the layout engine needs to draw one status image."""

    today: date
    events: list[CalendarEvent] = Field(default_factory=list)
    primary_reading: TemperatureReading
    secondary_readings: list[TemperatureReading] = Field(default_factory=list)
    generated_at: datetime
    locale: str = "en"

    @model_validator(mode="before")
    @classmethod
    def _default_today(cls, data: Any) -> Any:
        # ``today`` defaults to the date of ``generated_at``
        if isinstance(data, dict) and data.get("today") is None:
            generated = data.get("generated_at")
            if isinstance(generated, datetime):
                data = {**data, "today": generated.date()}
        return data
