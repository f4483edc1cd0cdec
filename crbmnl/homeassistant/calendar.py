"""Calendar collaborator backed by the Home Assistant calendar API."""

from __future__ import annotations

import datetime
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config_loader import Config
from ..core.timezone_utils import day_window, now_utc
from ..exceptions import CalendarFetchError
from ..models import CalendarEvent

logger = logging.getLogger(__name__)

_EVENT_LIST = TypeAdapter(list[CalendarEvent])


class CalendarClient:
    """Fetch calendar events for a time range.

    Events are returned in the order Home Assistant sends them, with instants
    converted to the configured timezone so dates and clock times on the image
    are local.
    """

    def __init__(self, config: Config, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    def _events_url(self) -> str:
        ha = self.config.home_assistant
        if not ha.host or not ha.calendar_entity:
            raise CalendarFetchError("Home Assistant host or calendar_entity not configured")
        return f"{ha.host}api/calendars/{ha.calendar_entity}"

    async def fetch_events(
        self, start: datetime.datetime, end: datetime.datetime
    ) -> list[CalendarEvent]:
        """Return the events between ``start`` and ``end``.

        Raises:
            CalendarFetchError: on transport errors, error statuses, non-JSON
                bodies or events that fail validation
        """
        url = self._events_url()
        params = {"start": start.isoformat(), "end": end.isoformat()}
        headers = {"Authorization": f"Bearer {self.config.home_assistant.api_key}"}

        try:
            response = await self.client.get(url, params=params, headers=headers)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPError as exc:
            raise CalendarFetchError(f"Calendar request failed: {exc}") from exc
        except ValueError as exc:
            raise CalendarFetchError("Calendar response is not valid JSON") from exc

        try:
            events = _EVENT_LIST.validate_python(payload)
        except ValidationError as exc:
            raise CalendarFetchError(f"Malformed calendar response: {exc}") from exc

        tz = self.config.tzinfo
        events = [event.astimezone(tz) for event in events]
        logger.debug("Fetched %d calendar events from %s", len(events), url)
        return events

    async def get_next_n_days(
        self, n: int, now: datetime.datetime | None = None
    ) -> list[CalendarEvent]:
        """Events from local midnight today through ``n`` days ahead."""
        start, end = day_window(now or now_utc(), self.config.tzinfo, n)
        return await self.fetch_events(start, end)
