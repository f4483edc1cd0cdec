"""Temperature collaborator backed by the Home Assistant states API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..config_loader import Config, TemperatureDeviceConfig
from ..exceptions import TemperatureFetchError
from ..models import TemperatureReading, TemperatureReport

logger = logging.getLogger(__name__)


class TemperatureClient:
    """Read temperature and humidity sensors from Home Assistant."""

    def __init__(self, config: Config, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    async def fetch_value(self, entity: str) -> float:
        """Return the numeric state of ``entity``.

        Raises:
            TemperatureFetchError: when the request fails or the state is not a number
        """
        ha = self.config.home_assistant
        if not ha.host:
            raise TemperatureFetchError("Home Assistant host not configured")
        if not entity:
            raise TemperatureFetchError("Sensor entity id is empty")

        url = f"{ha.host}api/states/{entity}"
        try:
            response = await self.client.get(
                url, headers={"Authorization": f"Bearer {ha.api_key}"}
            )
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPError as exc:
            raise TemperatureFetchError(f"Sensor request for {entity} failed: {exc}") from exc
        except ValueError as exc:
            raise TemperatureFetchError(f"Sensor response for {entity} is not valid JSON") from exc

        state = payload.get("state") if isinstance(payload, dict) else None
        if state is None:
            raise TemperatureFetchError(f"Sensor response for {entity} has no state")
        try:
            return float(state)
        except (TypeError, ValueError) as exc:
            raise TemperatureFetchError(f"Sensor {entity} state {state!r} is not numeric") from exc

    async def fetch_reading(self, sensor: TemperatureDeviceConfig) -> TemperatureReading:
        temperature = await self.fetch_value(sensor.temperature_entity)
        humidity = await self.fetch_value(sensor.humidity_entity)
        return TemperatureReading(name=sensor.name, temperature=temperature, humidity=humidity)

    async def get_report(self) -> TemperatureReport:
        """Read the primary sensor and every secondary sensor.

        Sensors are read concurrently; the report keeps the configured order.
        """
        cfg = self.config.temperature
        if cfg.primary is None:
            raise TemperatureFetchError("No primary temperature sensor configured")

        readings = await asyncio.gather(
            self.fetch_reading(cfg.primary),
            *(self.fetch_reading(s) for s in cfg.secondaries),
        )
        primary, *secondaries = readings
        logger.debug(
            "Primary %.1f°C, %d secondary sensors read", primary.temperature, len(secondaries)
        )
        return TemperatureReport(primary=primary, secondaries=secondaries)
