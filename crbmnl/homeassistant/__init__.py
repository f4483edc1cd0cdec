"""Home Assistant data collaborators (calendar and temperature sensors)."""

from .calendar import CalendarClient
from .temperature import TemperatureClient

__all__ = ["CalendarClient", "TemperatureClient"]
