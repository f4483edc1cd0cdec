"""Unit tests for crbmnl.rendering.text_format."""

import datetime

import pytest

from crbmnl.models import TemperatureReading
from crbmnl.rendering.text_format import (
    format_date,
    format_event_line,
    format_generated,
    format_primary_temperature,
    format_secondary_reading,
)
from tests.fixtures.factories import all_day_event, timed_event

pytestmark = pytest.mark.unit


class TestFormatDate:
    @pytest.mark.parametrize(
        "locale,expected",
        [
            ("en", "5 March 2024"),
            ("pl", "5 marca 2024"),
            ("de", "5 March 2024"),
        ],
    )
    def test_day_month_year(self, locale, expected):
        assert format_date(datetime.date(2024, 3, 5), locale) == expected

    def test_polish_uses_genitive_month(self):
        assert format_date(datetime.date(2026, 10, 18), "pl") == "18 października 2026"


class TestFormatEventLine:
    """Test agenda lines for timed and all-day events."""

    def test_timed_event_shows_unpadded_hours(self, warsaw):
        event = timed_event(
            "Standup",
            datetime.datetime(2024, 3, 5, 9, 5, tzinfo=warsaw),
            datetime.datetime(2024, 3, 5, 10, 0, tzinfo=warsaw),
        )

        assert format_event_line(event) == "9:05-10:00 Standup"

    def test_evening_event_uses_24h_clock(self, warsaw):
        event = timed_event(
            "Cinema",
            datetime.datetime(2024, 3, 5, 20, 30, tzinfo=warsaw),
            datetime.datetime(2024, 3, 5, 23, 15, tzinfo=warsaw),
        )

        assert format_event_line(event) == "20:30-23:15 Cinema"

    def test_all_day_event_shows_summary(self):
        event = all_day_event("Holiday", datetime.date(2024, 3, 5), datetime.date(2024, 3, 6))

        assert format_event_line(event) == "Holiday"


class TestFormatReadings:
    def test_primary_temperature(self):
        reading = TemperatureReading(name="Living room", temperature=21.54, humidity=40)

        assert format_primary_temperature(reading) == "21.5°C"

    def test_secondary_reading(self):
        reading = TemperatureReading(name="Bedroom", temperature=19.0, humidity=45.2)

        assert format_secondary_reading(reading) == "Bedroom: 19.0°C, 45%"

    def test_secondary_reading_negative_temperature(self):
        reading = TemperatureReading(name="Outside", temperature=-7.06, humidity=87.6)

        assert format_secondary_reading(reading) == "Outside: -7.1°C, 88%"


class TestFormatGenerated:
    """Test the footer timestamp."""

    def test_includes_zone_abbreviation(self, warsaw):
        generated = datetime.datetime(2024, 7, 1, 8, 0, 5, tzinfo=warsaw)

        assert format_generated(generated) == "Generated: 2024-07-01 08:00:05 CEST"

    def test_utc(self):
        generated = datetime.datetime(2024, 1, 5, 14, 3, 27, tzinfo=datetime.timezone.utc)

        assert format_generated(generated) == "Generated: 2024-01-05 14:03:27 UTC"

    def test_polish_label(self, warsaw):
        generated = datetime.datetime(2024, 1, 5, 14, 3, 27, tzinfo=warsaw)

        assert format_generated(generated, "pl") == "Wygenerowano: 2024-01-05 14:03:27 CET"

    def test_naive_datetime_has_no_trailing_space(self):
        generated = datetime.datetime(2024, 1, 5, 14, 3, 27)

        assert format_generated(generated) == "Generated: 2024-01-05 14:03:27"
