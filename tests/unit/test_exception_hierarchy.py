"""Tests for the crbmnl exception hierarchy."""

import pytest

from crbmnl.exceptions import (
    CalendarFetchError,
    ConfigError,
    CrbmnlError,
    DataFetchError,
    EncodingPreconditionError,
    TemperatureFetchError,
)

pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Test that exceptions are grouped the way the HTTP layer maps them."""

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigError, DataFetchError, CalendarFetchError, TemperatureFetchError, EncodingPreconditionError],
    )
    def test_all_derive_from_base(self, exc_class):
        assert issubclass(exc_class, CrbmnlError)
        assert issubclass(exc_class, Exception)

    @pytest.mark.parametrize("exc_class", [CalendarFetchError, TemperatureFetchError])
    def test_fetch_errors_are_data_fetch_errors(self, exc_class):
        with pytest.raises(DataFetchError):
            raise exc_class("boom")

    def test_encoding_error_is_not_a_fetch_error(self):
        assert not issubclass(EncodingPreconditionError, DataFetchError)

    def test_message_preserved(self):
        error = CalendarFetchError("calendar unreachable")

        assert str(error) == "calendar unreachable"
