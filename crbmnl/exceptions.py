"""Exception hierarchy for crbmnl.

Render requests either produce a complete bitmap or fail with one of these
errors; the HTTP layer maps them onto status codes.
"""


class CrbmnlError(Exception):
    """Base exception for all crbmnl errors."""


class ConfigError(CrbmnlError):
    """Configuration could not be loaded.

    Raised when:
    - The config file is not valid YAML
    - The top-level document is not a mapping
    - The configured timezone is not a valid IANA timezone
    """


class DataFetchError(CrbmnlError):
    """A data collaborator was unreachable or returned malformed data.

    Fatal to the current render and never retried by the core.
    Should result in HTTP 502 Bad Gateway response.
    """


class CalendarFetchError(DataFetchError):
    """Fetching or parsing calendar events from Home Assistant failed."""


class TemperatureFetchError(DataFetchError):
    """Fetching or parsing a sensor state from Home Assistant failed.

    Raised when:
    - The states endpoint is unreachable or answers with an error status
    - The response has no ``state`` field
    - The state is not numeric (e.g. ``unavailable``)
    """


class EncodingPreconditionError(CrbmnlError):
    """Bitmap encoding contract violated.

    Raised when the canvas width is not a multiple of 8 or the packed data
    length does not match the declared dimensions. Unreachable with the
    fixed 800x480 canvas.

    Should result in HTTP 500 Internal Server Error response.
    """
