"""crbmnl.config_loader

Config loader for crbmnl.

- Reads YAML (PyYAML ``safe_load``); a missing file yields defaults.
- Exposes typed dataclasses and a ``load_config()`` helper that accepts an
  optional path override.
- Environment variables override file values (see ``apply_env_overrides``).
"""

from __future__ import annotations

import logging
import os
import zoneinfo
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "crbmnl.yaml"
SUPPORTED_LOCALES = ("en", "pl")


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return the nested mapping under ``key``; a missing or empty section is ``{}``."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section {key!r} must be a mapping, got {type(value).__name__}")
    return value


@dataclass
class HomeAssistantConfig:
    """Connection settings for the Home Assistant REST API."""

    host: str = ""
    api_key: str = ""
    calendar_entity: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> HomeAssistantConfig:
        data = data or {}
        host = str(data.get("host") or "")
        # urljoin semantics: without a trailing slash the last path segment is dropped
        if host and not host.endswith("/"):
            host += "/"
        return cls(
            host=host,
            api_key=str(data.get("api_key") or ""),
            calendar_entity=str(data.get("calendar_entity") or ""),
        )


@dataclass
class TemperatureDeviceConfig:
    """A sensor made of a temperature entity and a humidity entity."""

    name: str
    temperature_entity: str
    humidity_entity: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemperatureDeviceConfig:
        return cls(
            name=str(data.get("name") or ""),
            temperature_entity=str(data.get("temperature_entity") or ""),
            humidity_entity=str(data.get("humidity_entity") or ""),
        )


@dataclass
class TemperatureConfig:
    primary: TemperatureDeviceConfig | None = None
    secondaries: list[TemperatureDeviceConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TemperatureConfig:
        data = data or {}
        primary_raw = data.get("primary")
        primary = (
            TemperatureDeviceConfig.from_dict(primary_raw)
            if isinstance(primary_raw, dict)
            else None
        )

        secondaries_raw = data.get("secondaries") or []
        if not isinstance(secondaries_raw, (list, tuple)):
            logger.warning("Config `temperature.secondaries` is not a list; ignoring")
            secondaries_raw = []
        secondaries = [
            TemperatureDeviceConfig.from_dict(s) for s in secondaries_raw if isinstance(s, dict)
        ]
        return cls(primary=primary, secondaries=secondaries)


@dataclass
class DeviceConfig:
    """Values handed to the display device by the polling endpoints.

    Fields:
        base_url: public URL of this server as seen by the device
        api_key: key returned from /api/setup
        friendly_id: short device id returned from /api/setup
        refresh_rate: seconds between device polls
        image_url_timeout: seconds the device waits for the image download
        firmware_url: optional firmware image URL advertised to the device
        use_static_image: advertise the static test pattern instead of the render
    """

    base_url: str = "http://localhost:8080"
    api_key: str = ""
    friendly_id: str = ""
    refresh_rate: int = 60
    image_url_timeout: int = 60
    firmware_url: str | None = None
    use_static_image: bool = False

    @property
    def image_path(self) -> str:
        return "/static/rover.bmp" if self.use_static_image else "/render.bmp"

    @property
    def image_url(self) -> str:
        return self.base_url.rstrip("/") + self.image_path

    @property
    def image_filename(self) -> str:
        return self.image_path.rsplit("/", 1)[-1]


@dataclass
class Config:
    """Typed configuration for crbmnl.

    Fields:
        timezone: IANA timezone used for "today", the fetch window and timestamps
        locale: language of dates and labels drawn on the image ("en" or "pl")
        calendar_days: number of days of calendar events to fetch
        server_bind: host to bind the HTTP server to
        server_port: port for the HTTP server
        log_level: logging level name
        font_dir: optional directory holding Roboto-Light.ttf and Roboto-Bold.ttf
        home_assistant: Home Assistant connection settings
        temperature: primary and secondary sensor entities
        device: values returned to the display device
    """

    timezone: str = "UTC"
    locale: str = "en"
    calendar_days: int = 14
    server_bind: str = "0.0.0.0"  # nosec: B104 - the display device connects over the LAN
    server_port: int = 8080
    log_level: str = "INFO"
    font_dir: str | None = None
    home_assistant: HomeAssistantConfig = field(default_factory=HomeAssistantConfig)
    temperature: TemperatureConfig = field(default_factory=TemperatureConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)

    @property
    def tzinfo(self) -> zoneinfo.ZoneInfo:
        return zoneinfo.ZoneInfo(self.timezone)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int (falling back to the default with a
        warning) and unknown locales fall back to "en". An unknown timezone or a
        section (device, home_assistant, temperature) that is not a mapping raises
        ConfigError.
        """
        if data is None:
            data = {}

        def _coerce_int(mapping: dict[str, Any], key: str, default: int) -> int:
            raw = mapping.get(key, default)
            try:
                return int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default

        timezone = str(data.get("timezone") or "UTC")
        try:
            zoneinfo.ZoneInfo(timezone)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone {timezone!r}") from exc

        locale = str(data.get("locale") or "en").lower()
        if locale not in SUPPORTED_LOCALES:
            logger.warning("Config locale %r not supported; using 'en'", locale)
            locale = "en"

        calendar_days = _coerce_int(data, "calendar_days", 14)
        if calendar_days < 1:
            logger.warning("calendar_days %d below minimum; coercing to 1", calendar_days)
            calendar_days = 1

        font_dir = data.get("font_dir")

        device_raw = _section(data, "device")
        firmware_url = device_raw.get("firmware_url")
        device = DeviceConfig(
            base_url=str(device_raw.get("base_url") or DeviceConfig.base_url),
            api_key=str(device_raw.get("api_key") or ""),
            friendly_id=str(device_raw.get("friendly_id") or ""),
            refresh_rate=_coerce_int(device_raw, "refresh_rate", 60),
            image_url_timeout=_coerce_int(device_raw, "image_url_timeout", 60),
            firmware_url=str(firmware_url) if firmware_url else None,
            use_static_image=bool(device_raw.get("use_static_image", False)),
        )

        return cls(
            timezone=timezone,
            locale=locale,
            calendar_days=calendar_days,
            server_bind=str(data.get("server_bind") or "0.0.0.0"),  # nosec: B104
            server_port=_coerce_int(data, "server_port", 8080),
            log_level=str(data.get("log_level") or "INFO").upper(),
            font_dir=str(font_dir) if font_dir else None,
            home_assistant=HomeAssistantConfig.from_dict(_section(data, "home_assistant")),
            temperature=TemperatureConfig.from_dict(_section(data, "temperature")),
            device=device,
        )


def _load_yaml(path: Path) -> Any:
    """Load a YAML document from ``path``; an empty file yields an empty mapping."""
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc
    return {} if loaded is None else loaded


def apply_env_overrides(data: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Overlay environment variables onto a raw config mapping.

    Recognizes:
      - CRBMNL_WEB_HOST -> server_bind
      - CRBMNL_WEB_PORT -> server_port
      - CRBMNL_LOG_LEVEL -> log_level
      - CRBMNL_TIMEZONE -> timezone
      - CRBMNL_HA_TOKEN -> home_assistant.api_key

    Returns:
        A new mapping; ``data`` is not modified.
    """
    env = os.environ if environ is None else environ
    merged = dict(data)

    host = env.get("CRBMNL_WEB_HOST")
    if host:
        merged["server_bind"] = host

    port = env.get("CRBMNL_WEB_PORT")
    if port:
        try:
            merged["server_port"] = int(port)
        except ValueError:
            logger.warning("Invalid CRBMNL_WEB_PORT=%r; ignoring", port)

    level = env.get("CRBMNL_LOG_LEVEL")
    if level:
        merged["log_level"] = level

    tz = env.get("CRBMNL_TIMEZONE")
    if tz:
        merged["timezone"] = tz

    token = env.get("CRBMNL_HA_TOKEN")
    home_assistant = merged.get("home_assistant") or {}
    if token and isinstance(home_assistant, dict):
        merged["home_assistant"] = {**home_assistant, "api_key": token}

    return merged


def load_config(path: str | None = None, environ: dict[str, str] | None = None) -> Config:
    """Load configuration from a YAML file and return a Config instance.

    Args:
        path: Optional path to the config file. Falls back to CRBMNL_CONFIG and
              then ./crbmnl.yaml (relative to current working dir).
        environ: Environment mapping used for overrides (defaults to os.environ).

    Behavior:
    - If file is missing: returns defaults (plus environment overrides).
    - If file exists but top-level is not a mapping: raises ConfigError.
    """
    env = os.environ if environ is None else environ
    p = Path(path or env.get("CRBMNL_CONFIG") or DEFAULT_CONFIG_PATH)
    logger.debug("Attempting to load config from %s", p)

    raw: Any
    if p.exists():
        raw = _load_yaml(p)
        if not isinstance(raw, dict):
            logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
            raise ConfigError("Config file must contain a mapping at top level")
        logger.info("Loaded configuration from %s", p)
    else:
        logger.info("Config file %s not found; using defaults", p)
        raw = {}

    cfg = Config.from_dict(apply_env_overrides(raw, env))
    logger.debug(
        "Configuration: timezone=%s locale=%s bind=%s:%d sensors=%d",
        cfg.timezone,
        cfg.locale,
        cfg.server_bind,
        cfg.server_port,
        len(cfg.temperature.secondaries) + (1 if cfg.temperature.primary else 0),
    )
    return cfg
