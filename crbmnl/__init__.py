"""crbmnl - e-ink status display server.

Renders a calendar agenda and temperature readings from Home Assistant into a
1-bit 800x480 bitmap and serves it to a TRMNL-style display device.
"""

__version__ = "0.1.0"

from typing import Optional


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Installs a colorized console handler so that startup messages are visible
    before the configuration is loaded. Callers may adjust the level later
    (e.g. from config).

    Honors CRBMNL_DEBUG (truthy values: "1", "true", "yes", "on"), which forces
    DEBUG verbosity.
    """
    import logging
    import os
    import sys

    from colorlog import ColoredFormatter

    from .lite_logging import CorrelationIdFilter

    debug_env = os.environ.get("CRBMNL_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure a handler if none is present to avoid duplicate output.
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   [request id] logger.name: message
        fmt = (
            "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s "
            "[%(request_id)s] %(name)s: %(message)s"
        )
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        handler.addFilter(CorrelationIdFilter())
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


def run_server(args: Optional[object] = None) -> None:
    """Load configuration and run the HTTP server until shutdown.

    Args:
        args: Optional argparse namespace with ``config``, ``host``, ``port``
              and ``debug`` overrides.

    Behavior:
    - Initialize console logging early using CRBMNL_LOG_LEVEL (env) if present.
    - Load the YAML configuration and apply command line overrides.
    - Apply the configured log level and third-party logger policy.
    - Delegate to ``crbmnl.api.server.start_server``.
    """
    import logging
    import os

    _init_logging(os.environ.get("CRBMNL_LOG_LEVEL"))
    logger = logging.getLogger(__name__)

    from .api.server import start_server
    from .config_loader import load_config
    from .lite_logging import configure_lite_logging

    config = load_config(getattr(args, "config", None))

    if args is not None:
        port = getattr(args, "port", None)
        if port is not None:
            config.server_port = int(port)
            logger.debug("Applied command line port override: %d", config.server_port)
        host = getattr(args, "host", None)
        if host:
            config.server_bind = host

    debug = bool(getattr(args, "debug", False)) or config.log_level == "DEBUG"
    configure_lite_logging(debug_mode=debug)
    if not debug:
        logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))

    logger.info("Starting crbmnl %s", __version__)
    start_server(config)
