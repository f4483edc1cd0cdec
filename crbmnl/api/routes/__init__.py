"""Route registration for the crbmnl HTTP server."""

from .device_routes import register_device_routes
from .image_routes import register_image_routes

__all__ = ["register_device_routes", "register_image_routes"]
