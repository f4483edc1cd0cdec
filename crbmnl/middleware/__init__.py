"""aiohttp middleware for crbmnl."""

from .correlation_id import correlation_id_middleware, get_request_id, request_id_var

__all__ = ["correlation_id_middleware", "get_request_id", "request_id_var"]
