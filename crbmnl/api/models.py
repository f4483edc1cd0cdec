"""Response models for the display device polling protocol."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class SpecialFunction(str, Enum):
    NONE = "none"


class SetupResponse(BaseModel):
    """Body of GET /api/setup."""

    api_key: str
    friendly_id: str
    image_url: str
    message: str
    status: int = 200


class DisplayResponse(BaseModel):
    """Body of GET /api/display: where to fetch the next image and when to poll again."""

    filename: str
    firmware_url: Optional[str] = None
    image_url: str
    image_url_timeout: int
    refresh_rate: int
    special_function: SpecialFunction = SpecialFunction.NONE
    reset_firmware: bool = False
    update_firmware: bool = False
