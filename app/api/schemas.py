"""JSON wire models for the HTTP binding.

Bytes travel as standard base64 strings and durations in the protobuf
JSON form (``"1.500s"``), the way the gRPC gateway renders them.
"""
import base64
import binascii
from datetime import datetime, timedelta
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from ..errors import InvalidArgumentError
from ..models import Event, Image


def parse_duration(value: Any) -> Any:
    """Accept ``"1.5s"`` strings and plain seconds, leave the rest to pydantic."""
    if isinstance(value, str) and value.endswith("s"):
        try:
            return timedelta(seconds=float(value[:-1]))
        except (ValueError, OverflowError):
            raise ValueError(f"invalid duration: {value}") from None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return timedelta(seconds=value)
        except (ValueError, OverflowError):
            raise ValueError(f"invalid duration: {value}") from None
    return value


def format_duration(value: timedelta) -> str:
    """Render a duration with 0, 3 or 6 fractional digits, e.g. ``"1.500s"``."""
    micros = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    sign = "-" if micros < 0 else ""
    seconds, frac = divmod(abs(micros), 1_000_000)
    if frac == 0:
        return f"{sign}{seconds}s"
    if frac % 1000 == 0:
        return f"{sign}{seconds}.{frac // 1000:03d}s"
    return f"{sign}{seconds}.{frac:06d}s"


def decode_bytes(value: str, field: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidArgumentError(f"{field} is not valid base64") from None


def encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


# Events

class EventBody(BaseModel):
    subject: str = ""
    source: str = ""
    action: str = ""
    execution_duration: timedelta | None = None

    @field_validator("execution_duration", mode="before")
    @classmethod
    def parse_execution_duration(cls, value: Any) -> Any:
        return parse_duration(value)


class CreateEventRequest(BaseModel):
    event: EventBody = Field(default_factory=EventBody)


class EventOut(BaseModel):
    name: str
    subject: str
    source: str
    action: str
    execution_duration: str
    create_time: datetime | None

    @classmethod
    def from_event(cls, event: Event) -> "EventOut":
        return cls(
            name=event.name,
            subject=event.subject,
            source=event.source,
            action=event.action,
            execution_duration=format_duration(event.execution_duration),
            create_time=event.create_time,
        )


class EventResponse(BaseModel):
    event: EventOut


class ListEventsResponse(BaseModel):
    events: List[EventOut]
    next_page_token: str = ""


# Images

class ImageBody(BaseModel):
    filename: str = ""
    data: str = Field(default="", description="Base64-encoded image bytes")


class CreateImageRequest(BaseModel):
    image: ImageBody = Field(default_factory=ImageBody)


class PreviewOut(BaseModel):
    data: str
    mime_type: str


class ImageOut(BaseModel):
    name: str
    filename: str
    mime_type: str
    size_bytes: int
    create_time: datetime | None
    preview: PreviewOut

    @classmethod
    def from_image(cls, image: Image) -> "ImageOut":
        return cls(
            name=image.name,
            filename=image.filename,
            mime_type=image.mime_type,
            size_bytes=image.size_bytes,
            create_time=image.create_time,
            preview=PreviewOut(data=encode_bytes(image.preview.data), mime_type=image.preview.mime_type),
        )


class ImageResponse(BaseModel):
    image: ImageOut


class ListImagesResponse(BaseModel):
    images: List[ImageOut]
    next_page_token: str = ""


class DownloadImageResponse(BaseModel):
    data: str
    mime_type: str


class EmptyResponse(BaseModel):
    pass
