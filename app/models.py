"""Public resource models returned by the store and the services."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timedelta


class Resource(BaseModel):
    """A named, uniquely identified stored item.

    ``name`` and ``create_time`` are empty on drafts and assigned by the
    store at insertion.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""
    create_time: datetime | None = None


class Event(Resource):
    """A usage event: who did what, where, and how long it took."""
    subject: str = Field(..., description="Actor, e.g. users/anonymous")
    source: str = Field(..., description="Component that emitted the event")
    action: str = Field(..., description="Performed action")
    execution_duration: timedelta = Field(..., description="Execution time of the action")


class ImagePreview(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str


class Image(Resource):
    """Image metadata. The original bytes stay in the store entry."""
    filename: str
    mime_type: str
    size_bytes: int
    preview: ImagePreview
