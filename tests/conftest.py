"""Shared fixtures: sample images and fresh services wired into the app."""
import io

import pytest
from PIL import Image as PILImage

from app.main import app
from app.api.deps import get_event_service, get_image_service
from app.services import EventService, ImageService


def make_image(fmt: str = "PNG", size: tuple[int, int] = (400, 300), mode: str = "RGB") -> bytes:
    """Encode a solid-color test image."""
    img = PILImage.new(mode, size, color=(200, 40, 40) if mode == "RGB" else 1)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(name="make_image")
def make_image_fixture():
    """Factory for encoded test images."""
    return make_image


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG", (400, 300))


@pytest.fixture
def event_service() -> EventService:
    return EventService()


@pytest.fixture
def image_service() -> ImageService:
    return ImageService()


@pytest.fixture
def api_services(event_service, image_service):
    """Route requests to fresh services so tests do not share state."""
    app.dependency_overrides[get_event_service] = lambda: event_service
    app.dependency_overrides[get_image_service] = lambda: image_service
    yield event_service, image_service
    app.dependency_overrides.clear()
