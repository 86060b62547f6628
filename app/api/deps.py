"""Process-wide service instances, injected into routes with ``Depends``."""
from functools import lru_cache

from ..config import SERVICE_NAME, VERSION, get_settings
from ..metrics import Metrics
from ..models import Event, Image
from ..services import EVENTS_COLLECTION, IMAGES_COLLECTION, EventService, ImageService
from ..store import InMemoryResourceStore


@lru_cache(maxsize=1)
def get_metrics() -> Metrics:
    return Metrics(service_name=SERVICE_NAME, version=VERSION)


@lru_cache(maxsize=1)
def get_event_service() -> EventService:
    settings = get_settings()
    store = InMemoryResourceStore[Event](
        EVENTS_COLLECTION,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )
    return EventService(store=store, metrics=get_metrics())


@lru_cache(maxsize=1)
def get_image_service() -> ImageService:
    settings = get_settings()
    store = InMemoryResourceStore[Image](
        IMAGES_COLLECTION,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )
    return ImageService(
        store=store,
        metrics=get_metrics(),
        preview_max_width=settings.PREVIEW_MAX_WIDTH,
        preview_max_height=settings.PREVIEW_MAX_HEIGHT,
        preview_fit_inside=settings.PREVIEW_FIT_INSIDE,
    )
