"""
Resource services: validation in front of the resource stores.
"""

from .event_service import EVENTS_COLLECTION, EventService
from .image_service import IMAGES_COLLECTION, ImageService

__all__ = [
    "EVENTS_COLLECTION",
    "EventService",
    "IMAGES_COLLECTION",
    "ImageService",
]
