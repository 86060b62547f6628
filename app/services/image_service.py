"""ImageService for uploading, previewing and downloading images"""
import time

import structlog

from ..errors import InternalError, InvalidArgumentError
from ..imaging import PreviewError, detect_mime_type, generate_preview, is_supported
from ..imaging.preview import PREVIEW_MAX_HEIGHT, PREVIEW_MAX_WIDTH
from ..metrics import Metrics
from ..models import Image
from ..store import InMemoryResourceStore, Page, ResourceStore

log = structlog.get_logger()

IMAGES_COLLECTION = "images"


class ImageService:
    """
    Service for image resources

    Every image gets a PNG preview at creation time. The original bytes
    are kept by the store and served by :meth:`download_image`.
    """

    def __init__(
        self,
        store: ResourceStore[Image] | None = None,
        metrics: Metrics | None = None,
        preview_max_width: int = PREVIEW_MAX_WIDTH,
        preview_max_height: int = PREVIEW_MAX_HEIGHT,
        preview_fit_inside: bool = False,
    ):
        """
        Initialize ImageService

        Args:
            store: Backing store (creates an in-memory one if not provided)
            metrics: Optional Prometheus metrics to record into
            preview_max_width: Preview bounding box width
            preview_max_height: Preview bounding box height
            preview_fit_inside: Keep both preview sides inside the box
        """
        self.store = store if store is not None else InMemoryResourceStore[Image](IMAGES_COLLECTION)
        self.metrics = metrics
        self.preview_max_width = preview_max_width
        self.preview_max_height = preview_max_height
        self.preview_fit_inside = preview_fit_inside

    def create_image(self, filename: str, data: bytes) -> Image:
        """
        Store an uploaded image together with its preview

        Args:
            filename: Original file name
            data: Encoded image bytes (JPEG, PNG or GIF)

        Returns:
            The stored image metadata

        Raises:
            InvalidArgumentError: If a field is missing or the type is unsupported
            InternalError: If the preview cannot be generated
        """
        if not filename:
            raise InvalidArgumentError("filename is required")
        if not data:
            raise InvalidArgumentError("data is required")

        mime_type = detect_mime_type(data)
        if not is_supported(mime_type):
            raise InvalidArgumentError(f"unsupported image type: {mime_type}")

        start = time.perf_counter()
        try:
            preview = generate_preview(
                data,
                max_width=self.preview_max_width,
                max_height=self.preview_max_height,
                fit_inside=self.preview_fit_inside,
            )
        except PreviewError as e:
            log.warning("image.preview_failed", filename=filename, mime_type=mime_type, error=str(e))
            raise InternalError(f"failed to generate preview: {e}") from e
        if self.metrics:
            self.metrics.preview_generation_seconds.observe(time.perf_counter() - start)

        image = self.store.insert(
            Image(filename=filename, mime_type=mime_type, size_bytes=len(data), preview=preview),
            data=data,
        )
        if self.metrics:
            self.metrics.record_image_uploaded(mime_type, len(data))
            self.metrics.record_created(IMAGES_COLLECTION, self.store.count())

        log.info("image.created", name=image.name, filename=filename, mime_type=mime_type, size_bytes=len(data))
        return image

    def get_image(self, name: str) -> Image:
        return self.store.get(name)

    def list_images(self, page_size: int = 0, page_token: str = "") -> Page[Image]:
        return self.store.list(page_size=page_size, page_token=page_token)

    def delete_image(self, name: str) -> None:
        self.store.delete(name)
        if self.metrics:
            self.metrics.record_deleted(IMAGES_COLLECTION, self.store.count())

    def download_image(self, name: str) -> tuple[bytes, str]:
        """
        Return the original bytes and MIME type of an image

        Raises:
            InvalidArgumentError: If the name is malformed
            NotFoundError: If the image does not exist
        """
        entry = self.store.get_entry(name)
        if entry.data is None:
            raise InternalError(f"image {name} has no stored data")
        return entry.data, entry.resource.mime_type
