"""
Preview generation: decode an uploaded image, downscale it into a bounding
box preserving aspect ratio, and re-encode it as PNG.
"""
import io

import structlog
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..models import ImagePreview

log = structlog.get_logger()

PREVIEW_MAX_WIDTH = 200
PREVIEW_MAX_HEIGHT = 200
PREVIEW_MIME_TYPE = "image/png"


class PreviewError(Exception):
    """Raised when an image cannot be decoded or the preview cannot be encoded"""
    pass


def _scaled(value: int, numerator: int, denominator: int) -> int:
    """Round ``value * numerator / denominator`` half up, never below 1."""
    return max(1, (2 * value * numerator + denominator) // (2 * denominator))


def preview_size(
    width: int,
    height: int,
    max_width: int = PREVIEW_MAX_WIDTH,
    max_height: int = PREVIEW_MAX_HEIGHT,
    fit_inside: bool = False,
) -> tuple[int, int]:
    """
    Compute preview dimensions for a source image.

    The dominant source side maps to the bound of the same axis. For a
    non-square box the other side can exceed its bound; ``fit_inside``
    scales by the tighter axis instead.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_width: Bounding box width
        max_height: Bounding box height
        fit_inside: Keep both sides within the box

    Returns:
        (width, height) of the preview
    """
    if width <= 0 or height <= 0:
        raise PreviewError(f"invalid image dimensions {width}x{height}")

    if fit_inside:
        # Compare max_width/width with max_height/height without floats
        if max_width * height <= max_height * width:
            return max_width, _scaled(height, max_width, width)
        return _scaled(width, max_height, height), max_height

    if width > height:
        return max_width, _scaled(height, max_width, width)
    return _scaled(width, max_height, height), max_height


def generate_preview(
    data: bytes,
    max_width: int = PREVIEW_MAX_WIDTH,
    max_height: int = PREVIEW_MAX_HEIGHT,
    fit_inside: bool = False,
) -> ImagePreview:
    """
    Generate a PNG thumbnail of an encoded image.

    Args:
        data: Encoded image bytes (JPEG, PNG, GIF, or any format Pillow reads)
        max_width: Bounding box width
        max_height: Bounding box height
        fit_inside: See :func:`preview_size`

    Returns:
        ImagePreview with PNG bytes

    Raises:
        PreviewError: If decoding or encoding fails
    """
    try:
        with PILImage.open(io.BytesIO(data)) as src:
            # open() is lazy; load() surfaces truncated or corrupt streams
            src.load()
            width, height = src.size
            size = preview_size(width, height, max_width, max_height, fit_inside)
            thumbnail = src.convert("RGBA").resize(size, resample=PILImage.Resampling.BICUBIC)
    except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, EOFError, ValueError, SyntaxError) as e:
        raise PreviewError(f"failed to decode image: {e}") from e

    buf = io.BytesIO()
    try:
        thumbnail.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise PreviewError(f"failed to encode preview: {e}") from e

    log.debug(
        "image.preview_generated",
        source_width=width,
        source_height=height,
        preview_width=size[0],
        preview_height=size[1],
    )
    return ImagePreview(data=buf.getvalue(), mime_type=PREVIEW_MIME_TYPE)
