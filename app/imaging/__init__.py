"""
Image helpers: content sniffing and preview generation.
"""

from .detect import SUPPORTED_MIME_TYPES, detect_mime_type, is_supported
from .preview import PreviewError, generate_preview, preview_size

__all__ = [
    "SUPPORTED_MIME_TYPES",
    "detect_mime_type",
    "is_supported",
    "PreviewError",
    "generate_preview",
    "preview_size",
]
