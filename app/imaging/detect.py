"""Content sniffing for uploaded image bytes."""

SUPPORTED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})

DEFAULT_MIME_TYPE = "application/octet-stream"

# Leading signatures, checked in order
_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
]


def detect_mime_type(data: bytes) -> str:
    """
    Detect the MIME type of encoded image bytes from their signature.

    Args:
        data: Raw uploaded bytes

    Returns:
        Detected MIME type, or ``application/octet-stream`` if unknown
    """
    # RIFF container: "RIFF" <size:4> "WEBP"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _SIGNATURES:
        if data.startswith(signature):
            return mime_type
    return DEFAULT_MIME_TYPE


def is_supported(mime_type: str) -> bool:
    return mime_type in SUPPORTED_MIME_TYPES
