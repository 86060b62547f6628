"""Error taxonomy shared by the resource store, the preview pipeline and the services."""


class ResourceError(Exception):
    """Base exception for resource service errors"""

    code = "Unknown"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(ResourceError):
    """Raised for malformed input: missing fields, malformed names, unsupported types"""

    code = "InvalidArgument"
    status_code = 400


class NotFoundError(ResourceError):
    """Raised when a resource name does not refer to a stored resource"""

    code = "NotFound"
    status_code = 404


class InternalError(ResourceError):
    """Raised for preview processing failures and broken invariants"""

    code = "Internal"
    status_code = 500
