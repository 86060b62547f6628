"""
Prometheus metrics for the api-demo service.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry


class Metrics:
    """
    Centralized metrics for the api-demo service.
    """

    def __init__(self, service_name: str = "apidemo", version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            ["service"],
            registry=self.registry,
        )
        self.http_requests_active.labels(service=service_name).set(0)

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # Business Metrics
        self.resources_created_total = Counter(
            "apidemo_resources_created_total",
            "Total resources created",
            ["collection"],
            registry=self.registry,
        )

        self.resources_deleted_total = Counter(
            "apidemo_resources_deleted_total",
            "Total resources deleted",
            ["collection"],
            registry=self.registry,
        )

        self.resources_stored = Gauge(
            "apidemo_resources_stored",
            "Number of resources currently held in memory",
            ["collection"],
            registry=self.registry,
        )

        self.preview_generation_seconds = Histogram(
            "apidemo_preview_generation_seconds",
            "Time spent decoding, resizing and encoding image previews",
            registry=self.registry,
        )

        self.image_size_bytes = Histogram(
            "apidemo_image_size_bytes",
            "Uploaded image size in bytes",
            ["mime_type"],
            buckets=(1024, 16 * 1024, 128 * 1024, 512 * 1024, 1024**2, 4 * 1024**2, 16 * 1024**2),
            registry=self.registry,
        )

    def record_created(self, collection: str, stored: int):
        """Record a resource creation and the resulting collection size."""
        self.resources_created_total.labels(collection=collection).inc()
        self.resources_stored.labels(collection=collection).set(stored)

    def record_deleted(self, collection: str, stored: int):
        """Record a resource deletion and the resulting collection size."""
        self.resources_deleted_total.labels(collection=collection).inc()
        self.resources_stored.labels(collection=collection).set(stored)

    def record_image_uploaded(self, mime_type: str, size_bytes: int):
        self.image_size_bytes.labels(mime_type=mime_type).observe(size_bytes)
