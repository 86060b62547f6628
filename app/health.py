"""
Health check endpoints for liveness and readiness probes.
"""
from datetime import datetime, timezone
from typing import Dict, Any, Mapping
import psutil
from .config import SERVICE_NAME, VERSION
from .logging import get_logger
from .store import ResourceStore

logger = get_logger()


class HealthChecker:
    """
    Health checker for the api-demo service.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (can the service handle traffic?)
    """

    def __init__(
        self,
        service_name: str = SERVICE_NAME,
        version: str = VERSION,
        stores: Mapping[str, ResourceStore] | None = None,
    ):
        self.service_name = service_name
        self.version = version
        self.stores = dict(stores or {})

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def liveness(self) -> Dict[str, Any]:
        """
        Liveness check - basic health check.

        Returns:
            dict: Health status with service info and timestamp
        """
        return {
            "status": "ok",
            "service": self.service_name,
            "version": self.version,
            "timestamp": self._timestamp(),
        }

    def readiness(self) -> Dict[str, Any]:
        """
        Readiness check - comprehensive health check.

        Checks:
        - Resource store sizes
        - Disk space availability
        - Memory availability

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {
            "stores": self._check_stores(),
            "disk_space": self._check_disk_space(),
            "memory": self._check_memory(),
        }
        overall_status = "ready"
        if any(check["status"] == "error" for check in checks.values()):
            overall_status = "not_ready"

        return {
            "status": overall_status,
            "service": self.service_name,
            "version": self.version,
            "timestamp": self._timestamp(),
            "checks": checks,
        }

    def _check_stores(self) -> Dict[str, Any]:
        """
        Report the number of resources held by each store.

        Returns:
            dict: Store check result
        """
        return {
            "status": "ok",
            "collections": {name: store.count() for name, store in self.stores.items()},
        }

    def _check_disk_space(self, threshold_gb: float = 1.0) -> Dict[str, Any]:
        """
        Check available disk space.

        Args:
            threshold_gb: Minimum available disk space in GB (default: 1.0)

        Returns:
            dict: Disk space health check result
        """
        try:
            disk = psutil.disk_usage("/")
            available_gb = disk.free / (1024**3)

            if available_gb < threshold_gb:
                status = "error"
            elif available_gb < threshold_gb * 2:
                status = "warning"
            else:
                status = "ok"

            return {
                "status": status,
                "available_gb": round(available_gb, 2),
                "total_gb": round(disk.total / (1024**3), 2),
                "used_percent": disk.percent,
            }

        except OSError as e:
            logger.warning("disk_health_check_failed", error=str(e))
            return {
                "status": "error",
                "error": str(e),
            }

    def _check_memory(self, threshold_mb: float = 50.0) -> Dict[str, Any]:
        """
        Check available memory against what the stores hold. Resources
        and uploaded image bytes live only in process memory, so running
        low means new creates will fail.

        Args:
            threshold_mb: Minimum available memory in MB (default: 50.0)

        Returns:
            dict: Memory health check result including the stored resource count
        """
        stored = sum(store.count() for store in self.stores.values())
        try:
            memory = psutil.virtual_memory()
        except OSError as e:
            logger.warning("memory_health_check_failed", error=str(e))
            return {"status": "error", "error": str(e), "stored_resources": stored}

        available_mb = memory.available / (1024**2)
        result = {
            "status": "ok",
            "available_mb": round(available_mb, 2),
            "total_mb": round(memory.total / (1024**2), 2),
            "used_percent": memory.percent,
            "stored_resources": stored,
        }
        if available_mb < threshold_mb * 2:
            result["status"] = "error" if available_mb < threshold_mb else "warning"
            result["message"] = (
                f"{round(available_mb, 2)} MB available with {stored} resources held in memory"
            )
            logger.warning("memory_low", available_mb=result["available_mb"], stored_resources=stored)
        return result
