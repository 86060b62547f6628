"""
HTTP client for the api-demo service, plus a small demo entry point that
records one usage event and lists the stored events.
"""
import argparse
from datetime import timedelta
from typing import Any, Dict

import httpx

from .api.schemas import decode_bytes, encode_bytes, format_duration
from .logging import get_logger, setup_logging

logger = get_logger()


class ApiClientError(Exception):
    """Raised when the service answers with an error body"""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.message = message


class ApiClient:
    """
    Thin JSON client over ``httpx.Client``.

    Accepts an existing client so tests can pass ``TestClient(app)``.
    """

    def __init__(self, base_url: str = "http://localhost:8080", client: httpx.Client | None = None, timeout: float = 10.0):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = self._client.request(method, path, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise ApiClientError(
                response.status_code,
                body.get("error", "HTTPError"),
                body.get("message", response.text),
            )
        return response.json()

    # Events

    def create_event(self, subject: str, source: str, action: str, execution_duration: timedelta) -> Dict[str, Any]:
        body = {
            "event": {
                "subject": subject,
                "source": source,
                "action": action,
                "execution_duration": format_duration(execution_duration),
            }
        }
        return self._request("POST", "/v1/events", json=body)["event"]

    def list_events(self, page_size: int = 0, page_token: str = "") -> Dict[str, Any]:
        return self._request("GET", "/v1/events", params={"page_size": page_size, "page_token": page_token})

    def get_event(self, name: str) -> Dict[str, Any]:
        return self._request("GET", f"/v1/{name}")["event"]

    def delete_event(self, name: str) -> None:
        self._request("DELETE", f"/v1/{name}")

    # Images

    def create_image(self, filename: str, data: bytes) -> Dict[str, Any]:
        body = {"image": {"filename": filename, "data": encode_bytes(data)}}
        return self._request("POST", "/v1/images", json=body)["image"]

    def list_images(self, page_size: int = 0, page_token: str = "") -> Dict[str, Any]:
        return self._request("GET", "/v1/images", params={"page_size": page_size, "page_token": page_token})

    def get_image(self, name: str) -> Dict[str, Any]:
        return self._request("GET", f"/v1/{name}")["image"]

    def delete_image(self, name: str) -> None:
        self._request("DELETE", f"/v1/{name}")

    def download_image(self, name: str) -> tuple[bytes, str]:
        body = self._request("GET", f"/v1/{name}:download")
        return decode_bytes(body["data"], "data"), body["mime_type"]


def run_demo(client: ApiClient) -> Dict[str, Any]:
    """Create the sample event and list events; returns the list response."""
    created = client.create_event(
        subject="users/anonymous",
        source="animal-classifier",
        action="classify",
        execution_duration=timedelta(milliseconds=1500),
    )
    logger.info("client.event_created", name=created["name"])

    listing = client.list_events(page_size=10)
    logger.info("client.events_listed", count=len(listing["events"]))
    for event in listing["events"]:
        logger.info(
            "client.event",
            name=event["name"],
            source=event["source"],
            action=event["action"],
            execution_duration=event["execution_duration"],
        )
    return listing


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="api-demo example client")
    parser.add_argument("--base-url", default="http://localhost:8080", help="Service base URL")
    args = parser.parse_args(argv)

    setup_logging(json_output=False)
    with ApiClient(base_url=args.base_url) as client:
        try:
            run_demo(client)
        except (ApiClientError, httpx.HTTPError) as e:
            logger.error("client.failed", error=str(e))
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
