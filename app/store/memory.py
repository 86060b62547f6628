"""In-memory resource store."""
import threading
from datetime import datetime, timezone
from typing import Callable, Dict

import structlog

from .base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page, R, ResourceStore, StoredEntry, normalize_page_size
from .names import format_name, new_id, parse_name
from ..errors import InternalError, InvalidArgumentError, NotFoundError

log = structlog.get_logger()

# Attempts at drawing an unused id before giving up
MAX_ID_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryResourceStore(ResourceStore[R]):
    """
    Thread-safe in-memory store for resources of one collection.

    Every access to the backing map happens under a single lock. Listing
    copies the entries under the lock and sorts outside of it.
    """

    def __init__(
        self,
        collection: str,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize an empty store

        Args:
            collection: Collection prefix of resource names, e.g. "events"
            default_page_size: Page size used when none is requested
            max_page_size: Upper bound for requested page sizes
            id_factory: Generator of random resource ids
            clock: Source of creation timestamps
        """
        self.collection = collection
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._id_factory = id_factory
        self._clock = clock
        self._entries: Dict[str, StoredEntry[R]] = {}
        self._sequence = 0
        self._lock = threading.Lock()

    def insert(self, resource: R, data: bytes | None = None) -> R:
        with self._lock:
            resource_id = self._unused_id()
            now = self._clock()
            stored = resource.model_copy(
                update={"name": format_name(self.collection, resource_id), "create_time": now}
            )
            self._sequence += 1
            self._entries[resource_id] = StoredEntry(
                resource=stored,
                create_time=now,
                sequence=self._sequence,
                data=data,
            )

        log.info("resource.inserted", collection=self.collection, name=stored.name)
        return stored

    def get_entry(self, name: str) -> StoredEntry[R]:
        resource_id = parse_name(name, self.collection)
        with self._lock:
            entry = self._entries.get(resource_id)
        if entry is None:
            raise NotFoundError(f"{self._kind} not found")
        return entry

    def list(self, page_size: int = 0, page_token: str = "") -> Page[R]:
        page_size = normalize_page_size(page_size, self._default_page_size, self._max_page_size)

        with self._lock:
            snapshot = list(self._entries.values())

        # Newest first; insertion order breaks timestamp ties
        snapshot.sort(key=lambda e: (e.create_time, e.sequence), reverse=True)

        start = 0
        if page_token:
            for i, entry in enumerate(snapshot):
                if entry.resource.name == page_token:
                    start = i + 1
                    break
            else:
                log.debug("resource.page_token_stale", collection=self.collection, page_token=page_token)

        end = min(start + page_size, len(snapshot))
        items = [entry.resource for entry in snapshot[start:end]]
        next_page_token = snapshot[end - 1].resource.name if end < len(snapshot) else ""
        return Page(items=items, next_page_token=next_page_token)

    def delete(self, name: str) -> None:
        resource_id = parse_name(name, self.collection)
        with self._lock:
            if self._entries.pop(resource_id, None) is None:
                raise NotFoundError(f"{self._kind} not found")
        log.info("resource.deleted", collection=self.collection, name=name)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, name: str) -> bool:
        try:
            self.get_entry(name)
        except (InvalidArgumentError, NotFoundError):
            return False
        return True

    @property
    def _kind(self) -> str:
        # "events" -> "event"
        return self.collection[:-1] if self.collection.endswith("s") else self.collection

    def _unused_id(self) -> str:
        """Draw a fresh id. Caller must hold the lock."""
        for _ in range(MAX_ID_ATTEMPTS):
            resource_id = self._id_factory()
            if resource_id not in self._entries:
                return resource_id
            log.warning("resource.id_collision", collection=self.collection, id=resource_id)
        raise InternalError(f"failed to generate a unique {self._kind} id")
