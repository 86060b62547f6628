"""Base interface for resource store backends."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from ..models import Resource

R = TypeVar("R", bound=Resource)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class StoredEntry(Generic[R]):
    """Store-owned wrapper around a resource. Never mutated after insertion."""
    resource: R
    create_time: datetime
    sequence: int
    data: bytes | None = None


@dataclass
class Page(Generic[R]):
    """One page of a listing. An empty ``next_page_token`` marks the last page."""
    items: list[R] = field(default_factory=list)
    next_page_token: str = ""


def normalize_page_size(page_size: int, default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE) -> int:
    """Clamp a requested page size: non-positive means default, oversized is capped."""
    if page_size <= 0:
        page_size = default
    return min(page_size, maximum)


class ResourceStore(ABC, Generic[R]):
    """Abstract interface for a collection of resources of one kind."""

    collection: str

    @abstractmethod
    def insert(self, resource: R, data: bytes | None = None) -> R:
        """
        Store a new resource.

        Args:
            resource: Draft resource; its name and create_time are ignored
            data: Optional raw bytes kept alongside the resource

        Returns:
            The stored resource with its generated name and create_time
        """
        pass

    @abstractmethod
    def get_entry(self, name: str) -> StoredEntry[R]:
        """
        Look up a stored entry by resource name.

        Raises:
            InvalidArgumentError: If the name is malformed
            NotFoundError: If no resource has that name
        """
        pass

    @abstractmethod
    def list(self, page_size: int = 0, page_token: str = "") -> Page[R]:
        """
        List resources newest first.

        Args:
            page_size: Requested page size (clamped, never rejected)
            page_token: Name of the last resource of the previous page

        Returns:
            Page of resources with the token for the next page
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Delete a resource by name.

        Raises:
            InvalidArgumentError: If the name is malformed
            NotFoundError: If no resource has that name
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored resources."""
        pass

    def get(self, name: str) -> R:
        """Look up a resource by name."""
        return self.get_entry(name).resource

    def __len__(self) -> int:
        return self.count()
