"""
Resource store: generic, thread-safe collections with cursor pagination.
"""

from .base import Page, ResourceStore, StoredEntry, normalize_page_size
from .memory import InMemoryResourceStore
from .names import format_name, new_id, parse_name

__all__ = [
    "Page",
    "ResourceStore",
    "StoredEntry",
    "InMemoryResourceStore",
    "normalize_page_size",
    "format_name",
    "new_id",
    "parse_name",
]
