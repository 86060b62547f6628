"""Tests for resource identifiers and names."""
import uuid

import pytest

from app.errors import InvalidArgumentError
from app.store import format_name, new_id, parse_name


def test_new_id_is_uuid4():
    """Test generated ids are random UUIDs."""
    resource_id = new_id()
    assert uuid.UUID(resource_id).version == 4


def test_new_id_unique():
    """Test ids do not repeat."""
    ids = {new_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_format_and_parse_name():
    """Test names format and parse back to the id."""
    name = format_name("events", "abc-123")
    assert name == "events/abc-123"
    assert parse_name(name, "events") == "abc-123"


def test_parse_name_accepts_non_uuid_token():
    """Test any single path segment is a valid id."""
    assert parse_name("events/does-not-exist", "events") == "does-not-exist"


@pytest.mark.parametrize(
    "name",
    [
        "images/abc",
        "events/",
        "events",
        "/events/abc",
        "events/abc/def",
        "events/abc def",
        "eventsx/abc",
    ],
)
def test_parse_name_rejects_malformed(name):
    """Test names outside the <collection>/<id> shape are rejected."""
    with pytest.raises(InvalidArgumentError):
        parse_name(name, "events")


def test_parse_name_requires_name():
    """Test an empty name is rejected."""
    with pytest.raises(InvalidArgumentError, match="name is required"):
        parse_name("", "events")
