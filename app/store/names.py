"""Identifier generation and "<collection>/<id>" resource names."""
import re
import uuid

from ..errors import InvalidArgumentError


def new_id() -> str:
    """Generate a random resource identifier (UUID4, 122 random bits)."""
    return str(uuid.uuid4())


def format_name(collection: str, resource_id: str) -> str:
    return f"{collection}/{resource_id}"


def parse_name(name: str, collection: str) -> str:
    """
    Extract the resource id from a name like ``events/{id}``.

    Args:
        name: Resource name to parse
        collection: Expected collection prefix

    Returns:
        The id part of the name

    Raises:
        InvalidArgumentError: If the name is empty or not of the form
            ``<collection>/<id>``
    """
    if not name:
        raise InvalidArgumentError("name is required")
    match = re.fullmatch(rf"{re.escape(collection)}/([^/\s]+)", name)
    if match is None:
        raise InvalidArgumentError(f"invalid {collection} name format: {name}")
    return match.group(1)
