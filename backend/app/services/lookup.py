"""Identifier parsing shared by the post and comment resolvers."""

import uuid

from app.exceptions import NotFoundError


def parse_identifier(raw: str, resource: str) -> uuid.UUID:
    """
    Turn a path segment into a UUID.

    A segment that cannot be a UUID cannot name a stored record, so it is
    reported the same way as a missing one.
    """
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError(resource=resource, resource_id=str(raw))
