from __future__ import annotations

import uuid


class NotFoundError(LookupError):
    """A player or game id does not exist in its repository."""


class InvalidIdentifierError(ValueError):
    """An identifier supplied by a caller is not a UUID."""


def parse_uuid(value: str, what: str) -> str:
    """Return ``value`` normalized to canonical UUID text.

    Raises:
        InvalidIdentifierError: If ``value`` is not a UUID.
    """
    try:
        return str(uuid.UUID(str(value)))
    except ValueError as e:
        raise InvalidIdentifierError(f"{what} id is not UUID {value}: {e}") from e


class AlreadyExistsError(LookupError):
    """A resource with the same unique key is already stored."""
