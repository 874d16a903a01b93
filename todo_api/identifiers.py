"""Document identifiers.

Every stored document is keyed by the lowercase hex form of a BSON
``ObjectId``.  Identifiers coming from a client are parsed with
:func:`parse_object_id` before any query is issued.
"""

from __future__ import annotations

from bson import ObjectId


class InvalidObjectIdError(ValueError):
    """Raised when a string is not a syntactically valid document id."""

    def __init__(self, value: object):
        super().__init__(f"{value!r} is not a valid object id")
        self.value = value


def new_object_id() -> str:
    return str(ObjectId())


def is_object_id(value: object) -> bool:
    # ObjectId.is_valid also accepts 12 raw bytes; ids only travel as hex text
    return isinstance(value, str) and ObjectId.is_valid(value)


def parse_object_id(value: object) -> str:
    """Return ``value`` in canonical lowercase form or raise :class:`InvalidObjectIdError`."""
    if not is_object_id(value):
        raise InvalidObjectIdError(value)
    return str(ObjectId(value))
