"""
Conversion between the store's primary keys and the identifiers clients see.

The database keys tasks by UUID. Clients only ever see the canonical
lowercase, hyphenated string form, and only that form is accepted back.
Anything else is rejected here, before a query is built.
"""
from uuid import UUID


CANONICAL_LENGTH = 36


class InvalidIdentifier(ValueError):
    pass


def to_external(internal_id: UUID) -> str:
    return str(internal_id)


def to_internal(external_id) -> UUID:
    """
    Parse a client-supplied identifier.

    Raises InvalidIdentifier for non-strings, wrong length, non-hex content
    and non-canonical spellings (uppercase, braces, urn: prefix, no hyphens).
    """
    if not isinstance(external_id, str) or len(external_id) != CANONICAL_LENGTH:
        raise InvalidIdentifier(f"Malformed task id: {external_id!r}")

    try:
        internal_id = UUID(external_id)
    except ValueError:
        raise InvalidIdentifier(f"Malformed task id: {external_id!r}")

    if str(internal_id) != external_id:
        raise InvalidIdentifier(f"Non-canonical task id: {external_id!r}")

    return internal_id
