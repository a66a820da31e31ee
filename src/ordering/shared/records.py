"""Active-record queries shared by every repository in the domain.

Soft-deleted records stay in storage with ``deleted=True``. Repository
read methods compose their filters through :func:`active` so inactive
records never leak into domain logic.
"""

from typing import Any

from protean.exceptions import ExpectedVersionError

ACTIVE = {"deleted": False}


def active(dao, **filters: Any):
    """Return a queryset restricted to active records matching ``filters``."""
    return dao.query.filter(**ACTIVE, **filters)


def find_active(dao, **filters: Any) -> list:
    return active(dao, **filters).all().items


def find_active_one(dao, **filters: Any):
    """Return the first active record matching ``filters``, or None."""
    return active(dao, **filters).all().first


def compare_and_set(dao, record_id: str, field: str, expected: Any, new_value: Any) -> bool:
    """Set ``field`` to ``new_value`` if it still holds ``expected``.

    Returns True when the row was updated. A False result means another
    writer changed the field after it was read: either the filter no longer
    matches, or the row's version moved between the match and the write.
    """
    try:
        updated = dao.query.filter(id=record_id, **{field: expected}).update(**{field: new_value})
    except ExpectedVersionError:
        return False
    return updated == 1


# Conditional updates that lose a race re-read the record and try again.
MAX_UPDATE_ATTEMPTS = 3
