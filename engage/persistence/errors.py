"""Translation of database failures into domain errors."""

from sqlalchemy.exc import DBAPIError

# serialization_failure, deadlock_detected
TRANSIENT_SQLSTATES = frozenset({"40001", "40P01"})


def is_transient(error: DBAPIError) -> bool:
    """Whether the store aborted the transaction and a retry may succeed.

    Args:
        error: Error raised by SQLAlchemy

    Returns:
        True for dropped connections, serialization failures and deadlocks
    """
    if error.connection_invalidated:
        return True

    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return sqlstate in TRANSIENT_SQLSTATES
