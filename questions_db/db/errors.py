"""Errors raised by the database layer."""


class DatabaseError(RuntimeError):
    """Base class for database layer failures."""


class DatabaseNotFoundError(DatabaseError):
    """The configured SQLite file does not exist."""


class QueryError(DatabaseError):
    """SQLite rejected or failed to run a statement."""
