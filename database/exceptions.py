class DatabaseError(Exception):
    """Base for all record store errors."""


class NotFoundError(DatabaseError):
    """Entity not found."""


class DuplicateError(DatabaseError):
    """A record with the same id already exists."""


class IntegrityError(DatabaseError):
    """Missing reference, or a change that the record's state does not allow."""
