class DatabaseError(Exception):
    """Base for errors raised by the persistence layer."""


class NotFoundError(DatabaseError):
    """A round or hole referenced by a write does not exist."""


class IntegrityError(DatabaseError):
    """A write broke a foreign key or check constraint (e.g. strokes out of range)."""
