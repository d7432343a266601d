from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import CourseRepositoryDB, LocationRepositoryDB, RoundRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "LocationRepositoryDB",
    "RoundRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "IntegrityError",
]
