from .course_repo import CourseRepositoryDB
from .location_repo import LocationRepositoryDB
from .round_repo import RoundRepositoryDB

__all__ = ["CourseRepositoryDB", "LocationRepositoryDB", "RoundRepositoryDB"]
