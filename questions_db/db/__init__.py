"""Database layer — read-only SQLite access for the Q&A schema."""

from questions_db.db.connection import Database, close_db, get_db, init_db
from questions_db.db.errors import DatabaseError, DatabaseNotFoundError, QueryError
from questions_db.db.models import Question, QuestionFollow, QuestionLike, Reply, User

__all__ = [
    "Database",
    "DatabaseError",
    "DatabaseNotFoundError",
    "QueryError",
    "Question",
    "QuestionFollow",
    "QuestionLike",
    "Reply",
    "User",
    "close_db",
    "get_db",
    "init_db",
]
