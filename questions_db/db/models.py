"""Row models for the Q&A schema — users, questions, replies, follows, likes.

Each class maps one table. Finders and relationship accessors run a single
parameterized query against the process-wide handle from ``get_db()`` and
return ``None`` when nothing matched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, TypeVar

from questions_db.db.connection import get_db

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _from_row(cls: type[T], row: dict[str, Any]) -> T:
    """Build a model from a row mapping, ignoring columns the model doesn't define."""
    return cls(**{f.name: row[f.name] for f in fields(cls)})  # type: ignore[arg-type]


def _one(cls: type[T], sql: str, params: tuple = ()) -> T | None:
    row = get_db().execute_one(sql, params)
    if row is None:
        return None
    return _from_row(cls, row)


def _many(cls: type[T], sql: str, params: tuple = ()) -> list[T] | None:
    rows = get_db().execute(sql, params)
    if not rows:
        return None
    logger.debug("Mapped %d %s rows", len(rows), cls.__name__)
    return [_from_row(cls, r) for r in rows]


def _check_limit(n: int) -> int:
    # SQLite treats a negative LIMIT as no limit at all
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return n


@dataclass(frozen=True)
class User:
    id: int
    fname: str
    lname: str

    @classmethod
    def find_by_id(cls, user_id: int) -> User | None:
        return _one(cls, "SELECT * FROM users WHERE id = ?", (user_id,))

    @classmethod
    def find_by_name(cls, fname: str, lname: str) -> User | None:
        return _one(
            cls,
            "SELECT * FROM users WHERE fname = ? AND lname = ? ORDER BY id LIMIT 1",
            (fname, lname),
        )

    def authored_questions(self) -> list[Question] | None:
        return Question.find_by_author_id(self.id)

    def authored_replies(self) -> list[Reply] | None:
        return Reply.find_by_user_id(self.id)

    def followed_questions(self) -> list[Question] | None:
        return QuestionFollow.followed_questions_for_user_id(self.id)

    def liked_questions(self) -> list[Question] | None:
        return QuestionLike.liked_questions_for_user_id(self.id)

    def average_karma(self) -> float:
        """Average number of likes per question this user has asked.

        0.0 for a user with no questions.
        """
        karma = get_db().execute_scalar(
            """SELECT
                   CAST(COUNT(question_likes.id) AS FLOAT) / COUNT(DISTINCT questions.id)
                   AS average_karma
               FROM questions
               LEFT OUTER JOIN question_likes ON questions.id = question_likes.question_id
               WHERE questions.user_id = ?""",
            (self.id,),
        )
        return float(karma) if karma is not None else 0.0


@dataclass(frozen=True)
class Question:
    id: int
    title: str
    body: str
    user_id: int

    @classmethod
    def find_by_id(cls, question_id: int) -> Question | None:
        return _one(cls, "SELECT * FROM questions WHERE id = ?", (question_id,))

    @classmethod
    def find_by_author_id(cls, author_id: int) -> list[Question] | None:
        return _many(
            cls, "SELECT * FROM questions WHERE user_id = ? ORDER BY id", (author_id,)
        )

    @classmethod
    def most_followed(cls, n: int) -> list[Question] | None:
        return QuestionFollow.most_followed_questions(n)

    @classmethod
    def most_liked(cls, n: int) -> list[Question] | None:
        return QuestionLike.most_liked_questions(n)

    def author(self) -> User | None:
        return User.find_by_id(self.user_id)

    def replies(self) -> list[Reply] | None:
        return Reply.find_by_question_id(self.id)

    def followers(self) -> list[User] | None:
        return QuestionFollow.followers_for_question_id(self.id)

    def likers(self) -> list[User] | None:
        return QuestionLike.likers_for_question_id(self.id)

    def num_likes(self) -> int:
        return QuestionLike.num_likes_for_question_id(self.id)


@dataclass(frozen=True)
class Reply:
    id: int
    body: str
    question_id: int
    user_id: int
    parent_reply_id: int | None = None

    @classmethod
    def find_by_id(cls, reply_id: int) -> Reply | None:
        return _one(cls, "SELECT * FROM replies WHERE id = ?", (reply_id,))

    @classmethod
    def find_by_user_id(cls, user_id: int) -> list[Reply] | None:
        return _many(cls, "SELECT * FROM replies WHERE user_id = ? ORDER BY id", (user_id,))

    @classmethod
    def find_by_question_id(cls, question_id: int) -> list[Reply] | None:
        return _many(
            cls, "SELECT * FROM replies WHERE question_id = ? ORDER BY id", (question_id,)
        )

    def author(self) -> User | None:
        return User.find_by_id(self.user_id)

    def question(self) -> Question | None:
        return Question.find_by_id(self.question_id)

    def parent_reply(self) -> Reply | None:
        if self.parent_reply_id is None:
            return None
        return Reply.find_by_id(self.parent_reply_id)

    def child_reply(self) -> Reply | None:
        """First reply posted under this one, if any."""
        return _one(
            Reply,
            "SELECT * FROM replies WHERE parent_reply_id = ? ORDER BY id LIMIT 1",
            (self.id,),
        )


@dataclass(frozen=True)
class QuestionFollow:
    id: int
    user_id: int
    question_id: int

    @classmethod
    def find_by_id(cls, follow_id: int) -> QuestionFollow | None:
        return _one(cls, "SELECT * FROM question_follows WHERE id = ?", (follow_id,))

    @staticmethod
    def followers_for_question_id(question_id: int) -> list[User] | None:
        return _many(
            User,
            """SELECT users.* FROM users
               JOIN question_follows ON users.id = question_follows.user_id
               WHERE question_follows.question_id = ?
               ORDER BY users.id""",
            (question_id,),
        )

    @staticmethod
    def followed_questions_for_user_id(user_id: int) -> list[Question] | None:
        return _many(
            Question,
            """SELECT questions.* FROM questions
               JOIN question_follows ON questions.id = question_follows.question_id
               WHERE question_follows.user_id = ?
               ORDER BY questions.id""",
            (user_id,),
        )

    @staticmethod
    def most_followed_questions(n: int) -> list[Question] | None:
        """Up to ``n`` questions, most-followed first."""
        return _many(
            Question,
            """SELECT questions.*, COUNT(question_follows.user_id) AS number_of_followers
               FROM questions
               JOIN question_follows ON questions.id = question_follows.question_id
               GROUP BY questions.id
               ORDER BY number_of_followers DESC
               LIMIT ?""",
            (_check_limit(n),),
        )


@dataclass(frozen=True)
class QuestionLike:
    id: int
    user_id: int
    question_id: int

    @classmethod
    def find_by_id(cls, like_id: int) -> QuestionLike | None:
        return _one(cls, "SELECT * FROM question_likes WHERE id = ?", (like_id,))

    @staticmethod
    def likers_for_question_id(question_id: int) -> list[User] | None:
        return _many(
            User,
            """SELECT users.id, users.fname, users.lname FROM users
               JOIN question_likes ON users.id = question_likes.user_id
               WHERE question_likes.question_id = ?
               ORDER BY users.id""",
            (question_id,),
        )

    @staticmethod
    def num_likes_for_question_id(question_id: int) -> int:
        """Number of likes on a question; 0 rather than None when there are none."""
        count = get_db().execute_scalar(
            """SELECT COUNT(users.id) AS num_likes FROM users
               JOIN question_likes ON users.id = question_likes.user_id
               WHERE question_likes.question_id = ?""",
            (question_id,),
        )
        return int(count or 0)

    @staticmethod
    def liked_questions_for_user_id(user_id: int) -> list[Question] | None:
        return _many(
            Question,
            """SELECT questions.* FROM questions
               JOIN question_likes ON questions.id = question_likes.question_id
               WHERE question_likes.user_id = ?
               ORDER BY questions.id""",
            (user_id,),
        )

    @staticmethod
    def most_liked_questions(n: int) -> list[Question] | None:
        """Up to ``n`` questions, most-liked first."""
        return _many(
            Question,
            """SELECT questions.*, COUNT(question_likes.user_id) AS number_of_likes
               FROM questions
               JOIN question_likes ON questions.id = question_likes.question_id
               GROUP BY questions.id
               ORDER BY number_of_likes DESC
               LIMIT ?""",
            (_check_limit(n),),
        )
