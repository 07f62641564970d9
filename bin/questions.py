"""Browse a questions database from the command line.

Read-only: prints users, questions and rankings from an existing SQLite file.

Usage:
    bin/questions.py user Ned Ruggeri
    bin/questions.py question 1
    bin/questions.py most-followed 3
    bin/questions.py most-liked 3 --db data/questions.db
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from questions_db.config import AppConfig
from questions_db.db import DatabaseError, Question, User, close_db, init_db

logger = logging.getLogger("questions")


def show_user(args: argparse.Namespace) -> int:
    user = User.find_by_name(args.fname, args.lname)
    if user is None:
        print(f"No user named {args.fname} {args.lname}")
        return 1

    print(f"#{user.id} {user.fname} {user.lname}")
    print(f"  average karma: {user.average_karma():.2f}")
    for q in user.authored_questions() or []:
        print(f"  asked #{q.id}: {q.title}")
    for q in user.followed_questions() or []:
        print(f"  follows #{q.id}: {q.title}")
    return 0


def show_question(args: argparse.Namespace) -> int:
    question = Question.find_by_id(args.id)
    if question is None:
        print(f"No question #{args.id}")
        return 1

    author = question.author()
    print(f"#{question.id} {question.title}")
    if author:
        print(f"  by {author.fname} {author.lname}")
    print(f"  {question.body}")
    print(f"  likes: {question.num_likes()}")
    for reply in question.replies() or []:
        indent = "    " if reply.parent_reply_id else "  "
        print(f"{indent}reply #{reply.id}: {reply.body}")
    return 0


def show_ranking(args: argparse.Namespace) -> int:
    if args.command == "most-followed":
        questions = Question.most_followed(args.n)
    else:
        questions = Question.most_liked(args.n)

    if not questions:
        print("No questions")
        return 1
    for i, q in enumerate(questions, 1):
        print(f"{i}. #{q.id} {q.title}")
    return 0


def non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative count, got {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse a questions database")
    parser.add_argument("--db", type=Path, help="Path to the SQLite file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_user = sub.add_parser("user", help="Show a user by name")
    p_user.add_argument("fname")
    p_user.add_argument("lname")
    p_user.set_defaults(func=show_user)

    p_question = sub.add_parser("question", help="Show a question and its replies")
    p_question.add_argument("id", type=int)
    p_question.set_defaults(func=show_question)

    for name in ("most-followed", "most-liked"):
        p_rank = sub.add_parser(name, help=f"List the {name.replace('-', ' ')} questions")
        p_rank.add_argument("n", type=non_negative_int)
        p_rank.set_defaults(func=show_ranking)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = AppConfig.from_yaml()
    if args.db:
        config.database.sqlite_path = args.db

    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
    )

    init_db(config)
    try:
        return args.func(args)
    except DatabaseError as e:
        logger.error("%s", e)
        return 2
    finally:
        close_db()


if __name__ == "__main__":
    sys.exit(main())
