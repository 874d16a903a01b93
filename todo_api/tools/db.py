from __future__ import annotations

import logging
import sys

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from .. import models  # noqa: F401  registers the tables
from ..config import configure_logging, get_engine
from .seed import populate_todos, populate_users

logger = logging.getLogger(__name__)


def init_schema(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
    logger.info("Schema ready on %s", engine.url.render_as_string(hide_password=True))


def seed(engine: Engine) -> None:
    init_schema(engine)
    with Session(engine) as session:
        populate_users(session)
        populate_todos(session)
    print("Seeded 2 users and 2 todos")


def main() -> None:
    configure_logging()
    if len(sys.argv) < 2:
        print("Usage: python -m todo_api.tools.db [init|seed] [DATABASE_URL]")
        return
    cmd = sys.argv[1]
    # Resolve engine: prefer explicit URL arg or environment settings
    engine = get_engine()
    if len(sys.argv) >= 3:
        url = sys.argv[2]
        if "://" not in url:
            # Treat as SQLite file path
            url = f"sqlite:///{url}"
        engine = create_engine(url)
    print(f"Dialect: {engine.dialect.name}")
    if cmd == "init":
        init_schema(engine)
    elif cmd == "seed":
        seed(engine)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(2)


if __name__ == "__main__":
    main()
