from __future__ import annotations

import os
import sys

import uvicorn

from .config import configure_logging


def main() -> None:
    configure_logging()
    host = os.environ.get("TODO_API_HOST", "127.0.0.1")
    try:
        port = int(os.environ.get("TODO_API_PORT", "3000"))
    except ValueError:
        print(
            f"Invalid TODO_API_PORT value: {os.environ.get('TODO_API_PORT')}",
            file=sys.stderr,
        )
        sys.exit(2)

    uvicorn.run("todo_api.main:app", host=host, port=port, log_level="info")


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
