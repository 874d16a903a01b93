import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from todo_api.database import new_session
from todo_api.errors import ValidationError
from todo_api.services import create_user


def main() -> None:
    if len(sys.argv) != 3:
        print("Usage: python scripts/create_user.py EMAIL PASSWORD")
        sys.exit(2)
    with new_session() as session:
        try:
            user, token = create_user(session, sys.argv[1], sys.argv[2])
        except ValidationError as exc:
            for field, reason in exc.errors.items():
                print(f"{field}: {reason}", file=sys.stderr)
            sys.exit(1)
        print(f"created user {user.id}")
        print(f"x-auth: {token}")


if __name__ == "__main__":
    main()
