"""
Create a user from a JSON file (no HTTP needed). Run from project root:
  python -m userhub.scripts.create_user path/to/user.json
The file holds one encoded user, the same document the API takes in `file`.
"""
import argparse
import sys
from pathlib import Path

from userhub.core.artifacts import get_artifact_store
from userhub.core.config import get_settings
from userhub.core.database import SessionLocal
from userhub.core.logging_config import setup_logging
from userhub.services.accounts import AccountService
from userhub.services.errors import AccountError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user from a JSON document.")
    parser.add_argument("path", help="Path to a JSON file with one user")
    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    try:
        encoded = Path(args.path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user_id = AccountService(db, get_artifact_store(), settings).create_user(encoded)
    except AccountError as e:
        print(f"Create failed: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(user_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
