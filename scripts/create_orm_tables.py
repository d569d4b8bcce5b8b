from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from skill_exchange.config import build_sqlalchemy_db_url, get_settings, mask_db_url  # noqa: E402
from skill_exchange.database import Database  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create the skills/reviews ORM tables in the configured DB (EXPLICIT action)."
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Target DB URL (defaults to build_sqlalchemy_db_url(settings) from .env/env vars).",
    )
    parser.add_argument(
        "--drop-first",
        action="store_true",
        help="Drop the existing tables (and all their rows) before creating them.",
    )
    parser.add_argument(
        "--i-understand",
        action="store_true",
        help="Required safety flag. Prevents accidental DDL against shared DBs.",
    )
    args = parser.parse_args(argv)

    if not args.i_understand:
        print("Refusing to run without --i-understand (safety).")
        return 2

    url = args.db_url or build_sqlalchemy_db_url(get_settings())
    print("creating ORM tables on:", mask_db_url(url))

    db = Database(url)
    try:
        if args.drop_first:
            db.drop_all()
            print("dropped existing tables")
        db.create_all()
    finally:
        db.dispose()
    print("done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
