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
from skill_exchange.exceptions import SkillNotFoundError  # noqa: E402
from skill_exchange.services.rating_aggregator import recompute, recompute_all  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Re-derive averageRating/reviewCount of skills from their stored reviews."
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Target DB URL (defaults to build_sqlalchemy_db_url(settings) from .env/env vars).",
    )
    parser.add_argument(
        "--skill-id",
        type=int,
        action="append",
        default=None,
        help="Only recompute this skill (repeatable). Defaults to every skill.",
    )
    args = parser.parse_args(argv)

    url = args.db_url or build_sqlalchemy_db_url(get_settings())
    print("recomputing ratings on:", mask_db_url(url))

    db = Database(url)
    missing: list[int] = []
    try:
        with db.session() as session:
            if args.skill_id:
                updated = 0
                for skill_id in args.skill_id:
                    try:
                        summary = recompute(session, skill_id)
                    except SkillNotFoundError:
                        print(f"skill {skill_id}: not found")
                        missing.append(skill_id)
                        continue
                    print(f"skill {skill_id}: average={summary.average_rating} count={summary.review_count}")
                    updated += 1
            else:
                updated = recompute_all(session)
    finally:
        db.dispose()

    print(f"updated {updated} skill(s)")
    return 1 if missing else 0


if __name__ == "__main__":
    raise SystemExit(main())
