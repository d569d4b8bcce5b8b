from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from pydantic import ValidationError  # noqa: E402

from skill_exchange.config import build_sqlalchemy_db_url, get_settings, mask_db_url  # noqa: E402
from skill_exchange.database import Database  # noqa: E402
from skill_exchange.models.skill import Skill  # noqa: E402
from skill_exchange.schemas.review import ReviewCreate  # noqa: E402
from skill_exchange.schemas.skill import SkillCreate  # noqa: E402
from skill_exchange.services.review_service import create_review  # noqa: E402
from skill_exchange.services.skill_service import create_skill  # noqa: E402


def _load_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed sample skill listings (and their reviews).")
    parser.add_argument(
        "--file",
        default=str(Path(__file__).resolve().parents[1] / "skill_exchange" / "data" / "sample_skills.json"),
    )
    parser.add_argument("--db-url", default=None)
    parser.add_argument("--truncate", action="store_true", help="Delete every skill (and review) first.")
    args = parser.parse_args(argv)

    url = args.db_url or build_sqlalchemy_db_url(get_settings())
    print("seeding:", mask_db_url(url))

    db = Database(url)
    inserted = {"skills": 0, "reviews": 0, "skipped": 0, "skipped_reviews": 0}
    try:
        db.create_all()
        with db.session() as session:
            if args.truncate:
                for skill in session.query(Skill).all():
                    session.delete(skill)
                session.commit()

            for item in _load_json(Path(args.file)):
                reviews = item.pop("reviews", None) or []
                if session.query(Skill).filter(Skill.title == item.get("title")).first():
                    inserted["skipped"] += 1
                    continue
                try:
                    skill = create_skill(session, SkillCreate.model_validate(item))
                except ValidationError as exc:
                    print(f"skipping invalid skill {item.get('title')!r}: {exc.error_count()} error(s)")
                    inserted["skipped"] += 1
                    continue
                inserted["skills"] += 1

                for review in reviews:
                    try:
                        payload = ReviewCreate.model_validate({**review, "skillId": skill.id})
                    except ValidationError as exc:
                        print(f"skipping invalid review on {skill.title!r}: {exc.error_count()} error(s)")
                        inserted["skipped_reviews"] += 1
                        continue
                    create_review(session, payload)
                    inserted["reviews"] += 1
    finally:
        db.dispose()

    print(json.dumps(inserted))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
