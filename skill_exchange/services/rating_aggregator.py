"""Keeps Skill.average_rating / Skill.review_count in step with the review set.

The summary is always derived fresh from the stored reviews; the stored
columns are a cache and never an input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from sqlalchemy.orm import Session

from skill_exchange.exceptions import SkillNotFoundError
from skill_exchange.models.review import Review
from skill_exchange.models.skill import Skill


logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    review_count: int


def round_rating(value: float | int | Decimal | None) -> float:
    """Round half-up to one decimal place (4.65 -> 4.7, never banker's rounding)."""
    if value is None:
        return 0.0
    if not isinstance(value, Decimal):
        # str() keeps the shortest repr so 4.65 is not seen as 4.6499999...
        value = Decimal(str(value))
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def summarize_ratings(ratings: Iterable[int]) -> RatingSummary:
    values = [int(r) for r in ratings]
    if not values:
        return RatingSummary(average_rating=0.0, review_count=0)
    mean = Decimal(sum(values)) / Decimal(len(values))
    return RatingSummary(average_rating=round_rating(mean), review_count=len(values))


def recompute(db: Session, skill_id: int) -> RatingSummary:
    """Re-derive and persist the rating summary of one skill.

    Raises SkillNotFoundError when the skill no longer exists.
    """
    skill = db.get(Skill, skill_id)
    if skill is None:
        raise SkillNotFoundError(skill_id)

    ratings = [rating for (rating,) in db.query(Review.rating).filter(Review.skill_id == skill_id).all()]
    summary = summarize_ratings(ratings)

    skill.average_rating = summary.average_rating
    skill.review_count = summary.review_count
    db.commit()

    logger.debug(
        "rating.recompute skill_id=%s average=%s count=%s",
        skill_id,
        summary.average_rating,
        summary.review_count,
    )
    return summary


def recompute_all(db: Session) -> int:
    skill_ids = [skill_id for (skill_id,) in db.query(Skill.id).order_by(Skill.id).all()]
    updated = 0
    for skill_id in skill_ids:
        try:
            recompute(db, skill_id)
        except SkillNotFoundError:
            # Deleted between listing and recompute.
            continue
        updated += 1
    return updated
