from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skill_exchange.exceptions import ReviewNotFoundError, SkillNotFoundError
from skill_exchange.models.review import Review
from skill_exchange.models.skill import Skill
from skill_exchange.schemas.review import ReviewCreate
from skill_exchange.services import rating_aggregator
from skill_exchange.services.rating_aggregator import RatingSummary
from skill_exchange.services.skill_service import get_skill, parse_identifier


logger = logging.getLogger(__name__)


_REVIEW_ORDERINGS = {
    "newest": (Review.created_at.desc(), Review.id.desc()),
    "oldest": (Review.created_at.asc(), Review.id.asc()),
    "rating-high": (Review.rating.desc(), Review.created_at.desc(), Review.id.desc()),
    "rating-low": (Review.rating.asc(), Review.created_at.desc(), Review.id.desc()),
}


@dataclass(frozen=True)
class ReviewResult:
    review: Review | None
    summary: RatingSummary


def _parse_limit(raw: object, default: int, max_limit: int | None = None) -> int:
    try:
        value = int(str(raw).strip()) if raw is not None else default
    except ValueError:
        return default
    if value < 1:
        return default
    return min(value, max_limit) if max_limit is not None else value


def _refresh_summary(db: Session, skill_id: int) -> RatingSummary:
    """Run aggregation after a committed review write.

    A failure here leaves the review in place; the stored summary is returned
    and the next aggregation for the skill heals it.
    """
    try:
        return rating_aggregator.recompute(db, skill_id)
    except SkillNotFoundError:
        logger.warning("rating.recompute skipped, skill_id=%s no longer exists", skill_id)
        return RatingSummary(average_rating=0.0, review_count=0)
    except SQLAlchemyError:
        logger.exception("rating.recompute failed skill_id=%s", skill_id)
        db.rollback()
        skill = db.get(Skill, skill_id)
        if skill is None:
            return RatingSummary(average_rating=0.0, review_count=0)
        return RatingSummary(average_rating=float(skill.average_rating or 0), review_count=int(skill.review_count or 0))


def create_review(db: Session, payload: ReviewCreate) -> ReviewResult:
    skill_id = parse_identifier(payload.skill_id, "skill")
    get_skill(db, skill_id)

    review = Review(
        skill_id=skill_id,
        reviewer_name=payload.reviewer_name,
        rating=payload.rating,
        comment=payload.comment,
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    logger.info("review.create id=%s skill_id=%s rating=%s", review.id, skill_id, review.rating)

    summary = _refresh_summary(db, skill_id)
    return ReviewResult(review=review, summary=summary)


def list_reviews_for_skill(
    db: Session,
    skill_id: int,
    *,
    sort_by: str | None = None,
    limit: object = None,
    default_limit: int = 50,
    max_limit: int | None = None,
) -> list[Review]:
    get_skill(db, skill_id)

    key = (sort_by or "").strip()
    orderings = _REVIEW_ORDERINGS.get(key, _REVIEW_ORDERINGS["newest"])
    return (
        db.query(Review)
        .filter(Review.skill_id == skill_id)
        .order_by(*orderings)
        .limit(_parse_limit(limit, default_limit, max_limit))
        .all()
    )


def delete_review(db: Session, review_id: int) -> ReviewResult:
    review = db.get(Review, review_id)
    if review is None:
        raise ReviewNotFoundError(review_id)

    skill_id = review.skill_id
    db.delete(review)
    db.commit()
    logger.info("review.delete id=%s skill_id=%s", review_id, skill_id)

    summary = _refresh_summary(db, skill_id)
    return ReviewResult(review=None, summary=summary)
