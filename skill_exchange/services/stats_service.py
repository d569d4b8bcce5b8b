from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from skill_exchange.models.skill import Skill
from skill_exchange.schemas.stats import CategoryStat, OverviewStats, TopRatedSkill
from skill_exchange.services.rating_aggregator import round_rating


TOP_RATED_LIMIT = 5


def category_stats(db: Session) -> list[CategoryStat]:
    count_expr = func.count(Skill.id)
    rows = (
        db.query(
            Skill.category,
            count_expr.label("c"),
            func.avg(Skill.average_rating).label("avg_rating"),
        )
        .group_by(Skill.category)
        .order_by(count_expr.desc(), Skill.category.asc())
        .all()
    )
    return [
        CategoryStat(category=str(category), count=int(c), avg_rating=round_rating(avg_rating))
        for category, c, avg_rating in rows
    ]


def overview_stats(db: Session) -> OverviewStats:
    total_skills = int(db.query(func.count(Skill.id)).scalar() or 0)
    total_offerings = int(db.query(func.count(Skill.id)).filter(Skill.skill_type == "Offering").scalar() or 0)
    total_seekings = int(db.query(func.count(Skill.id)).filter(Skill.skill_type == "Seeking").scalar() or 0)
    total_free = int(db.query(func.count(Skill.id)).filter(Skill.is_free == True).scalar() or 0)  # noqa: E712
    average = db.query(func.avg(Skill.average_rating)).scalar()

    top_rows = (
        db.query(Skill)
        .order_by(Skill.average_rating.desc(), Skill.review_count.desc(), Skill.id.asc())
        .limit(TOP_RATED_LIMIT)
        .all()
    )

    return OverviewStats(
        total_skills=total_skills,
        total_offerings=total_offerings,
        total_seekings=total_seekings,
        total_free=total_free,
        average_rating=round_rating(average),
        top_rated=[TopRatedSkill.model_validate(skill) for skill in top_rows],
    )
