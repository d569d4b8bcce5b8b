from __future__ import annotations

import logging
import re

from sqlalchemy.orm import Session

from skill_exchange.exceptions import InvalidIdentifierError, SkillNotFoundError
from skill_exchange.models.skill import Skill
from skill_exchange.schemas.skill import SkillCreate, SkillUpdate
from skill_exchange.services import skill_query
from skill_exchange.services.skill_query import SkillListParams, SkillPage


logger = logging.getLogger(__name__)

# Largest primary key the store can hold (signed 64-bit INTEGER).
MAX_ID = 2**63 - 1

_ID_RE = re.compile(r"[0-9]+")


def parse_identifier(raw: object, kind: str = "skill") -> int:
    """Turn a path/body id into a positive integer or raise InvalidIdentifierError."""
    if isinstance(raw, bool):
        raise InvalidIdentifierError(kind, raw)
    if isinstance(raw, int):
        value = raw
    else:
        ref = str(raw or "").strip()
        # More digits than MAX_ID is out of range without parsing.
        if not _ID_RE.fullmatch(ref) or len(ref.lstrip("0")) > len(str(MAX_ID)):
            raise InvalidIdentifierError(kind, raw)
        value = int(ref)
    if value < 1 or value > MAX_ID:
        raise InvalidIdentifierError(kind, raw)
    return value


def apply_price_rule(skill: Skill) -> None:
    # Free listings never carry a price, whatever the client sent.
    if skill.is_free:
        skill.price = 0.0


def get_skill(db: Session, skill_id: int) -> Skill:
    skill = db.get(Skill, skill_id)
    if skill is None:
        raise SkillNotFoundError(skill_id)
    return skill


def create_skill(db: Session, payload: SkillCreate) -> Skill:
    skill = Skill(**payload.model_dump())
    apply_price_rule(skill)
    db.add(skill)
    db.commit()
    db.refresh(skill)
    logger.info("skill.create id=%s category=%s type=%s", skill.id, skill.category, skill.skill_type)
    return skill


def update_skill(db: Session, skill_id: int, payload: SkillUpdate) -> Skill:
    skill = get_skill(db, skill_id)
    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(skill, field, value)
    apply_price_rule(skill)
    db.add(skill)
    db.commit()
    db.refresh(skill)
    logger.info("skill.update id=%s fields=%s", skill.id, sorted(update_data))
    return skill


def delete_skill(db: Session, skill_id: int) -> None:
    skill = get_skill(db, skill_id)
    review_count = skill.review_count
    # ORM cascade removes the reviews in the same transaction.
    db.delete(skill)
    db.commit()
    logger.info("skill.delete id=%s review_count=%s", skill_id, review_count)


def list_skills(db: Session, params: SkillListParams) -> SkillPage:
    return skill_query.list_skills(db, params)
