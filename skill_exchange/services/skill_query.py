"""Listing query construction for skills.

Request parameters arrive as loosely typed query-string values.
``SkillListParams.from_raw`` normalizes them (bad numbers fall back to
defaults instead of failing the request) and ``SkillQueryBuilder`` turns the
normalized parameters into SQLAlchemy predicate and ordering terms. Every
value reaches the database as a bound parameter.
"""

from __future__ import annotations

import math
import operator
import re
from dataclasses import dataclass
from functools import reduce
from typing import Any

from sqlalchemy import String, case, func, or_
from sqlalchemy.orm import Query, Session

from skill_exchange.models.skill import Skill


SORT_KEYS = ("newest", "oldest", "rating", "reviews", "title")
DEFAULT_SORT = "newest"
ANY_LEVEL = "Any"

# Relevance weight of a search term hit per column.
TITLE_WEIGHT = 3
DESCRIPTION_WEIGHT = 1
CATEGORY_WEIGHT = 1

_TRUE_VALUES = {"true", "1", "yes", "on"}
_TERM_SPLIT_RE = re.compile(r"\s+")

_ORDERINGS = {
    "newest": (Skill.created_at.desc(), Skill.id.desc()),
    "oldest": (Skill.created_at.asc(), Skill.id.asc()),
    "rating": (Skill.average_rating.desc(), Skill.id.asc()),
    "reviews": (Skill.review_count.desc(), Skill.id.asc()),
    "title": (Skill.title.asc(), Skill.id.asc()),
}


def _clean(raw: Any) -> str | None:
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def _parse_positive_int(raw: Any, default: int) -> int:
    value = _clean(raw)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def _parse_float(raw: Any) -> float | None:
    value = _clean(raw)
    if value is None:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def _parse_bool(raw: Any) -> bool | None:
    if isinstance(raw, bool):
        return raw
    value = _clean(raw)
    if value is None:
        return None
    return value.lower() in _TRUE_VALUES


def search_terms(search: str | None) -> list[str]:
    if not search:
        return []
    terms: list[str] = []
    for token in _TERM_SPLIT_RE.split(search.strip().lower()):
        if token and token not in terms:
            terms.append(token)
    return terms


@dataclass(frozen=True)
class SkillListParams:
    search: str | None = None
    category: str | None = None
    skill_type: str | None = None
    skill_level: str | None = None
    min_rating: float | None = None
    is_free: bool | None = None
    sort_by: str = DEFAULT_SORT
    page: int = 1
    limit: int = 50

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_raw(
        cls,
        *,
        search: Any = None,
        category: Any = None,
        skill_type: Any = None,
        skill_level: Any = None,
        min_rating: Any = None,
        is_free: Any = None,
        sort_by: Any = None,
        page: Any = None,
        limit: Any = None,
        default_limit: int = 50,
        max_limit: int | None = None,
    ) -> "SkillListParams":
        level = _clean(skill_level)
        if level == ANY_LEVEL:
            level = None

        sort_key = _clean(sort_by)
        if sort_key not in SORT_KEYS:
            sort_key = DEFAULT_SORT

        page_size = _parse_positive_int(limit, default_limit)
        if max_limit is not None:
            page_size = min(page_size, max_limit)

        return cls(
            search=_clean(search),
            category=_clean(category),
            skill_type=_clean(skill_type),
            skill_level=level,
            min_rating=_parse_float(min_rating),
            is_free=_parse_bool(is_free),
            sort_by=sort_key,
            page=_parse_positive_int(page, 1),
            limit=page_size,
        )


@dataclass(frozen=True)
class SkillPage:
    items: list[Skill]
    page: int
    limit: int
    total: int
    pages: int


class SkillQueryBuilder:
    """Accumulates filter, relevance and ordering terms for a skill listing."""

    def __init__(self, params: SkillListParams) -> None:
        self.params = params
        self.predicates: list[Any] = []
        self.relevance: Any = None
        self.orderings: list[Any] = []
        self._compile()

    def _compile(self) -> None:
        p = self.params
        if p.category:
            self.predicates.append(Skill.category == p.category)
        if p.skill_type:
            self.predicates.append(Skill.skill_type == p.skill_type)
        if p.skill_level:
            self.predicates.append(Skill.skill_level == p.skill_level)
        if p.min_rating is not None:
            self.predicates.append(Skill.average_rating >= p.min_rating)
        if p.is_free is not None:
            self.predicates.append(Skill.is_free == p.is_free)
        if p.search:
            self._add_search(p.search)

        self.orderings.extend(_ORDERINGS.get(p.sort_by, _ORDERINGS[DEFAULT_SORT]))

    def _add_search(self, search: str) -> None:
        terms = search_terms(search)
        if not terms:
            return

        columns = (
            (func.lower(Skill.title, type_=String), TITLE_WEIGHT),
            (func.lower(Skill.description, type_=String), DESCRIPTION_WEIGHT),
            (func.lower(Skill.category, type_=String), CATEGORY_WEIGHT),
        )
        hits = []
        scores = []
        for term in terms:
            for column, weight in columns:
                hit = column.contains(term, autoescape=True)
                hits.append(hit)
                scores.append(case((hit, weight), else_=0))

        self.predicates.append(or_(*hits))
        self.relevance = reduce(operator.add, scores)

    def filtered(self, db: Session) -> Query:
        return db.query(Skill).filter(*self.predicates)

    def ordered(self, db: Session) -> Query:
        query = self.filtered(db)
        if self.relevance is not None:
            query = query.order_by(self.relevance.desc())
        return query.order_by(*self.orderings)

    def count(self, db: Session) -> int:
        return int(self.filtered(db).count())

    def fetch_page(self, db: Session) -> SkillPage:
        p = self.params
        total = self.count(db)
        # A window past the last row is empty, so it is never sent to the store.
        items = self.ordered(db).offset(p.offset).limit(p.limit).all() if p.offset < total else []
        pages = math.ceil(total / p.limit) if total else 0
        return SkillPage(items=items, page=p.page, limit=p.limit, total=total, pages=pages)


def list_skills(db: Session, params: SkillListParams) -> SkillPage:
    return SkillQueryBuilder(params).fetch_page(db)
