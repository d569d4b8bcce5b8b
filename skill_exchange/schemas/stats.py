from __future__ import annotations

from skill_exchange.schemas.common import CamelModel


class CategoryStat(CamelModel):
    category: str
    count: int
    avg_rating: float


class CategoryStatsResponse(CamelModel):
    success: bool = True
    data: list[CategoryStat]


class TopRatedSkill(CamelModel):
    id: int
    title: str
    category: str
    average_rating: float
    review_count: int


class OverviewStats(CamelModel):
    total_skills: int
    total_offerings: int
    total_seekings: int
    total_free: int
    average_rating: float
    top_rated: list[TopRatedSkill]


class OverviewStatsResponse(CamelModel):
    success: bool = True
    data: OverviewStats
