from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from skill_exchange.api.dependencies import get_app_settings
from skill_exchange.config import Settings
from skill_exchange.database import get_db
from skill_exchange.schemas.common import ErrorResponse, MessageResponse
from skill_exchange.schemas.skill import (
    Pagination,
    SkillCreate,
    SkillListResponse,
    SkillMutationResponse,
    SkillRead,
    SkillResponse,
    SkillUpdate,
)
from skill_exchange.schemas.stats import CategoryStatsResponse, OverviewStatsResponse
from skill_exchange.services import skill_service, stats_service
from skill_exchange.services.skill_query import SkillListParams


router = APIRouter(
    prefix="/skills",
    tags=["skills"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=SkillListResponse, summary="List, filter and search skills")
def list_skills(
    category: str | None = Query(default=None),
    skill_type: str | None = Query(default=None, alias="skillType"),
    skill_level: str | None = Query(default=None, alias="skillLevel"),
    search: str | None = Query(default=None),
    min_rating: str | None = Query(default=None, alias="minRating"),
    is_free: str | None = Query(default=None, alias="isFree"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SkillListResponse:
    # Numbers stay strings here so junk values fall back to defaults instead of a 400.
    params = SkillListParams.from_raw(
        search=search,
        category=category,
        skill_type=skill_type,
        skill_level=skill_level,
        min_rating=min_rating,
        is_free=is_free,
        sort_by=sort_by,
        page=page,
        limit=limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    result = skill_service.list_skills(db, params)
    return SkillListResponse(
        data=[SkillRead.model_validate(skill) for skill in result.items],
        pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages),
    )


@router.get("/stats/categories", response_model=CategoryStatsResponse, summary="Skill count and rating per category")
def get_category_stats(db: Session = Depends(get_db)) -> CategoryStatsResponse:
    return CategoryStatsResponse(data=stats_service.category_stats(db))


@router.get("/stats/overview", response_model=OverviewStatsResponse, summary="Platform overview statistics")
def get_overview_stats(db: Session = Depends(get_db)) -> OverviewStatsResponse:
    return OverviewStatsResponse(data=stats_service.overview_stats(db))


@router.get("/{skill_id}", response_model=SkillResponse)
def get_skill(skill_id: str, db: Session = Depends(get_db)) -> SkillResponse:
    skill = skill_service.get_skill(db, skill_service.parse_identifier(skill_id))
    return SkillResponse(data=SkillRead.model_validate(skill))


@router.post("", response_model=SkillMutationResponse, status_code=status.HTTP_201_CREATED)
def create_skill(payload: SkillCreate, db: Session = Depends(get_db)) -> SkillMutationResponse:
    skill = skill_service.create_skill(db, payload)
    return SkillMutationResponse(message="Skill created successfully", data=SkillRead.model_validate(skill))


@router.put("/{skill_id}", response_model=SkillMutationResponse)
def update_skill(skill_id: str, payload: SkillUpdate, db: Session = Depends(get_db)) -> SkillMutationResponse:
    skill = skill_service.update_skill(db, skill_service.parse_identifier(skill_id), payload)
    return SkillMutationResponse(message="Skill updated successfully", data=SkillRead.model_validate(skill))


@router.delete("/{skill_id}", response_model=MessageResponse)
def delete_skill(skill_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    skill_service.delete_skill(db, skill_service.parse_identifier(skill_id))
    return MessageResponse(message="Skill deleted successfully")
