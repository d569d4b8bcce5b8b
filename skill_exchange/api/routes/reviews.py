from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from skill_exchange.api.dependencies import get_app_settings
from skill_exchange.config import Settings
from skill_exchange.database import get_db
from skill_exchange.schemas.common import ErrorResponse, RatingSummaryOut
from skill_exchange.schemas.review import (
    ReviewCreate,
    ReviewCreateResponse,
    ReviewDeleteResponse,
    ReviewListResponse,
    ReviewRead,
)
from skill_exchange.services import review_service
from skill_exchange.services.rating_aggregator import RatingSummary
from skill_exchange.services.skill_service import parse_identifier


router = APIRouter(
    prefix="/reviews",
    tags=["reviews"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


def _summary_out(summary: RatingSummary) -> RatingSummaryOut:
    return RatingSummaryOut(average_rating=summary.average_rating, review_count=summary.review_count)


@router.post("", response_model=ReviewCreateResponse, status_code=status.HTTP_201_CREATED)
def create_review(payload: ReviewCreate, db: Session = Depends(get_db)) -> ReviewCreateResponse:
    result = review_service.create_review(db, payload)
    return ReviewCreateResponse(
        message="Review created successfully",
        data=ReviewRead.model_validate(result.review),
        skill=_summary_out(result.summary),
    )


@router.get("/skill/{skill_id}", response_model=ReviewListResponse)
def list_reviews_for_skill(
    skill_id: str,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ReviewListResponse:
    reviews = review_service.list_reviews_for_skill(
        db,
        parse_identifier(skill_id, "skill"),
        sort_by=sort_by,
        limit=limit,
        default_limit=settings.default_review_limit,
        max_limit=settings.max_page_size,
    )
    return ReviewListResponse(data=[ReviewRead.model_validate(r) for r in reviews], count=len(reviews))


@router.delete("/{review_id}", response_model=ReviewDeleteResponse)
def delete_review(review_id: str, db: Session = Depends(get_db)) -> ReviewDeleteResponse:
    result = review_service.delete_review(db, parse_identifier(review_id, "review"))
    return ReviewDeleteResponse(message="Review deleted successfully", skill=_summary_out(result.summary))
