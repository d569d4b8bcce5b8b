from __future__ import annotations

from datetime import datetime

from pydantic import Field, StrictInt

from skill_exchange.schemas.common import CamelModel, RatingSummaryOut


class ReviewCreate(CamelModel):
    # Parsed by the service so malformed ids surface as "Invalid skill ID format".
    skill_id: StrictInt | str
    reviewer_name: str = Field(min_length=1, max_length=50)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1, max_length=500)


class ReviewRead(CamelModel):
    id: int
    skill_id: int
    reviewer_name: str
    rating: int
    comment: str
    created_at: datetime


class ReviewCreateResponse(CamelModel):
    success: bool = True
    message: str
    data: ReviewRead
    skill: RatingSummaryOut


class ReviewListResponse(CamelModel):
    success: bool = True
    data: list[ReviewRead]
    count: int


class ReviewDeleteResponse(CamelModel):
    success: bool = True
    message: str
    skill: RatingSummaryOut
