from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, field_validator

from skill_exchange.schemas.common import CamelModel


Category = Literal[
    "Technology",
    "Arts & Crafts",
    "Music",
    "Sports & Fitness",
    "Cooking",
    "Languages",
    "Business",
    "Education",
    "Photography",
    "Writing",
    "Other",
]
SkillType = Literal["Offering", "Seeking"]
SkillLevel = Literal["Beginner", "Intermediate", "Advanced", "Any"]

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")


def _normalize_email(value: str) -> str:
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValueError("Please provide a valid email address")
    return email


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SkillCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    category: Category
    skill_type: SkillType
    instructor_name: str = Field(min_length=1, max_length=50)
    contact_email: str = Field(max_length=255)
    location: Optional[str] = Field(default=None, max_length=100)
    duration: Optional[str] = Field(default=None, max_length=50)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    is_free: bool = False
    skill_level: SkillLevel = "Any"

    @field_validator("contact_email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("location", "duration", mode="before")
    @classmethod
    def _optional_text(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class SkillUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    category: Optional[Category] = None
    skill_type: Optional[SkillType] = None
    instructor_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    location: Optional[str] = Field(default=None, max_length=100)
    duration: Optional[str] = Field(default=None, max_length=50)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_free: Optional[bool] = None
    skill_level: Optional[SkillLevel] = None

    @field_validator(
        "title",
        "description",
        "category",
        "skill_type",
        "instructor_name",
        "contact_email",
        "price",
        "is_free",
        "skill_level",
        mode="before",
    )
    @classmethod
    def _not_null(cls, v):
        # Only runs for fields present in the payload.
        if v is None:
            raise ValueError("Field may not be null")
        return v

    @field_validator("contact_email")
    @classmethod
    def _validate_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v) if v is not None else v

    @field_validator("location", "duration", mode="before")
    @classmethod
    def _optional_text(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class SkillRead(CamelModel):
    id: int
    title: str
    description: str
    category: str
    skill_type: str
    instructor_name: str
    contact_email: str
    location: Optional[str] = None
    duration: Optional[str] = None
    price: float
    is_free: bool
    skill_level: str
    average_rating: float
    review_count: int
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class SkillResponse(CamelModel):
    success: bool = True
    data: SkillRead


class SkillMutationResponse(CamelModel):
    success: bool = True
    message: str
    data: SkillRead


class SkillListResponse(CamelModel):
    success: bool = True
    data: list[SkillRead]
    pagination: Pagination
