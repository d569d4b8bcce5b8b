from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skill_exchange.database import Base


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    skill_type = Column(String(20), nullable=False, default="Offering", index=True)
    instructor_name = Column(String(50), nullable=False)
    contact_email = Column(String(255), nullable=False)
    location = Column(String(100), nullable=True)
    duration = Column(String(50), nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    is_free = Column(Boolean, nullable=False, default=False, index=True)
    skill_level = Column(String(20), nullable=False, default="Any", index=True)

    # Derived from the review set; only the rating aggregator writes these.
    average_rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    reviews = relationship(
        "Review",
        back_populates="skill",
        cascade="all, delete-orphan",
        order_by="Review.id",
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_skills_price_non_negative"),
        CheckConstraint("average_rating >= 0 AND average_rating <= 5", name="ck_skills_average_rating_range"),
        CheckConstraint("review_count >= 0", name="ck_skills_review_count_non_negative"),
    )
