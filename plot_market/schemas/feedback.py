"""Pydantic models for post-visit feedback."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class FeedbackCreate(CamelModel):
    """Schema for submitting feedback on a completed visit."""

    visit_request_id: str
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    experience: str
    suggestions: str
    # ``None`` means the visitor did not say whether they want to buy.
    purchase_interest: Optional[bool] = None
    clerk_id: str


class Feedback(CamelModel):
    id: str
    visit_request_id: Optional[str] = None
    rating: int
    experience: str = ""
    suggestions: str = ""
    purchase_interest: Optional[bool] = None
    created_at: Optional[datetime] = None
