"""Pydantic model for real-estate projects (a development grouping plots)."""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class Project(CamelModel):
    id: str
    name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[float] = None
    plots_available: Optional[int] = None
    price_range: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
