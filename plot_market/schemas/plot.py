"""
Pydantic model for plots.

A plot is a unit of land listed for sale inside a project.  Its status
moves from ``AVAILABLE`` through ``ADVANCE`` (an advance has been paid)
to ``SOLD``; the backend owns these transitions.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, validator

from .base import CamelModel


PLOT_STATUSES = ("AVAILABLE", "ADVANCE", "SOLD")


class ProjectRef(CamelModel):
    id: Optional[str] = None
    name: str = ""


class Plot(CamelModel):
    id: str
    title: str = ""
    dimension: str = ""
    price: float = 0
    price_label: Optional[str] = None
    status: str = "AVAILABLE"
    image_urls: List[str] = Field(default_factory=list)
    location: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    facing: str = ""
    amenities: List[str] = Field(default_factory=list)
    map_embed_url: Optional[str] = None
    project_id: Optional[str] = None
    project: Optional[ProjectRef] = None
    created_at: Optional[datetime] = None

    @validator("status", pre=True)
    def normalise_status(cls, v):
        """Older endpoints report the status in lower case."""
        if v is None:
            return "AVAILABLE"
        return str(v).upper()

    @validator("image_urls", "amenities", pre=True)
    def none_as_empty(cls, v):
        return v or []
