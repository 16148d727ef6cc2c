"""
Pydantic models for site cameras.

Land owners can register network cameras watching their land.  The
backend stores only the address and a label; streams are opened by the
viewer directly (see :func:`plot_market.services.land_service.LandService.camera_stream_url`).
"""

from datetime import datetime
from typing import Optional

from .base import CamelModel


class CameraPlot(CamelModel):
    title: str = ""
    location: str = ""


class CameraLand(CamelModel):
    id: str
    plot: Optional[CameraPlot] = None


class Camera(CamelModel):
    id: str
    land_id: str
    ip_address: str
    label: str = ""
    created_at: Optional[datetime] = None
    land: Optional[CameraLand] = None


class CameraCreate(CamelModel):
    land_id: str
    ip_address: str
    label: str


class CameraUpdate(CamelModel):
    """Partial update; omitted fields keep their current value."""

    ip_address: Optional[str] = None
    label: Optional[str] = None
