"""
Pydantic models for visit requests.

A visit request is a scheduled appointment for a prospective buyer to
view a plot.  Guests create them; managers approve or reject them on the
backend.  An approved request carries a QR code that is checked at the
site and expires at ``expires_at``.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel
from .user import Role


VisitStatus = Literal["PENDING", "APPROVED", "REJECTED", "COMPLETED"]


class VisitRequestCreate(CamelModel):
    name: str
    email: str
    phone: str
    # ISO date of the visit, e.g. ``2024-05-01``.
    date: str
    # Free-form time slot as displayed to the user, e.g. ``10:30 AM``.
    time: str
    plot_id: str
    # Omitted for anonymous bookings; sent as ``null``.
    clerk_id: Optional[str] = None


class VisitProject(CamelModel):
    id: Optional[str] = None
    name: str = ""


class VisitPlot(CamelModel):
    id: Optional[str] = None
    title: str = ""
    location: str = ""
    project: VisitProject = Field(default_factory=VisitProject)


class VisitUser(CamelModel):
    id: str
    name: str = ""
    email: str = ""
    role: Optional[Role] = None


class VisitFeedback(CamelModel):
    id: Optional[str] = None
    rating: int
    experience: str = ""
    suggestions: str = ""
    purchase_interest: Optional[bool] = None


class VisitRequest(CamelModel):
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    date: str = ""
    time: str = ""
    status: VisitStatus = "PENDING"
    qr_code: Optional[str] = None
    expires_at: Optional[datetime] = None
    plot: VisitPlot = Field(default_factory=VisitPlot)
    user: Optional[VisitUser] = None
    feedback: Optional[VisitFeedback] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
