"""
Pydantic models for buy, sell and leave requests.

These are write-only payloads: the backend acknowledges them with an
opaque JSON document which the client returns unchanged.
"""

from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel


Urgency = Literal["LOW", "NORMAL", "HIGH"]


class ContactInfo(CamelModel):
    name: str
    email: str
    phone: str


class BuyRequestCreate(CamelModel):
    land_id: str
    user_id: Optional[str] = None
    message: str
    # Only sent for guests, who have no account to contact them through.
    contact_info: Optional[ContactInfo] = None


class SellRequestCreate(CamelModel):
    plot_id: str
    asking_price: float = Field(..., gt=0)
    reason: str = ""
    urgency: Urgency = "NORMAL"
    agent_assistance: bool = False
    # URLs or local URIs of ownership documents.
    documents: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None


class LeaveRequestCreate(CamelModel):
    clerk_id: str
    # ISO 8601 timestamps.
    start_date: str
    end_date: str
    reason: str
