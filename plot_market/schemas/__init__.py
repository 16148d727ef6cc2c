"""
Pydantic schema definitions for API payloads.

Each resource (users, projects, plots, visit requests, feedback,
cameras, lands and buy/sell/leave requests) defines its own models for
request and response bodies.  Models use snake_case attributes and
serialise to the camelCase keys the backend expects.
"""

from .base import CamelModel
from .camera import Camera, CameraCreate, CameraUpdate
from .feedback import Feedback, FeedbackCreate
from .land import Land
from .plot import Plot
from .project import Project
from .submission import BuyRequestCreate, ContactInfo, LeaveRequestCreate, SellRequestCreate
from .user import Role, User, UserProfile, UserUpdate, UserUpsert
from .visit_request import VisitRequest, VisitRequestCreate

__all__ = [
    "CamelModel",
    "Camera",
    "CameraCreate",
    "CameraUpdate",
    "Feedback",
    "FeedbackCreate",
    "Land",
    "Plot",
    "Project",
    "BuyRequestCreate",
    "ContactInfo",
    "LeaveRequestCreate",
    "SellRequestCreate",
    "Role",
    "User",
    "UserProfile",
    "UserUpdate",
    "UserUpsert",
    "VisitRequest",
    "VisitRequestCreate",
]
