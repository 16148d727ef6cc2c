"""
Pydantic model for land ownership records.

A land record ties a plot to its owner.  The backend attaches different
extra fields depending on the endpoint (registration numbers, purchase
dates, ...); they are kept on the model as extra attributes.
"""

from typing import Optional

from pydantic import validator

from .base import CamelModel
from .plot import Plot


class Land(CamelModel):
    model_config = {
        "extra": "allow",
    }

    id: str
    status: Optional[str] = None
    plot_id: Optional[str] = None
    owner_id: Optional[str] = None
    plot: Optional[Plot] = None

    @validator("status", pre=True)
    def normalise_status(cls, v):
        if v is None:
            return None
        return str(v).upper()
