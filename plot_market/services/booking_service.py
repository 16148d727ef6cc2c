"""
Business logic for site visit bookings.

Guests book a visit to a plot, may cancel it while it is still pending,
show a QR code at the site once a manager has approved it, and leave
feedback afterwards.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional, Union

from ..client import PlotMarketAPI
from ..core.errors import ValidationError
from ..core.validation import is_valid_email, is_valid_phone, require_text
from ..schemas.visit_request import VisitRequest


logger = logging.getLogger(__name__)


class BookingService:
    """Service for guest visit bookings."""

    @classmethod
    def book_visit(
        cls,
        api: PlotMarketAPI,
        *,
        plot_id: str,
        name: str,
        email: str,
        phone: str,
        visit_date: Union[str, date, datetime],
        time: str,
        clerk_id: Optional[str] = None,
    ) -> Any:
        """Validate the contact details and submit a visit request.

        On top of the presence checks done by the client, the email must
        look like an address and the phone number must have at least ten
        characters.  The email is stored in lower case.
        """
        email = require_text(email, "Email is required")
        phone = require_text(phone, "Phone number is required")
        if not is_valid_email(email):
            raise ValidationError("Please enter a valid email address")
        if not is_valid_phone(phone):
            raise ValidationError("Please enter a valid phone number")
        result = api.submit_visit_request(
            name=name,
            email=email.lower(),
            phone=phone,
            date=visit_date,
            time=time,
            plot_id=plot_id,
            clerk_id=clerk_id,
        )
        logger.info("Visit to plot %s booked", plot_id)
        return result

    @staticmethod
    def can_cancel(visit: VisitRequest) -> bool:
        """Only visits still awaiting approval can be cancelled."""
        return visit.status == "PENDING"

    @staticmethod
    def qr_code_available(visit: VisitRequest) -> bool:
        return visit.status == "APPROVED" and bool(visit.qr_code)

    @staticmethod
    def feedback_complete(
        rating: Optional[int],
        experience: Optional[str],
        suggestions: Optional[str],
        purchase_interest: Optional[bool],
    ) -> bool:
        """Whether every feedback field has been filled in.

        The backend accepts a ``None`` purchase interest, but the booking
        screen asks the visitor to answer it before submitting.
        """
        return (
            rating is not None
            and 1 <= rating <= 5
            and bool((experience or "").strip())
            and bool((suggestions or "").strip())
            and purchase_interest is not None
        )

    @classmethod
    def leave_feedback(
        cls,
        api: PlotMarketAPI,
        visit: VisitRequest,
        *,
        clerk_id: str,
        rating: int,
        experience: str,
        suggestions: str,
        purchase_interest: Optional[bool],
    ) -> Any:
        if visit.feedback is not None:
            raise ValidationError("Feedback already submitted for this visit")
        if not cls.feedback_complete(rating, experience, suggestions, purchase_interest):
            raise ValidationError("Please complete all feedback fields")
        return api.submit_feedback(
            visit_request_id=visit.id,
            clerk_id=clerk_id,
            rating=rating,
            experience=experience,
            suggestions=suggestions,
            purchase_interest=purchase_interest,
        )
