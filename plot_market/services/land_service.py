"""
Business logic for owned land: buying, selling and watching it.

Clients (registered buyers) send buy requests for available land and
sell requests for land they own.  Guests may also ask to buy a plot by
leaving their contact details.  Owners can watch their land through
network cameras registered with the backend.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Union

from ..client import PlotMarketAPI
from ..core.errors import ValidationError
from ..core.validation import is_valid_email, is_valid_phone, optional_text
from ..schemas.land import Land
from ..schemas.plot import Plot
from ..schemas.submission import BuyRequestCreate, ContactInfo, SellRequestCreate


logger = logging.getLogger(__name__)

DEFAULT_BUY_MESSAGE = "I would like to buy this property"
URGENCIES = ("LOW", "NORMAL", "HIGH")


@dataclass
class PortfolioSummary:
    """Totals shown on a client's home screen."""

    total: int
    estimated_value: float
    # Land whose sale has been registered (status ``SOLD``).
    registered: int


class LandService:
    """Service for buy/sell requests, owned land and site cameras."""

    @classmethod
    def request_purchase(
        cls,
        api: PlotMarketAPI,
        *,
        land_id: Optional[str],
        user_id: Optional[str],
        message: str,
    ) -> Any:
        """Send a buy request from a signed-in client.

        The land is fetched first and the request is only sent while its
        status is ``AVAILABLE``.
        """
        message = (message or "").strip()
        if not message:
            raise ValidationError("Please enter your message")
        if not land_id:
            raise ValidationError("Land ID is missing")
        if not user_id:
            raise ValidationError("User not authenticated")
        land = api.get_land(land_id)
        if land.status != "AVAILABLE":
            raise ValidationError("This land is not available for purchase")
        return api.submit_buy_request(
            BuyRequestCreate(land_id=land_id, user_id=user_id, message=message)
        )

    @classmethod
    def request_purchase_as_guest(
        cls,
        api: PlotMarketAPI,
        *,
        plot_id: Optional[str],
        name: str,
        email: str,
        phone: str,
        message: str = DEFAULT_BUY_MESSAGE,
        clerk_id: Optional[str] = None,
    ) -> Any:
        """Send a buy request carrying the visitor's contact details."""
        name = (name or "").strip()
        email = (email or "").strip()
        phone = (phone or "").strip()
        if not name:
            raise ValidationError("Please enter your full name")
        if not email:
            raise ValidationError("Please enter your email address")
        if not phone:
            raise ValidationError("Please enter your phone number")
        if not is_valid_email(email):
            raise ValidationError("Please enter a valid email address")
        if not is_valid_phone(phone):
            raise ValidationError("Please enter a valid phone number")
        if not plot_id:
            raise ValidationError("Property ID is missing")
        request = BuyRequestCreate(
            land_id=plot_id,
            user_id=optional_text(clerk_id),
            message=(message or "").strip() or DEFAULT_BUY_MESSAGE,
            contact_info=ContactInfo(name=name, email=email.lower(), phone=phone),
        )
        return api.submit_buy_request(request)

    @staticmethod
    def prepare_sell_request(
        plot: Optional[Plot],
        *,
        asking_price: Union[str, float, None] = None,
        terms_accepted: bool = False,
        reason: str = "",
        urgency: str = "NORMAL",
        agent_assistance: bool = False,
        documents: Sequence[str] = (),
        user_id: Optional[str] = None,
    ) -> SellRequestCreate:
        """Build a sell request for one of the user's plots.

        The asking price defaults to the plot's market value.
        """
        if plot is None:
            raise ValidationError("Please select a property")
        if asking_price is None or asking_price == "":
            asking_price = plot.price
        try:
            price = float(asking_price)
        except (TypeError, ValueError):
            raise ValidationError("Please enter a valid asking price") from None
        if price <= 0 or price != price:
            raise ValidationError("Please enter a valid asking price")
        if not terms_accepted:
            raise ValidationError("Please accept the terms and conditions")
        urgency = (urgency or "NORMAL").upper()
        if urgency not in URGENCIES:
            raise ValidationError(f"Urgency must be one of {', '.join(URGENCIES)}")
        return SellRequestCreate(
            plot_id=plot.id,
            asking_price=price,
            reason=(reason or "").strip(),
            urgency=urgency,
            agent_assistance=agent_assistance,
            documents=list(documents),
            user_id=optional_text(user_id),
        )

    @classmethod
    def request_sale(cls, api: PlotMarketAPI, plot: Optional[Plot], **options: Any) -> Any:
        request = cls.prepare_sell_request(plot, **options)
        result = api.submit_sell_request(request)
        logger.info("Sell request for plot %s submitted", request.plot_id)
        return result

    @staticmethod
    def filter_owned(owned: Iterable[Land], status: str = "ALL") -> List[Land]:
        status = (status or "ALL").upper()
        if status == "ALL":
            return list(owned)
        return [land for land in owned if land.status == status]

    @staticmethod
    def portfolio_summary(owned: Iterable[Land]) -> PortfolioSummary:
        lands = list(owned)
        return PortfolioSummary(
            total=len(lands),
            estimated_value=sum(land.plot.price for land in lands if land.plot is not None),
            registered=sum(1 for land in lands if land.status == "SOLD"),
        )

    @staticmethod
    def camera_stream_url(ip_address: str) -> str:
        """Return the MJPEG stream URL for a camera address.

        Bare addresses get an ``http://`` scheme.  Axis cameras expose
        their stream under a vendor specific path; other cameras under
        ``/video``.
        """
        stream_url = ip_address
        if not ip_address.startswith("http") and not ip_address.startswith("rtsp"):
            stream_url = f"http://{ip_address}"
        if "axis" in ip_address:
            return f"{stream_url}/axis-cgi/mjpg/video.cgi?resolution=640x480"
        return f"{stream_url}/video"
