from unittest.mock import MagicMock

import pytest

from plot_market.client import PlotMarketAPI
from plot_market.core.errors import ApiError, ValidationError
from plot_market.schemas.land import Land
from plot_market.schemas.plot import Plot
from plot_market.schemas.project import Project
from plot_market.schemas.visit_request import VisitRequest
from plot_market.services.booking_service import BookingService
from plot_market.services.catalog_service import CatalogService
from plot_market.services.land_service import LandService, PortfolioSummary
from plot_market.services.user_service import ROLE_SELECTION_ROUTE, UserService
from plot_market.schemas.user import User


@pytest.fixture
def api():
    return MagicMock(spec=PlotMarketAPI)


def make_plot(plot_id="plot-1", **fields):
    data = {"id": plot_id, "title": "Corner Plot", "location": "Mysuru", "price": 2500000}
    data.update(fields)
    return Plot.model_validate(data)


# ----------------------------------------------------------------------
# Catalogue
# ----------------------------------------------------------------------
def test_filter_plots_matches_title_or_location():
    plots = [
        make_plot("a", title="Lake View", location="Mysuru"),
        make_plot("b", title="Hill Top", location="Lakeside Road"),
        make_plot("c", title="Garden", location="Hassan"),
    ]

    assert [p.id for p in CatalogService.filter_plots(plots, "LAKE")] == ["a", "b"]
    assert len(CatalogService.filter_plots(plots, "")) == 3


def test_filter_projects_by_search_and_region():
    projects = [
        Project(id="1", name="Green Valley", city="Mysuru", state="Karnataka"),
        Project(id="2", name="Sunrise", description="green plots", city="Pune", state="Maharashtra"),
        Project(id="3", name="Palm Grove", city="Kochi", state="Kerala"),
    ]

    assert [p.id for p in CatalogService.filter_projects(projects, "green")] == ["1", "2"]
    assert [p.id for p in CatalogService.filter_projects(projects, "green", "karnataka")] == ["1"]
    assert [p.id for p in CatalogService.filter_projects(projects, "", "ker")] == ["3"]


@pytest.mark.parametrize(
    "price, expected",
    [
        (15_000_000, "₹1.50 Cr"),
        (10_000_000, "₹1.00 Cr"),
        (1_200_000, "₹12.00 Lac"),
        (9_999_999, "₹100.00 Lac"),
    ],
)
def test_format_price(price, expected):
    assert CatalogService.format_price(price) == expected


# ----------------------------------------------------------------------
# Bookings
# ----------------------------------------------------------------------
def test_book_visit_rejects_malformed_email(api):
    with pytest.raises(ValidationError, match="Please enter a valid email address"):
        BookingService.book_visit(
            api, plot_id="plot-1", name="Asha", email="asha@example",
            phone="9876543210", visit_date="2024-05-01", time="10:30 AM",
        )
    api.submit_visit_request.assert_not_called()


def test_book_visit_rejects_short_phone(api):
    with pytest.raises(ValidationError, match="Please enter a valid phone number"):
        BookingService.book_visit(
            api, plot_id="plot-1", name="Asha", email="asha@example.com",
            phone="12345", visit_date="2024-05-01", time="10:30 AM",
        )


def test_book_visit_lowercases_email(api):
    api.submit_visit_request.return_value = {"id": "visit-1"}

    BookingService.book_visit(
        api, plot_id="plot-1", name="Asha", email=" Asha@Example.com ",
        phone="9876543210", visit_date="2024-05-01", time="10:30 AM", clerk_id="user_1",
    )

    kwargs = api.submit_visit_request.call_args.kwargs
    assert kwargs["email"] == "asha@example.com"
    assert kwargs["clerk_id"] == "user_1"


def test_cancel_and_qr_rules(visit_payload):
    approved = VisitRequest.model_validate(visit_payload)
    pending = VisitRequest.model_validate({**visit_payload, "status": "PENDING", "qrCode": None})

    assert BookingService.can_cancel(pending)
    assert not BookingService.can_cancel(approved)
    assert BookingService.qr_code_available(approved)
    assert not BookingService.qr_code_available(pending)


def test_feedback_complete_requires_purchase_interest():
    assert BookingService.feedback_complete(4, "Good", "None", False)
    assert not BookingService.feedback_complete(4, "Good", "None", None)
    assert not BookingService.feedback_complete(0, "Good", "None", True)
    assert not BookingService.feedback_complete(4, "  ", "None", True)


def test_leave_feedback_only_once(api, visit_payload):
    visit = VisitRequest.model_validate({**visit_payload, "feedback": {"id": "fb-1", "rating": 5}})

    with pytest.raises(ValidationError, match="Feedback already submitted for this visit"):
        BookingService.leave_feedback(
            api, visit, clerk_id="user_1", rating=5, experience="Great",
            suggestions="None", purchase_interest=True,
        )


def test_leave_feedback_submits(api, visit_payload):
    visit = VisitRequest.model_validate(visit_payload)

    BookingService.leave_feedback(
        api, visit, clerk_id="user_1", rating=5, experience="Great",
        suggestions="None", purchase_interest=True,
    )

    assert api.submit_feedback.call_args.kwargs["visit_request_id"] == "visit-1"


# ----------------------------------------------------------------------
# Land
# ----------------------------------------------------------------------
def test_purchase_requires_available_land(api):
    api.get_land.return_value = Land(id="land-1", status="SOLD")

    with pytest.raises(ValidationError, match="This land is not available for purchase"):
        LandService.request_purchase(api, land_id="land-1", user_id="user_1", message="Interested")

    api.submit_buy_request.assert_not_called()


def test_purchase_rejects_land_without_status(api):
    api.get_land.return_value = Land.model_validate({"id": "land-1"})

    with pytest.raises(ValidationError, match="This land is not available for purchase"):
        LandService.request_purchase(api, land_id="land-1", user_id="user_1", message="Interested")

    api.submit_buy_request.assert_not_called()


def test_purchase_of_available_land(api):
    api.get_land.return_value = Land(id="land-1", status="AVAILABLE")

    LandService.request_purchase(api, land_id="land-1", user_id="user_1", message=" Interested ")

    request = api.submit_buy_request.call_args.args[0]
    assert request.land_id == "land-1"
    assert request.message == "Interested"
    assert request.contact_info is None


def test_purchase_requires_signed_in_user(api):
    with pytest.raises(ValidationError, match="User not authenticated"):
        LandService.request_purchase(api, land_id="land-1", user_id=None, message="Hi")


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, "Please enter your full name"),
        ({"email": ""}, "Please enter your email address"),
        ({"phone": ""}, "Please enter your phone number"),
        ({"email": "not-an-email"}, "Please enter a valid email address"),
        ({"phone": "12345"}, "Please enter a valid phone number"),
        ({"plot_id": None}, "Property ID is missing"),
    ],
)
def test_guest_purchase_validation(api, overrides, message):
    values = dict(plot_id="plot-1", name="Asha", email="asha@example.com", phone="9876543210")
    values.update(overrides)

    with pytest.raises(ValidationError) as exc_info:
        LandService.request_purchase_as_guest(api, **values)

    assert exc_info.value.message == message


def test_guest_purchase_sends_contact(api):
    LandService.request_purchase_as_guest(
        api, plot_id="plot-1", name=" Asha ", email="Asha@Example.com", phone="9876543210",
    )

    request = api.submit_buy_request.call_args.args[0]
    assert request.message == "I would like to buy this property"
    assert request.contact_info.email == "asha@example.com"
    assert request.contact_info.name == "Asha"


def test_sell_request_defaults_to_market_value():
    request = LandService.prepare_sell_request(make_plot(), terms_accepted=True)

    assert request.asking_price == 2500000
    assert request.urgency == "NORMAL"


@pytest.mark.parametrize("price", ["abc", "0", "-5"])
def test_sell_request_rejects_bad_price(price):
    with pytest.raises(ValidationError, match="Please enter a valid asking price"):
        LandService.prepare_sell_request(make_plot(), asking_price=price, terms_accepted=True)


def test_sell_request_requires_terms_and_plot():
    with pytest.raises(ValidationError, match="Please select a property"):
        LandService.prepare_sell_request(None, terms_accepted=True)
    with pytest.raises(ValidationError, match="Please accept the terms and conditions"):
        LandService.prepare_sell_request(make_plot(), asking_price="3000000")


def test_request_sale_submits(api):
    LandService.request_sale(api, make_plot(), asking_price="3000000.5", terms_accepted=True, urgency="high")

    request = api.submit_sell_request.call_args.args[0]
    assert request.asking_price == 3000000.5
    assert request.urgency == "HIGH"


def test_owned_land_filter_and_summary():
    owned = [
        Land(id="1", status="SOLD", plot=make_plot("a", price=1000)),
        Land(id="2", status="ADVANCE", plot=make_plot("b", price=2500)),
        Land(id="3", status="SOLD"),
    ]

    assert [land.id for land in LandService.filter_owned(owned, "sold")] == ["1", "3"]
    assert len(LandService.filter_owned(owned)) == 3
    assert LandService.portfolio_summary(owned) == PortfolioSummary(
        total=3, estimated_value=3500, registered=2,
    )


@pytest.mark.parametrize(
    "address, expected",
    [
        ("192.168.1.20", "http://192.168.1.20/video"),
        ("https://cam.example.com", "https://cam.example.com/video"),
        ("rtsp://10.0.0.2:554", "rtsp://10.0.0.2:554/video"),
        ("axis-gate.local", "http://axis-gate.local/axis-cgi/mjpg/video.cgi?resolution=640x480"),
    ],
)
def test_camera_stream_url(address, expected):
    assert LandService.camera_stream_url(address) == expected


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------
def test_home_route_by_role():
    assert UserService.home_route("CLIENT") == "/(client)/(tabs)/Home"
    assert UserService.home_route("manager") == "/(manager)/(tabs)/Home"
    assert UserService.home_route(None) == ROLE_SELECTION_ROUTE
    assert UserService.home_route("ADMIN") == ROLE_SELECTION_ROUTE


def test_resolve_role(api):
    api.get_user_by_clerk_id.return_value = User(clerk_id="user_1", role="MANAGER")
    assert UserService.resolve_role(api, "user_1") == "MANAGER"

    api.get_user_by_clerk_id.return_value = None
    assert UserService.resolve_role(api, "user_1") is None


def test_select_role_updates_profile(api):
    route = UserService.select_role(api, "user_1", "client")

    assert route == "/(client)/(tabs)/Home"
    update = api.update_user_profile.call_args.args[1]
    assert update.role == "CLIENT"


def test_select_role_failure_message(api):
    api.update_user_profile.side_effect = ApiError("Server error. Please try again later", status_code=500)

    with pytest.raises(ApiError) as exc_info:
        UserService.select_role(api, "user_1", "MANAGER")

    assert exc_info.value.message == "We couldn't update your role at this moment."
    assert exc_info.value.status_code == 500


def test_select_role_rejects_unknown_role(api):
    with pytest.raises(ValidationError):
        UserService.select_role(api, "user_1", "ADMIN")
