"""Plot marketplace API client.

This module defines a client wrapper around the marketplace REST
backend.  The client uses the ``requests`` library internally to make
HTTP calls and returns pydantic models from :mod:`plot_market.schemas`.

Every public method follows the same pattern:

1. validate its arguments, raising :class:`ValidationError` with a
   message specific to the missing or malformed field;
2. dispatch exactly one HTTP call (``create_or_update_user`` and
   ``get_all_plots`` are the only methods that make more);
3. on failure raise :class:`ApiError` with a message chosen from the
   method's table of status codes, falling back to the ``error`` text
   sent by the server and then to the method's default message.

There are no retries.  A request that gets no answer within the
configured timeout raises :class:`NetworkError`.

The client supports optional authentication via a bearer token which
will be sent in the ``Authorization`` header.  To enable this behaviour,
initialise the client with ``api_key='<token>'`` or set
``PLOT_MARKET_API_KEY``.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

import pydantic
import requests

from .core.config import settings
from .core.errors import SERVER_ERROR, ApiError, MarketplaceError, ValidationError, raise_api_error
from .core.validation import check_rating, optional_text, reject_blank, require_text
from .schemas.camera import Camera, CameraCreate, CameraUpdate
from .schemas.feedback import Feedback, FeedbackCreate
from .schemas.land import Land
from .schemas.plot import Plot
from .schemas.project import Project
from .schemas.submission import BuyRequestCreate, LeaveRequestCreate, SellRequestCreate
from .schemas.user import ROLES, User, UserProfile, UserUpdate, UserUpsert
from .schemas.visit_request import VisitRequest, VisitRequestCreate


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


# Hints logged for well known failure statuses, regardless of operation.
_STATUS_HINTS = {
    401: "Unauthorized access",
    404: "Resource not found",
    409: "Conflict - duplicate request",
    500: "Server error",
}

# Per-operation status tables.
USER_SYNC_ERRORS = {400: "Invalid user data", 404: "User not found", 500: SERVER_ERROR}
USER_READ_ERRORS = {404: "User not found", 500: SERVER_ERROR}
FEEDBACK_SUBMIT_ERRORS = {
    400: "Invalid feedback data",
    401: "Please sign in to submit feedback",
    404: "Visit request not found",
    409: "Feedback already submitted for this visit",
    500: SERVER_ERROR,
}
FEEDBACK_LIST_ERRORS = {401: "Please sign in to view feedback", 500: SERVER_ERROR}
VISIT_LIST_ERRORS = {
    401: "Please sign in to view bookings",
    404: "No bookings found",
    500: SERVER_ERROR,
}
VISIT_CANCEL_ERRORS = {
    400: "Invalid request data",
    401: "Please sign in to cancel bookings",
    403: "You are not authorized to cancel this booking",
    404: "Visit request not found",
    500: SERVER_ERROR,
}
VISIT_SUBMIT_ERRORS = {
    401: "Please login to book a visit",
    404: "Plot not found",
    400: "Invalid request data",
    409: "You already have a pending visit request for this plot",
    500: SERVER_ERROR,
}
CAMERA_LIST_ERRORS = {
    401: "Please sign in to view cameras",
    404: "No cameras found",
    500: SERVER_ERROR,
}
CAMERA_CREATE_ERRORS = {
    400: "Invalid camera data",
    401: "Please sign in to create cameras",
    403: "You don't have permission to create cameras",
    500: SERVER_ERROR,
}
CAMERA_UPDATE_ERRORS = {
    400: "Invalid camera data",
    401: "Please sign in to update cameras",
    403: "You don't have permission to update this camera",
    404: "Camera not found",
    500: SERVER_ERROR,
}
CAMERA_DELETE_ERRORS = {
    401: "Please sign in to delete cameras",
    403: "You don't have permission to delete this camera",
    404: "Camera not found",
    500: SERVER_ERROR,
}

OFFLINE_MESSAGE = "Please check your internet connection and try again"

DateLike = Union[str, date, datetime]


class PlotMarketAPI:
    """Client for interacting with the plot marketplace API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API including the ``/api`` prefix,
                e.g. ``https://example.com/api``.  Defaults to
                ``settings.api_url``.
            api_key: Optional bearer token.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` will be
                included in all requests.
            timeout: Request timeout in seconds.  Defaults to
                ``settings.timeout`` (15 seconds).
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else (settings.api_key or None)
        self.timeout = timeout if timeout is not None else settings.timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``, etc.).
            path: Path relative to :attr:`base_url` (e.g. ``/plots``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PUT/PATCH).
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` (``None`` when no response arrived),
            ``detail`` (the server's own error text, if any), ``code``
            (``http``, ``timeout``, ``network`` or ``request``) and
            ``message`` describing the issue for the log.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if not response.content:
                return None, None
            try:
                return response.json(), None
            except ValueError:
                logger.warning("Non-JSON response body from %s %s", method, url)
                return None, None
        except requests.HTTPError as exc:
            resp = exc.response
            status = resp.status_code if resp is not None else None
            detail = _error_detail(resp)
            logger.error("API request %s %s failed (%s): %s", method, path, status, detail or exc)
            hint = _STATUS_HINTS.get(status)
            if hint:
                logger.error(hint)
            return None, {
                "status_code": status,
                "detail": detail,
                "code": "http",
                "message": detail or str(exc),
            }
        except requests.Timeout as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            logger.error("Request timed out - please check your connection")
            return None, {"status_code": None, "detail": None, "code": "timeout", "message": str(exc)}
        except requests.ConnectionError as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            logger.error("Network error - please check if the server is running")
            return None, {"status_code": None, "detail": None, "code": "network", "message": str(exc)}
        except requests.RequestException as exc:
            logger.error("Error setting up request %s %s: %s", method, path, exc)
            return None, {"status_code": None, "detail": None, "code": "request", "message": str(exc)}

    def _call(
        self,
        method: str,
        path: str,
        *,
        default: str,
        status_messages: Optional[Mapping[int, str]] = None,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        network_message: Optional[str] = None,
    ) -> Any:
        """Run :meth:`_request` and raise the mapped error on failure."""
        data, error = self._request(method, path, params=params, json_body=json_body)
        if error:
            raise_api_error(error, status_messages, default, network_message=network_message)
        return data

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_or_update_user(
        self,
        *,
        clerk_id: str,
        email: str,
        name: str,
        phone: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Any:
        """Create the user, or replace it when the backend reports it exists.

        The backend answers ``400`` to a create for an existing
        ``clerkId``; the client then retries once with ``PUT``.
        """
        payload = UserUpsert(
            clerk_id=require_text(clerk_id, "User ID is required"),
            email=require_text(email, "Email is required"),
            name=require_text(name, "Name is required"),
            phone=optional_text(phone),
            role=_check_role(role or "GUEST"),
        )
        body = payload.to_payload()
        data, error = self._request("POST", "/users", json_body=body)
        if error and error.get("status_code") == 400:
            logger.info("User %s already exists, updating instead", payload.clerk_id)
            data, error = self._request("PUT", f"/users/{payload.clerk_id}", json_body=body)
        if error:
            raise_api_error(error, USER_SYNC_ERRORS, "Failed to sync user")
        return data

    def get_user_by_clerk_id(self, clerk_id: str) -> Optional[User]:
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "GET", "/users", params={"clerkId": clerk_id},
            status_messages=USER_READ_ERRORS, default="Failed to fetch user",
        )
        if not data:
            return None
        return _parse(User, data, "Failed to fetch user")

    def get_user_profile(self, clerk_id: str) -> UserProfile:
        """Return the user in the identity provider's profile shape."""
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "GET", "/users", params={"clerkId": clerk_id},
            status_messages=USER_READ_ERRORS, default="Failed to load profile",
        )
        if not data:
            raise ApiError("User not found")
        user = _parse(User, data, "Failed to load profile")
        return UserProfile.from_user(user, clerk_id)

    def update_user_profile(self, clerk_id: str, update: UserUpdate) -> Any:
        clerk_id = require_text(clerk_id, "User ID is required")
        email = reject_blank(update.email, "Email is invalid")
        name = reject_blank(update.name, "Name is invalid")
        body: Dict[str, Any] = {"clerkId": clerk_id, "phone": optional_text(update.phone)}
        if name:
            body["name"] = name
        if email:
            body["email"] = email
        if update.role:
            body["role"] = update.role
        return self._call(
            "PUT", f"/users/{clerk_id}", json_body=body,
            status_messages=USER_SYNC_ERRORS, default="Failed to update profile",
        )

    # ------------------------------------------------------------------
    # Projects and plots
    # ------------------------------------------------------------------
    def get_projects(self) -> List[Project]:
        data = self._call("GET", "/projects", default="Failed to load projects")
        return _parse_list(Project, data, "Failed to load projects")

    def get_plots_by_project_id(self, project_id: str) -> List[Plot]:
        project_id = require_text(project_id, "Project ID is required")
        data = self._call(
            "GET", "/plots", params={"projectId": project_id}, default="Failed to load plots"
        )
        return _parse_list(Plot, data, "Failed to load plots")

    def get_all_plots(self) -> List[Plot]:
        """Return the plots of every project, in project order."""
        try:
            plots: List[Plot] = []
            for project in self.get_projects():
                plots.extend(self.get_plots_by_project_id(project.id))
            return plots
        except MarketplaceError as exc:
            logger.error("Error fetching all plots: %s", exc)
            raise ApiError("Failed to load all plots", status_code=exc.status_code) from exc

    def get_plot_by_id(self, plot_id: str) -> Optional[Plot]:
        plot_id = require_text(plot_id, "Plot ID is required")
        data = self._call("GET", f"/plots/{plot_id}", default="Failed to load plot")
        if not data:
            return None
        return _parse(Plot, data, "Failed to load plot")

    def get_owned_plots(self, user_id: str) -> List[Plot]:
        """Plots owned by ``user_id``, offered as candidates for a sell request."""
        user_id = require_text(user_id, "User ID is required")
        data = self._call(
            "GET", "/plots/owned", params={"userId": user_id},
            default="Failed to fetch your properties",
        )
        return _parse_list(Plot, data, "Failed to fetch your properties")

    # ------------------------------------------------------------------
    # Visit requests
    # ------------------------------------------------------------------
    def submit_visit_request(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        date: DateLike,
        time: str,
        plot_id: str,
        clerk_id: Optional[str] = None,
    ) -> Any:
        payload = VisitRequestCreate(
            name=require_text(name, "Name is required"),
            email=require_text(email, "Email is required"),
            phone=require_text(phone, "Phone number is required"),
            date=_iso_date(date, "Date is required"),
            time=require_text(time, "Time is required"),
            plot_id=require_text(plot_id, "Plot ID is required"),
            clerk_id=optional_text(clerk_id),
        )
        logger.info("Submitting visit request for plot %s", payload.plot_id)
        return self._call(
            "POST", "/visit-requests", json_body=payload.to_payload(),
            status_messages=VISIT_SUBMIT_ERRORS, default="Failed to submit visit request",
        )

    def get_visit_requests(self, clerk_id: Optional[str]) -> List[VisitRequest]:
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "GET", "/visit-requests", params={"clerkId": clerk_id},
            status_messages=VISIT_LIST_ERRORS, default="Failed to load bookings",
        )
        return _parse_list(VisitRequest, data, "Failed to load bookings")

    def get_assigned_visit_requests(self, manager_id: str) -> List[VisitRequest]:
        """Visit requests assigned to a manager for approval."""
        manager_id = require_text(manager_id, "Manager ID is required")
        default = "Failed to fetch visit requests. Please try again."
        data = self._call(
            "GET", "/visit-requests", params={"managerId": manager_id}, default=default
        )
        return _parse_list(VisitRequest, data, default)

    def cancel_visit_request(self, visit_request_id: str, clerk_id: str) -> Any:
        visit_request_id = require_text(visit_request_id, "Visit Request ID is required")
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "DELETE", f"/visit-requests/{visit_request_id}", params={"clerkId": clerk_id},
            status_messages=VISIT_CANCEL_ERRORS, default="Failed to cancel visit request",
        )
        logger.info("Visit request %s cancelled", visit_request_id)
        return data

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------
    def submit_feedback(
        self,
        *,
        visit_request_id: str,
        clerk_id: str,
        rating: int,
        experience: str,
        suggestions: str,
        purchase_interest: Optional[bool] = None,
    ) -> Any:
        visit_request_id = require_text(visit_request_id, "Visit Request ID is required")
        clerk_id = require_text(clerk_id, "User ID is required")
        experience = require_text(experience, "Experience feedback is required")
        suggestions = require_text(suggestions, "Suggestions are required")
        payload = FeedbackCreate(
            visit_request_id=visit_request_id,
            rating=check_rating(rating),
            experience=experience,
            suggestions=suggestions,
            purchase_interest=purchase_interest,
            clerk_id=clerk_id,
        )
        logger.info("Submitting feedback for visit request %s", visit_request_id)
        return self._call(
            "POST", "/feedback", json_body=payload.to_payload(),
            status_messages=FEEDBACK_SUBMIT_ERRORS, default="Failed to submit feedback",
        )

    def get_user_feedback(self, clerk_id: str) -> List[Feedback]:
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "GET", "/feedback", params={"clerkId": clerk_id},
            status_messages=FEEDBACK_LIST_ERRORS, default="Failed to load feedback",
        )
        return _parse_list(Feedback, data, "Failed to load feedback")

    # ------------------------------------------------------------------
    # Lands
    # ------------------------------------------------------------------
    def get_land(self, land_id: str) -> Land:
        """Fetch one land record to check its availability.

        Any failed response is reported as "Failed to verify land
        availability", whatever error text the server sent.
        """
        land_id = require_text(land_id, "Land ID is missing")
        data, error = self._request("GET", f"/lands/{land_id}")
        if error:
            raise_api_error({**error, "detail": None}, None, "Failed to verify land availability")
        if not data:
            raise ApiError("Failed to verify land availability")
        return _parse(Land, data, "Failed to verify land availability")

    def get_lands_by_plot_id(self, plot_id: str) -> List[Land]:
        plot_id = require_text(plot_id, "Plot ID is required")
        data = self._call(
            "GET", "/lands/by-plot", params={"plotId": plot_id}, default="Failed to fetch lands"
        )
        return _parse_list(Land, data, "Failed to fetch lands")

    def get_owned_lands(self, clerk_id: str) -> List[Land]:
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "GET", "/owned-lands", params={"clerkId": clerk_id},
            default="Failed to fetch owned lands",
        )
        return _parse_list(Land, data, "Failed to fetch owned lands")

    # ------------------------------------------------------------------
    # Buy, sell and leave requests
    # ------------------------------------------------------------------
    def submit_buy_request(self, request: BuyRequestCreate) -> Any:
        require_text(request.land_id, "Land ID is missing")
        require_text(request.message, "Please enter your message")
        logger.info("Submitting buy request for land %s", request.land_id)
        return self._call(
            "POST", "/buy-requests", json_body=request.to_payload(exclude_none=True),
            default="Failed to submit buy request",
        )

    def submit_sell_request(self, request: SellRequestCreate) -> Any:
        require_text(request.plot_id, "Please select a property")
        logger.info("Submitting sell request for plot %s", request.plot_id)
        return self._call(
            "POST", "/sell-requests", json_body=request.to_payload(exclude_none=True),
            default="Failed to submit sell request",
        )

    def submit_leave_request(
        self,
        *,
        clerk_id: str,
        start_date: Union[date, datetime],
        end_date: Union[date, datetime],
        reason: str,
    ) -> Any:
        """Submit a manager's leave request for the given period."""
        clerk_id = require_text(clerk_id, "User ID is required")
        reason = require_text(reason, "Please provide a reason for leave")
        if _as_datetime(start_date) > _as_datetime(end_date):
            raise ValidationError("End date cannot be before start date")
        payload = LeaveRequestCreate(
            clerk_id=clerk_id,
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            reason=reason,
        )
        return self._call(
            "POST", "/leave-requests", json_body=payload.to_payload(),
            default="Failed to submit leave request", network_message=OFFLINE_MESSAGE,
        )

    # ------------------------------------------------------------------
    # Cameras
    # ------------------------------------------------------------------
    def get_cameras(self, clerk_id: str) -> List[Camera]:
        clerk_id = require_text(clerk_id, "User ID is required")
        data = self._call(
            "GET", "/cameras", params={"clerkId": clerk_id},
            status_messages=CAMERA_LIST_ERRORS, default="Failed to load cameras",
        )
        return _parse_list(Camera, data, "Failed to load cameras")

    def create_camera(self, camera: CameraCreate, clerk_id: str) -> Camera:
        clerk_id = require_text(clerk_id, "User ID is required")
        body = {
            "landId": require_text(camera.land_id, "Land ID is required"),
            "ipAddress": require_text(camera.ip_address, "IP Address is required"),
            "label": require_text(camera.label, "Camera label is required"),
            "clerkId": clerk_id,
        }
        data = self._call(
            "POST", "/cameras", json_body=body,
            status_messages=CAMERA_CREATE_ERRORS, default="Failed to create camera",
        )
        return _parse(Camera, data, "Failed to create camera")

    def update_camera(self, camera_id: str, update: CameraUpdate, clerk_id: str) -> Camera:
        clerk_id = require_text(clerk_id, "User ID is required")
        camera_id = require_text(camera_id, "Camera ID is required")
        body: Dict[str, Any] = {"clerkId": clerk_id}
        ip_address = reject_blank(update.ip_address, "IP Address is invalid")
        label = reject_blank(update.label, "Camera label is invalid")
        if ip_address:
            body["ipAddress"] = ip_address
        if label:
            body["label"] = label
        data = self._call(
            "PATCH", f"/cameras/{camera_id}", json_body=body,
            status_messages=CAMERA_UPDATE_ERRORS, default="Failed to update camera",
        )
        return _parse(Camera, data, "Failed to update camera")

    def delete_camera(self, camera_id: str, clerk_id: str) -> None:
        clerk_id = require_text(clerk_id, "User ID is required")
        camera_id = require_text(camera_id, "Camera ID is required")
        self._call(
            "DELETE", f"/cameras/{camera_id}", params={"clerkId": clerk_id},
            status_messages=CAMERA_DELETE_ERRORS, default="Failed to delete camera",
        )


# ----------------------------------------------------------------------
# Module helpers
# ----------------------------------------------------------------------
def _error_detail(response: Optional[requests.Response]) -> Optional[str]:
    """Extract the server's error text from an error response, if any."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    detail = body.get("error")
    if detail is None:
        return None
    return detail if isinstance(detail, str) else str(detail)


def _extract_list(data: Any) -> List[Any]:
    """Return the list carried by ``data``.

    The backend normally answers with a bare JSON array.  Some endpoints
    wrap it in an object under ``data`` or ``items``; anything else is
    treated as an empty result.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("data", "items"):
            if isinstance(data.get(key), list):
                return data[key]
    return []


def _parse(model: Type[ModelT], data: Any, default: str) -> ModelT:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        logger.error("Unexpected %s payload: %s", model.__name__, exc)
        raise ApiError(default) from exc


def _parse_list(model: Type[ModelT], data: Any, default: str) -> List[ModelT]:
    return [_parse(model, item, default) for item in _extract_list(data)]


def _iso_date(value: Optional[DateLike], message: str) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return require_text(value, message)


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def _check_role(role: str) -> str:
    role = role.upper()
    if role not in ROLES:
        raise ValidationError(f"Role must be one of {', '.join(ROLES)}")
    return role
