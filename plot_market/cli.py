#!/usr/bin/env python3
"""
Command line front end for the plot marketplace API.

Every client operation is exposed as a subcommand.  Results are printed
as JSON on stdout; failures print ``[!] <message>`` on stderr and exit
with status 1.

Usage examples::

    plot-market projects --search hills
    plot-market plots --project p1
    plot-market book-visit --plot p7 --name "Asha Rao" --email asha@example.com \
        --phone 9876543210 --date 2024-05-01 --time "10:30 AM"
    plot-market bookings --clerk-id user_123
    plot-market cameras list --clerk-id user_123

Connection settings default to the ``PLOT_MARKET_*`` environment
variables (see :mod:`plot_market.core.config`).
"""

import argparse
import dataclasses
import json
import sys
from datetime import date
from typing import Any, Callable, List, Optional

from pydantic import BaseModel

from .client import PlotMarketAPI
from .core.config import settings
from .core.errors import MarketplaceError
from .core.logging_config import setup_logging
from .schemas.camera import CameraCreate, CameraUpdate
from .schemas.user import ROLES, UserUpdate
from .services.booking_service import BookingService
from .services.catalog_service import CatalogService
from .services.land_service import LandService
from .services.user_service import UserService


Handler = Callable[[PlotMarketAPI, argparse.Namespace], Any]


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    return value


def _print(value: Any) -> None:
    print(json.dumps(_jsonable(value), indent=2, ensure_ascii=False))


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.lower()
    if lowered in {"yes", "true", "1"}:
        return True
    if lowered in {"no", "false", "0"}:
        return False
    if lowered in {"unsure", "none", ""}:
        return None
    raise argparse.ArgumentTypeError("expected yes, no or unsure")


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------
def cmd_projects(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return CatalogService.filter_projects(api.get_projects(), args.search, args.city)


def cmd_plots(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    plots = api.get_plots_by_project_id(args.project) if args.project else api.get_all_plots()
    plots = CatalogService.filter_plots(plots, args.search)
    if args.pretty_price:
        return [
            {"id": p.id, "title": p.title, "location": p.location,
             "status": p.status, "price": CatalogService.format_price(p.price)}
            for p in plots
        ]
    return plots


def cmd_plot(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_plot_by_id(args.plot_id)


def cmd_owned_plots(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_owned_plots(args.user_id)


def cmd_book_visit(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return BookingService.book_visit(
        api,
        plot_id=args.plot,
        name=args.name,
        email=args.email,
        phone=args.phone,
        visit_date=args.date,
        time=args.time,
        clerk_id=args.clerk_id,
    )


def cmd_bookings(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_visit_requests(args.clerk_id)


def cmd_assigned(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_assigned_visit_requests(args.manager_id)


def cmd_cancel_visit(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.cancel_visit_request(args.visit_id, args.clerk_id)


def cmd_feedback_submit(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.submit_feedback(
        visit_request_id=args.visit_id,
        clerk_id=args.clerk_id,
        rating=args.rating,
        experience=args.experience,
        suggestions=args.suggestions,
        purchase_interest=args.purchase_interest,
    )


def cmd_feedback_list(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_user_feedback(args.clerk_id)


def cmd_user_sync(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.create_or_update_user(
        clerk_id=args.clerk_id, email=args.email, name=args.name,
        phone=args.phone, role=args.role,
    )


def cmd_user_get(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_user_by_clerk_id(args.clerk_id)


def cmd_user_profile(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_user_profile(args.clerk_id)


def cmd_user_update(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    update = UserUpdate(name=args.name, email=args.email, phone=args.phone)
    return api.update_user_profile(args.clerk_id, update)


def cmd_user_role(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    if args.set:
        route = UserService.select_role(api, args.clerk_id, args.set)
        return {"role": args.set.upper(), "route": route}
    role = UserService.resolve_role(api, args.clerk_id)
    return {"role": role, "route": UserService.home_route(role)}


def cmd_lands_by_plot(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_lands_by_plot_id(args.plot_id)


def cmd_lands_owned(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    owned = api.get_owned_lands(args.clerk_id)
    if args.summary:
        return LandService.portfolio_summary(owned)
    return LandService.filter_owned(owned, args.status)


def cmd_land(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.get_land(args.land_id)


def cmd_buy(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    if args.name or args.email or args.phone:
        return LandService.request_purchase_as_guest(
            api,
            plot_id=args.land_id,
            name=args.name,
            email=args.email,
            phone=args.phone,
            message=args.message,
            clerk_id=args.clerk_id,
        )
    return LandService.request_purchase(
        api, land_id=args.land_id, user_id=args.clerk_id, message=args.message
    )


def cmd_sell(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    owned = {plot.id: plot for plot in api.get_owned_plots(args.user_id)}
    return LandService.request_sale(
        api,
        owned.get(args.plot_id),
        asking_price=args.asking_price,
        terms_accepted=args.accept_terms,
        reason=args.reason,
        urgency=args.urgency,
        agent_assistance=args.agent_assistance,
        documents=args.document,
        user_id=args.user_id,
    )


def cmd_leave(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    return api.submit_leave_request(
        clerk_id=args.clerk_id,
        start_date=args.start,
        end_date=args.end,
        reason=args.reason,
    )


def cmd_cameras_list(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    cameras = api.get_cameras(args.clerk_id)
    if args.with_stream:
        return [
            {**_jsonable(c), "streamUrl": LandService.camera_stream_url(c.ip_address)}
            for c in cameras
        ]
    return cameras


def cmd_cameras_create(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    camera = CameraCreate(land_id=args.land_id, ip_address=args.ip_address, label=args.label)
    return api.create_camera(camera, args.clerk_id)


def cmd_cameras_update(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    update = CameraUpdate(ip_address=args.ip_address, label=args.label)
    return api.update_camera(args.camera_id, update, args.clerk_id)


def cmd_cameras_delete(api: PlotMarketAPI, args: argparse.Namespace) -> Any:
    api.delete_camera(args.camera_id, args.clerk_id)
    return {"deleted": args.camera_id}


# ----------------------------------------------------------------------
# Parser
# ----------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="plot-market", description="Plot marketplace API client.")
    ap.add_argument("--api-url", default=settings.api_url, help="Base URL of the API (with /api prefix)")
    ap.add_argument("--api-key", default=settings.api_key or None, help="Bearer token for the API")
    ap.add_argument("--timeout", type=float, default=settings.timeout, help="Request timeout in seconds")
    ap.add_argument("--log-level", default=settings.log_level, help="Logging level, e.g. DEBUG")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("projects", help="List projects")
    p.add_argument("--search", default="", help="Match name, description, city or state")
    p.add_argument("--city", default=None, help="Restrict to a city or state")
    p.set_defaults(func=cmd_projects)

    p = sub.add_parser("plots", help="List plots of one project, or of all projects")
    p.add_argument("--project", help="Project ID")
    p.add_argument("--search", default="", help="Match title or location")
    p.add_argument("--pretty-price", action="store_true", help="Show prices in Cr/Lac")
    p.set_defaults(func=cmd_plots)

    p = sub.add_parser("plot", help="Show one plot")
    p.add_argument("plot_id")
    p.set_defaults(func=cmd_plot)

    p = sub.add_parser("owned-plots", help="Plots owned by a user")
    p.add_argument("user_id")
    p.set_defaults(func=cmd_owned_plots)

    p = sub.add_parser("book-visit", help="Book a site visit")
    p.add_argument("--plot", required=True, help="Plot ID")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--phone", required=True)
    p.add_argument("--date", required=True, type=date.fromisoformat, help="YYYY-MM-DD")
    p.add_argument("--time", required=True, help='Time slot, e.g. "10:30 AM"')
    p.add_argument("--clerk-id", help="Identity provider user ID, if signed in")
    p.set_defaults(func=cmd_book_visit)

    p = sub.add_parser("bookings", help="Visit requests of a user")
    p.add_argument("--clerk-id", required=True)
    p.set_defaults(func=cmd_bookings)

    p = sub.add_parser("assigned", help="Visit requests assigned to a manager")
    p.add_argument("--manager-id", required=True)
    p.set_defaults(func=cmd_assigned)

    p = sub.add_parser("cancel-visit", help="Cancel a pending visit request")
    p.add_argument("visit_id")
    p.add_argument("--clerk-id", required=True)
    p.set_defaults(func=cmd_cancel_visit)

    feedback = sub.add_parser("feedback", help="Visit feedback").add_subparsers(dest="action", required=True)
    p = feedback.add_parser("submit")
    p.add_argument("visit_id")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--rating", required=True, type=int, choices=range(1, 6))
    p.add_argument("--experience", required=True)
    p.add_argument("--suggestions", required=True)
    p.add_argument("--purchase-interest", type=_parse_bool, default=None, help="yes, no or unsure")
    p.set_defaults(func=cmd_feedback_submit)
    p = feedback.add_parser("list")
    p.add_argument("--clerk-id", required=True)
    p.set_defaults(func=cmd_feedback_list)

    user = sub.add_parser("user", help="User accounts").add_subparsers(dest="action", required=True)
    p = user.add_parser("sync", help="Create or update a user")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--name", required=True)
    p.add_argument("--phone")
    p.add_argument("--role", choices=ROLES)
    p.set_defaults(func=cmd_user_sync)
    p = user.add_parser("get")
    p.add_argument("--clerk-id", required=True)
    p.set_defaults(func=cmd_user_get)
    p = user.add_parser("profile")
    p.add_argument("--clerk-id", required=True)
    p.set_defaults(func=cmd_user_profile)
    p = user.add_parser("update")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--name")
    p.add_argument("--email")
    p.add_argument("--phone")
    p.set_defaults(func=cmd_user_update)
    p = user.add_parser("role", help="Show or set the role of a user")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--set", choices=ROLES)
    p.set_defaults(func=cmd_user_role)

    lands = sub.add_parser("lands", help="Land ownership").add_subparsers(dest="action", required=True)
    p = lands.add_parser("by-plot")
    p.add_argument("plot_id")
    p.set_defaults(func=cmd_lands_by_plot)
    p = lands.add_parser("owned")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--status", default="ALL", help="ALL, AVAILABLE, ADVANCE or SOLD")
    p.add_argument("--summary", action="store_true", help="Print portfolio totals only")
    p.set_defaults(func=cmd_lands_owned)
    p = lands.add_parser("show")
    p.add_argument("land_id")
    p.set_defaults(func=cmd_land)

    p = sub.add_parser("buy", help="Request to buy land")
    p.add_argument("land_id")
    p.add_argument("--clerk-id", help="Signed-in user ID")
    p.add_argument("--message", default="I would like to buy this property")
    p.add_argument("--name", help="Guest contact name")
    p.add_argument("--email", help="Guest contact email")
    p.add_argument("--phone", help="Guest contact phone")
    p.set_defaults(func=cmd_buy)

    p = sub.add_parser("sell", help="Request to sell an owned plot")
    p.add_argument("plot_id")
    p.add_argument("--user-id", required=True)
    p.add_argument("--asking-price", help="Defaults to the plot's market value")
    p.add_argument("--reason", default="")
    p.add_argument("--urgency", default="NORMAL", choices=("LOW", "NORMAL", "HIGH"))
    p.add_argument("--agent-assistance", action="store_true")
    p.add_argument("--document", action="append", default=[], help="Document URL; repeatable")
    p.add_argument("--accept-terms", action="store_true")
    p.set_defaults(func=cmd_sell)

    p = sub.add_parser("leave", help="Submit a manager leave request")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--start", required=True, type=date.fromisoformat, help="YYYY-MM-DD")
    p.add_argument("--end", required=True, type=date.fromisoformat, help="YYYY-MM-DD")
    p.add_argument("--reason", required=True)
    p.set_defaults(func=cmd_leave)

    cams = sub.add_parser("cameras", help="Site cameras").add_subparsers(dest="action", required=True)
    p = cams.add_parser("list")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--with-stream", action="store_true", help="Include stream URLs")
    p.set_defaults(func=cmd_cameras_list)
    p = cams.add_parser("create")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--land-id", required=True)
    p.add_argument("--ip-address", required=True)
    p.add_argument("--label", required=True)
    p.set_defaults(func=cmd_cameras_create)
    p = cams.add_parser("update")
    p.add_argument("camera_id")
    p.add_argument("--clerk-id", required=True)
    p.add_argument("--ip-address")
    p.add_argument("--label")
    p.set_defaults(func=cmd_cameras_update)
    p = cams.add_parser("delete")
    p.add_argument("camera_id")
    p.add_argument("--clerk-id", required=True)
    p.set_defaults(func=cmd_cameras_delete)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    api = PlotMarketAPI(base_url=args.api_url, api_key=args.api_key, timeout=args.timeout)
    handler: Handler = args.func
    try:
        result = handler(api, args)
    except MarketplaceError as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        return 1
    _print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
