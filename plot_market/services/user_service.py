"""
Role handling for signed-in users.

Every user has one of three roles.  The role decides which group of
screens the user lands on after signing in; users without a role are
sent to the role selection screen first.
"""

import logging
from typing import Optional

from ..client import PlotMarketAPI
from ..core.errors import ApiError, ValidationError
from ..schemas.user import ROLES, UserUpdate


logger = logging.getLogger(__name__)

HOME_ROUTES = {
    "GUEST": "/(guest)/(tabs)/Home",
    "CLIENT": "/(client)/(tabs)/Home",
    "MANAGER": "/(manager)/(tabs)/Home",
}
ROLE_SELECTION_ROUTE = "/(auth)/Role"


class UserService:
    """Service for role lookup, selection and routing."""

    @staticmethod
    def home_route(role: Optional[str]) -> str:
        """Home screen for ``role``; unknown or missing roles pick a role first."""
        if not role:
            return ROLE_SELECTION_ROUTE
        return HOME_ROUTES.get(role.upper(), ROLE_SELECTION_ROUTE)

    @classmethod
    def resolve_role(cls, api: PlotMarketAPI, clerk_id: str) -> Optional[str]:
        """Return the stored role of the user, or ``None`` if it has none yet."""
        user = api.get_user_by_clerk_id(clerk_id)
        if user is None or not user.role:
            logger.info("No role found for user %s", clerk_id)
            return None
        return user.role

    @classmethod
    def select_role(cls, api: PlotMarketAPI, clerk_id: str, role: str) -> str:
        """Store ``role`` for the user and return the route to continue to."""
        role = (role or "").upper()
        if role not in ROLES:
            raise ValidationError(f"Role must be one of {', '.join(ROLES)}")
        try:
            api.update_user_profile(clerk_id, UserUpdate(role=role))
        except ApiError as exc:
            logger.error("Error selecting role for %s: %s", clerk_id, exc)
            raise ApiError(
                "We couldn't update your role at this moment.", status_code=exc.status_code
            ) from exc
        logger.info("Role of %s set to %s", clerk_id, role)
        return cls.home_route(role)
