# webunit/core/auth/guard.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterable, Sequence, Union

from schemas.settings import PASSWORD_DISABLED, WebunitSettings
from .ip_filter import is_allowed

logger = logging.getLogger(f"webunit.{__name__}")


class AccessDecision(str, Enum):
    ALLOWED = "allowed"
    DENIED_FORBIDDEN = "denied_forbidden"
    DENIED_LOGIN_REQUIRED = "denied_login_required"


@dataclass(frozen=True)
class RouteIdentity:
    """`<controller>/<action>` key naming the action being dispatched."""
    controller: str
    action: str

    def __post_init__(self):
        for name, segment in (("controller", self.controller), ("action", self.action)):
            if not isinstance(segment, str) or not segment:
                raise ValueError(f"Route {name} must be a non-empty string, got {segment!r}")
            if "/" in segment:
                raise ValueError(f"Route {name} must not contain '/', got {segment!r}")

    @classmethod
    def parse(cls, route: str) -> "RouteIdentity":
        controller, sep, action = route.partition("/")
        if not sep:
            raise ValueError(f"Route must look like 'controller/action', got {route!r}")
        return cls(controller, action)

    def __str__(self) -> str:
        return f"{self.controller}/{self.action}"


LOGIN_ROUTE = RouteIdentity("default", "login")
ERROR_ROUTE = RouteIdentity("default", "error")

# routes reachable without logging in
PUBLIC_ROUTES = frozenset({LOGIN_ROUTE, ERROR_ROUTE})

RouteLike = Union[RouteIdentity, str]


def authorize(route: RouteLike,
              address: str,
              is_guest: bool,
              password: Union[str, bool],
              filters: Sequence[str],
              public_routes: Iterable[RouteLike] = PUBLIC_ROUTES) -> AccessDecision:
    """
    Decides whether an action may run for the given client.

    The IP check comes first. A rejected address gets DENIED_FORBIDDEN on
    every route except the error route, which stays reachable so errors can
    be rendered. Guests are then sent to the login page for anything outside
    `public_routes`, unless the password is disabled.

    Routes are compared by their `controller/action` key, so RouteIdentity
    objects and plain strings can be mixed. A malformed string is not
    rejected here; it simply matches neither the error route nor a public one.
    """
    route_key = str(route)
    public_keys = {str(r) for r in public_routes}

    allowed = is_allowed(address, filters)
    if not allowed and route_key != str(ERROR_ROUTE):
        return AccessDecision.DENIED_FORBIDDEN

    if password is not PASSWORD_DISABLED and is_guest and route_key not in public_keys:
        return AccessDecision.DENIED_LOGIN_REQUIRED

    return AccessDecision.ALLOWED


class AccessGuard:
    """
    Runs `authorize` with the password and filters from the module settings.
    """
    def __init__(self, settings: WebunitSettings, public_routes: Iterable[RouteLike] = PUBLIC_ROUTES):
        self._settings = settings
        self._public_routes = frozenset(
            r if isinstance(r, RouteIdentity) else RouteIdentity.parse(r) for r in public_routes
        )

    @property
    def public_routes(self) -> AbstractSet[RouteIdentity]:
        return self._public_routes

    def check(self, route: RouteLike, address: str, is_guest: bool) -> AccessDecision:
        decision = authorize(
            route,
            address,
            is_guest,
            self._settings.password,
            self._settings.ip_filters,
            self._public_routes,
        )
        if decision is AccessDecision.DENIED_FORBIDDEN:
            logger.warning(f"Access to '{route}' denied for IP: {address}")
        elif decision is AccessDecision.DENIED_LOGIN_REQUIRED:
            logger.info(f"Login required for '{route}' from IP: {address}")
        return decision
