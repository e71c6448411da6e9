# webunit/core/auth/__init__.py
from .ip_filter import matches_filter, is_allowed
from .guard import AccessDecision, AccessGuard, RouteIdentity, PUBLIC_ROUTES, ERROR_ROUTE, LOGIN_ROUTE, authorize
from .service import AuthService

__all__ = [
    "matches_filter",
    "is_allowed",
    "AccessDecision",
    "AccessGuard",
    "RouteIdentity",
    "PUBLIC_ROUTES",
    "ERROR_ROUTE",
    "LOGIN_ROUTE",
    "authorize",
    "AuthService",
]
