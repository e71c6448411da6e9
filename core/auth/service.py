# webunit/core/auth/service.py
import logging
from typing import Any, Dict, Optional

from fastapi import Request as FastAPIRequest

from schemas.settings import WebunitSettings
from schemas.auth import AuthResult
from utils import security
from .guard import AccessDecision, AccessGuard, RouteIdentity

logger = logging.getLogger(f"webunit.{__name__}")


class AuthService:
    """
    Session-backed login state of the module.

    All session keys carry the module id as prefix, so the module never
    clashes with session state of the application hosting it.
    """
    def __init__(self, settings: WebunitSettings, guard: AccessGuard):
        self.settings = settings
        self.guard = guard
        self._prefix = settings.session_prefix
        # only the hash stays in memory
        self._password_hash: Optional[str] = (
            security.get_password_hash(settings.password) if settings.password_enabled else None
        )

    def _key(self, name: str) -> str:
        return f"{self._prefix}.{name}"

    def get_client_ip(self, request: FastAPIRequest) -> str:
        # an unknown peer matches no filter except "*"
        return request.client.host if request.client else ""

    def is_guest(self, request: FastAPIRequest) -> bool:
        return request.session.get(self._key("authenticated")) is not True

    def authorize_request(self, request: FastAPIRequest, route: RouteIdentity) -> AccessDecision:
        return self.guard.check(route, self.get_client_ip(request), self.is_guest(request))

    def login(self, request: FastAPIRequest, password: str) -> AuthResult:
        client_ip = self.get_client_ip(request)
        if self._password_hash is not None and not security.verify_password(password, self._password_hash):
            logger.warning(f"Failed login attempt from IP: {client_ip}")
            return AuthResult(error_message="Incorrect password.", status_code=401)

        request.session[self._key("authenticated")] = True
        logger.info(f"Login successful from IP: {client_ip}")
        return AuthResult(is_authenticated=True, return_url=self.pop_return_url(request))

    def logout(self, request: FastAPIRequest) -> None:
        request.session.pop(self._key("authenticated"), None)
        logger.info(f"Logout from IP: {self.get_client_ip(request)}")

    def remember_return_url(self, request: FastAPIRequest, url: str) -> None:
        request.session[self._key("return_url")] = url

    def peek_return_url(self, request: FastAPIRequest) -> Optional[str]:
        return request.session.get(self._key("return_url"))

    def pop_return_url(self, request: FastAPIRequest) -> Optional[str]:
        return request.session.pop(self._key("return_url"), None)

    def remember_error(self, request: FastAPIRequest, error: Dict[str, Any]) -> None:
        # exception handlers may run outside SessionMiddleware's scope
        if "session" in request.scope:
            request.session[self._key("error")] = error

    def last_error(self, request: FastAPIRequest) -> Optional[Dict[str, Any]]:
        return request.session.get(self._key("error"))
