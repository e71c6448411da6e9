# webunit/api/dependencies.py
from fastapi import Request, Depends

from core.auth.guard import AccessDecision, RouteIdentity
from core.auth.service import AuthService
from core.runner.service import TestRunnerService
from schemas.settings import WebunitSettings
from utils.errors import ErrorCode
from utils.exceptions import APIError, LoginRequired

# --- Service Getters ---
def get_auth_svc_dependency(request: Request) -> AuthService:
    if not hasattr(request.app.state, 'auth_service'):
        raise APIError(error=ErrorCode.COMMON_SERVICE_UNAVAILABLE, override_message="Auth service not available.")
    return request.app.state.auth_service

def get_runner_svc_dependency(request: Request) -> TestRunnerService:
    if not hasattr(request.app.state, 'runner_service'):
        raise APIError(error=ErrorCode.COMMON_SERVICE_UNAVAILABLE, override_message="Test runner not available.")
    return request.app.state.runner_service


def login_url(settings: WebunitSettings) -> str:
    return f"/{settings.module_id}/default/login"


# --- Access guard ---

def require_access(controller: str, action: str):
    """
    Dependency factory running the access guard before an action.
    Every route of the module declares its identity through this.
    """
    route = RouteIdentity(controller, action)

    async def access_checker(
        request: Request,
        auth_service: AuthService = Depends(get_auth_svc_dependency),
    ) -> RouteIdentity:
        decision = auth_service.authorize_request(request, route)
        if decision is AccessDecision.DENIED_FORBIDDEN:
            raise APIError(error=ErrorCode.ACCESS_IP_FORBIDDEN, details={"route": str(route)})
        if decision is AccessDecision.DENIED_LOGIN_REQUIRED:
            # path only, so the post-login redirect never leaves this host
            return_url = request.url.path + (f"?{request.url.query}" if request.url.query else "")
            raise LoginRequired(login_url=login_url(auth_service.settings), return_url=return_url)
        return route
    return access_checker
