# main.py
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.middleware.sessions import SessionMiddleware

from core.config import ConfigManager, get_config_manager
from core.auth.guard import AccessGuard
from core.auth.service import AuthService
from core.runner.service import TestRunnerService
from schemas.common import UnifiedAPIResponse
from schemas.settings import WebunitSettings
from utils.errors import ErrorCode
from utils.exceptions import APIError, LoginRequired
from utils.security import generate_session_secret
from api.controllers.default import router as default_router

logger = logging.getLogger(f"webunit.{__name__}")

ASSETS_DIR = Path(__file__).resolve().parent / "assets"

__version__ = "1.0.0"


def _error_response(request: Request, status_code: int, content: UnifiedAPIResponse) -> JSONResponse:
    # remembered for the default/error action
    auth_service: Optional[AuthService] = getattr(request.app.state, "auth_service", None)
    if auth_service is not None:
        auth_service.remember_error(request, {
            "status_code": status_code,
            "error_code": content.error_code,
            "message": content.message,
            "path": request.url.path,
        })
    return JSONResponse(status_code=status_code, content=content.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        auth_service: AuthService = request.app.state.auth_service
        if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
            return _error_response(request, ErrorCode.AUTH_LOGIN_REQUIRED.status_code, UnifiedAPIResponse(
                success=False,
                error_code=ErrorCode.AUTH_LOGIN_REQUIRED.code,
                message=ErrorCode.AUTH_LOGIN_REQUIRED.message,
                error_details={"login_url": exc.login_url},
            ))
        auth_service.remember_return_url(request, exc.return_url)
        return RedirectResponse(url=exc.login_url, status_code=302)

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return _error_response(request, exc.status_code, UnifiedAPIResponse(
            success=False,
            error_code=exc.error_code,
            message=exc.detail,
            error_details=exc.details or None,
        ))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(request, exc.status_code, UnifiedAPIResponse(
            success=False,
            error_code=f"HTTP_{exc.status_code}",
            message=exc.detail,
        ))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            loc = error["loc"]
            field_name = ".".join(str(item) for item in loc if item != "body")
            errors.append({
                "field": field_name,
                "message": error["msg"],
                "error_type": error["type"]
            })
        return _error_response(request, 422, UnifiedAPIResponse(
            success=False,
            error_code=ErrorCode.COMMON_VALIDATION_ERROR.code,
            message=ErrorCode.COMMON_VALIDATION_ERROR.message,
            error_details={"errors": errors},
        ))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception for request {request.url}: {exc}", exc_info=True)
        # runs in ServerErrorMiddleware, outside SessionMiddleware: not remembered
        return JSONResponse(
            status_code=500,
            content=UnifiedAPIResponse(
                success=False,
                error_code=ErrorCode.COMMON_INTERNAL_ERROR.code,
                message=ErrorCode.COMMON_INTERNAL_ERROR.message,
            ).model_dump(exclude_none=True)
        )


def create_app(config_manager: Optional[ConfigManager] = None,
               settings: Optional[WebunitSettings] = None) -> FastAPI:
    """
    Builds the module application.

    Settings are resolved once here and shared by every service; pass
    `settings` directly to skip the configuration file.
    """
    if settings is None:
        config_manager = config_manager or get_config_manager()
        settings = config_manager.build_settings()

    app = FastAPI(
        title="Webunit",
        description="Run the project's unit and functional test suites from the browser.",
        version=__version__,
    )

    # 1. Access guard and login state
    guard = AccessGuard(settings)
    app.state.settings = settings
    app.state.auth_service = AuthService(settings=settings, guard=guard)

    # 2. Test runner
    app.state.runner_service = TestRunnerService(settings=settings)

    if not settings.ip_filters:
        logger.warning("IP filtering is disabled; every client address may reach the module.")
    if not settings.password_enabled:
        logger.warning("Password protection is disabled for the module.")

    # 3. Session
    session_secret = settings.session_secret
    if not session_secret:
        logger.warning("No webunit.session_secret configured; sessions will not survive a restart.")
        session_secret = generate_session_secret()
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        session_cookie=f"{settings.module_id}_session",
        same_site="lax",
    )

    register_exception_handlers(app)

    prefix = f"/{settings.module_id}"
    app.mount(f"{prefix}/assets", StaticFiles(directory=ASSETS_DIR), name="assets")
    app.include_router(default_router, prefix=prefix, tags=["Webunit"])

    logger.info(f"Webunit module mounted at {prefix}/")
    return app

# Run with: python run.py   (or: uvicorn --factory main:create_app)
