# webunit/api/controllers/default.py
import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Request

from core.auth.service import AuthService
from core.runner.service import TestRunnerService
from schemas.auth import ErrorInfo, LoginRequest, LoginResponse, LoginState
from schemas.common import UnifiedAPIResponse
from schemas.runner import RunRequest, TestRunResult, TestSuiteInfo
from utils.errors import ErrorCode
from utils.exceptions import APIError
from api.dependencies import (
    get_auth_svc_dependency,
    get_runner_svc_dependency,
    require_access,
)

logger = logging.getLogger(f"webunit.{__name__}")
router = APIRouter()


def _index_url(auth_service: AuthService) -> str:
    return f"/{auth_service.settings.module_id}/default/index"


@router.get("/", response_model=UnifiedAPIResponse[List[TestSuiteInfo]], response_model_exclude_none=True, summary="Test Suites",
            dependencies=[Depends(require_access("default", "index"))])
@router.get("/default/index", response_model=UnifiedAPIResponse[List[TestSuiteInfo]], response_model_exclude_none=True, summary="Test Suites",
            dependencies=[Depends(require_access("default", "index"))])
def index(
    runner: TestRunnerService = Depends(get_runner_svc_dependency),
):
    """
    Lists the unit and functional suites with the test files they contain.
    """
    suites = runner.list_suites()
    return UnifiedAPIResponse(success=True, message="Test suites retrieved.", data=suites)


@router.post("/default/run", response_model=UnifiedAPIResponse[TestRunResult], response_model_exclude_none=True, summary="Run Tests",
             dependencies=[Depends(require_access("default", "run"))])
async def run_tests(
    run_request: RunRequest = Body(...),
    runner: TestRunnerService = Depends(get_runner_svc_dependency),
):
    result = await runner.run(run_request.suite, run_request.target)
    return UnifiedAPIResponse(
        success=True,
        message=f"Suite '{result.suite.value}' finished with status '{result.status.value}'.",
        data=result,
    )


@router.get("/default/login", response_model=UnifiedAPIResponse[LoginState], response_model_exclude_none=True, summary="Login State",
            dependencies=[Depends(require_access("default", "login"))])
async def login_state(
    request: Request,
    auth_service: AuthService = Depends(get_auth_svc_dependency),
):
    state = LoginState(
        is_guest=auth_service.is_guest(request),
        password_required=auth_service.settings.password_enabled,
        return_url=auth_service.peek_return_url(request),
    )
    return UnifiedAPIResponse(success=True, message="Enter the module password to continue.", data=state)


@router.post("/default/login", response_model=UnifiedAPIResponse[LoginResponse], response_model_exclude_none=True, summary="Login",
             dependencies=[Depends(require_access("default", "login"))])
async def login(
    request: Request,
    login_request: LoginRequest = Body(...),
    auth_service: AuthService = Depends(get_auth_svc_dependency),
):
    auth_result = auth_service.login(request, login_request.password)
    if not auth_result.is_authenticated:
        raise APIError(
            error=ErrorCode.AUTH_INVALID_CREDENTIALS,
            override_message=auth_result.error_message,
        )
    return UnifiedAPIResponse(
        success=True,
        message="Login successful.",
        data=LoginResponse(return_url=auth_result.return_url or _index_url(auth_service)),
    )


@router.get("/default/logout", response_model=UnifiedAPIResponse, response_model_exclude_none=True, summary="Logout",
            dependencies=[Depends(require_access("default", "logout"))])
async def logout(
    request: Request,
    auth_service: AuthService = Depends(get_auth_svc_dependency),
):
    auth_service.logout(request)
    return UnifiedAPIResponse(success=True, message="Logout successful.")


@router.get("/default/error", response_model=UnifiedAPIResponse[ErrorInfo], response_model_exclude_none=True, summary="Last Error",
            dependencies=[Depends(require_access("default", "error"))])
async def last_error(
    request: Request,
    auth_service: AuthService = Depends(get_auth_svc_dependency),
):
    error = auth_service.last_error(request)
    if not error:
        return UnifiedAPIResponse(success=True, message="No error recorded.")
    return UnifiedAPIResponse(success=True, message=error.get("message"), data=ErrorInfo(**error))
