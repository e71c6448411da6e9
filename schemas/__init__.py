# webunit/schemas/__init__.py
from .common import UnifiedAPIResponse
from .settings import WebunitSettings, RunnerSettings, PASSWORD_DISABLED, DEFAULT_IP_FILTERS
from .auth import AuthResult, LoginRequest, LoginResponse, LoginState, ErrorInfo
from .runner import (
    SuiteName,
    CaseOutcome,
    RunStatus,
    TestSuiteInfo,
    RunRequest,
    TestCaseResult,
    RunTotals,
    TestRunResult,
)
__all__ = [
    "UnifiedAPIResponse",
    "WebunitSettings",
    "RunnerSettings",
    "PASSWORD_DISABLED",
    "DEFAULT_IP_FILTERS",
    "AuthResult",
    "LoginRequest",
    "LoginResponse",
    "LoginState",
    "ErrorInfo",
    "SuiteName",
    "CaseOutcome",
    "RunStatus",
    "TestSuiteInfo",
    "RunRequest",
    "TestCaseResult",
    "RunTotals",
    "TestRunResult",
]
