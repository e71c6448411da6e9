import pytest

import core.auth
from utils.errors import ErrorCode
from utils.exceptions import APIError


@pytest.mark.parametrize("error", [
    ErrorCode.RUNNER_SUITE_NOT_FOUND,
    ErrorCode.ACCESS_IP_FORBIDDEN,
    ErrorCode.COMMON_SERVICE_UNAVAILABLE,
])
def test_api_error_status_comes_from_error_code(error):
    exc = APIError(error=error, details={"key": "value"})
    assert exc.status_code == error.status_code
    assert exc.error_code == error.code
    assert exc.detail == error.message
    assert exc.details == {"key": "value"}


def test_api_error_override_message():
    exc = APIError(error=ErrorCode.COMMON_SERVICE_UNAVAILABLE, override_message="Test runner not available.")
    assert exc.status_code == 503
    assert exc.detail == "Test runner not available."


def test_api_error_rejects_status_override():
    with pytest.raises(TypeError):
        APIError(error=ErrorCode.RUNNER_TIMEOUT, status_code=500)


def test_auth_package_exports_resolve():
    for name in core.auth.__all__:
        assert hasattr(core.auth, name)
    assert "IPFilter" not in core.auth.__all__
