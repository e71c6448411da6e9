from fastapi import status

class ErrorDetail:
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message

class ErrorCode:
    """System error code and message definitions"""

    # Common errors
    COMMON_INTERNAL_ERROR = ErrorDetail(status.HTTP_500_INTERNAL_SERVER_ERROR, "COMMON_INTERNAL_ERROR", "An unexpected internal server error occurred.")
    COMMON_VALIDATION_ERROR = ErrorDetail(status.HTTP_400_BAD_REQUEST, "COMMON_VALIDATION_ERROR", "Data validation failed")
    COMMON_SERVICE_UNAVAILABLE = ErrorDetail(status.HTTP_503_SERVICE_UNAVAILABLE, "COMMON_SERVICE_UNAVAILABLE", "Service unavailable")

    # Access guard errors
    ACCESS_IP_FORBIDDEN = ErrorDetail(status.HTTP_403_FORBIDDEN, "ACCESS_IP_FORBIDDEN", "You are not allowed to access this page.")
    AUTH_LOGIN_REQUIRED = ErrorDetail(status.HTTP_403_FORBIDDEN, "AUTH_LOGIN_REQUIRED", "Login Required")
    AUTH_INVALID_CREDENTIALS = ErrorDetail(status.HTTP_401_UNAUTHORIZED, "AUTH_INVALID_CREDENTIALS", "Incorrect password.")

    # Test runner errors
    RUNNER_SUITE_NOT_FOUND = ErrorDetail(status.HTTP_404_NOT_FOUND, "RUNNER_SUITE_NOT_FOUND", "Test suite not found")
    RUNNER_INVALID_TARGET = ErrorDetail(status.HTTP_400_BAD_REQUEST, "RUNNER_INVALID_TARGET", "Test target is outside the suite directory")
    RUNNER_TIMEOUT = ErrorDetail(status.HTTP_504_GATEWAY_TIMEOUT, "RUNNER_TIMEOUT", "Test run timed out")
    RUNNER_LAUNCH_FAILED = ErrorDetail(status.HTTP_500_INTERNAL_SERVER_ERROR, "RUNNER_LAUNCH_FAILED", "Could not start the test runner")
