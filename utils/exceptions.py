from typing import Optional, Dict, Any
from fastapi import HTTPException

from .errors import ErrorDetail

class APIError(HTTPException):
    def __init__(
        self,
        error: ErrorDetail,
        details: Optional[Dict[str, Any]] = None,
        override_message: Optional[str] = None,
    ):
        self.error_code = error.code
        self.details = details or {}
        #override message if provided
        message = override_message or error.message
        super().__init__(status_code=error.status_code, detail=message)


class LoginRequired(Exception):
    """
    Raised by the access guard when a guest session reaches a protected route.
    The exception handler turns it into a redirect to the login action.
    """
    def __init__(self, login_url: str, return_url: str):
        self.login_url = login_url
        self.return_url = return_url
        super().__init__(f"Login required for {return_url}")
