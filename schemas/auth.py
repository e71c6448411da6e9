# webunit/schemas/auth.py
from pydantic import BaseModel, Field
from typing import Optional


class AuthResult(BaseModel):
    """
    Represents the result of a login attempt.
    """
    is_authenticated: bool = Field(False, description="True if authentication was successful.")
    return_url: Optional[str] = Field(None, description="URL the user was heading to before being sent to login.")
    error_message: Optional[str] = Field(None, description="Error message if authentication failed.")
    status_code: Optional[int] = Field(None, description="HTTP status code associated with the auth result (e.g., 401, 403).")


class LoginRequest(BaseModel):
    password: str


class LoginResponse(BaseModel):
    return_url: str = Field(..., description="Where the client should continue after logging in.")


class LoginState(BaseModel):
    is_guest: bool = Field(..., description="True while the session is not logged in.")
    password_required: bool = Field(..., description="False when the module runs without a password.")
    return_url: Optional[str] = Field(None, description="Pending post-login redirect, if any.")


class ErrorInfo(BaseModel):
    status_code: int
    error_code: Optional[str] = None
    message: Optional[str] = None
    path: Optional[str] = None
