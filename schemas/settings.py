# webunit/schemas/settings.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Literal, Optional, Tuple, Union

# `password: false` in the config file disables password gating.
PASSWORD_DISABLED = False

DEFAULT_IP_FILTERS = ("127.0.0.1", "::1")


class RunnerSettings(BaseModel):
    """
    Options for the pytest subprocess that executes the suites.
    """
    model_config = ConfigDict(frozen=True)

    use_built_in_runner: bool = Field(True, description="Run pytest with the service interpreter instead of the `pytest` found on PATH.")
    base_path: str = Field(".", description="Working directory for test runs. Suite paths are resolved against it.")
    timeout_seconds: float = Field(600.0, gt=0, description="Hard limit for a single test run.")
    environment: Dict[str, str] = Field(default_factory=dict, description="Environment overrides applied to every test run.")

    @field_validator("environment", mode="before")
    @classmethod
    def _stringify_environment(cls, value):
        if value is None:
            return {}
        return {str(k): str(v) for k, v in dict(value).items()}


class WebunitSettings(BaseModel):
    """
    Immutable module settings, built once at startup from the `webunit` config section.
    """
    model_config = ConfigDict(frozen=True)

    module_id: str = Field("webunit", min_length=1, description="URL prefix and session key prefix of the module.")
    password: Union[Literal[False], str] = Field(..., description="Password protecting the module, or false to disable the check.")
    ip_filters: Tuple[str, ...] = Field(DEFAULT_IP_FILTERS, description="Allowed client addresses. Empty allows everyone.")
    path_unit_tests: str = Field("tests/unit", description="Directory holding the unit test suite.")
    path_web_tests: str = Field("tests/functional", description="Directory holding the functional test suite.")
    session_secret: Optional[str] = Field(None, description="Key used to sign the session cookie.")
    runner: RunnerSettings = Field(default_factory=RunnerSettings)

    @field_validator("ip_filters", mode="before")
    @classmethod
    def _normalize_ip_filters(cls, value):
        # false/null mean "no filtering", same as an empty list
        if value is None or value is False:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(str(item) for item in value)

    @field_validator("module_id")
    @classmethod
    def _check_module_id(cls, value: str) -> str:
        if "/" in value:
            raise ValueError("module_id must not contain '/'")
        return value

    @property
    def password_enabled(self) -> bool:
        return self.password is not PASSWORD_DISABLED

    @property
    def session_prefix(self) -> str:
        return self.module_id
