import pytest
from typing import Any, Callable, Dict

from fastapi.testclient import TestClient

from main import create_app
from schemas.settings import WebunitSettings

# Starlette's TestClient reports this as the client address.
TEST_CLIENT_HOST = "testclient"


@pytest.fixture
def suite_root(tmp_path):
    """A project with a passing and a failing unit test and an empty functional suite."""
    unit = tmp_path / "tests" / "unit"
    unit.mkdir(parents=True)
    (unit / "test_math.py").write_text(
        "def test_add():\n"
        "    assert 1 + 1 == 2\n"
        "\n"
        "def test_broken():\n"
        "    assert 1 + 1 == 3\n",
        encoding="utf-8",
    )
    (unit / "helpers.py").write_text("VALUE = 1\n", encoding="utf-8")
    nested = unit / "models"
    nested.mkdir()
    (nested / "user_test.py").write_text("def test_user():\n    pass\n", encoding="utf-8")
    (tmp_path / "tests" / "functional").mkdir()
    return tmp_path


@pytest.fixture
def make_settings(suite_root) -> Callable[..., WebunitSettings]:
    def _make(**overrides: Any) -> WebunitSettings:
        data: Dict[str, Any] = {
            "password": "secret",
            "ip_filters": [TEST_CLIENT_HOST],
            "session_secret": "test-session-secret",
            "runner": {"base_path": str(suite_root), "timeout_seconds": 120},
        }
        data.update(overrides)
        return WebunitSettings(**data)
    return _make


@pytest.fixture
def make_client(make_settings) -> Callable[..., TestClient]:
    def _make(**overrides: Any) -> TestClient:
        app = create_app(settings=make_settings(**overrides))
        return TestClient(app, follow_redirects=False)
    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
