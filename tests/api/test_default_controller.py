import inspect
import logging

from fastapi.testclient import TestClient

from api.controllers.default import index
from core.config import ConfigManager, DictConfigLoader
from main import create_app

LOGIN_URL = "/webunit/default/login"


def _login(client: TestClient, password: str = "secret"):
    return client.post(LOGIN_URL, json={"password": password})


def test_guest_is_redirected_to_login(client):
    response = client.get("/webunit/default/index?suite=unit")
    assert response.status_code == 302
    assert response.headers["location"] == LOGIN_URL

    state = client.get(LOGIN_URL).json()
    assert state["data"]["is_guest"] is True
    assert state["data"]["password_required"] is True
    assert state["data"]["return_url"] == "/webunit/default/index?suite=unit"


def test_ajax_guest_gets_json_instead_of_redirect(client):
    response = client.get("/webunit/default/index", headers={"X-Requested-With": "XMLHttpRequest"})
    assert response.status_code == 403
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "AUTH_LOGIN_REQUIRED"
    assert body["error_details"]["login_url"] == LOGIN_URL


def test_login_returns_to_requested_page(client):
    client.get("/webunit/default/index")
    response = _login(client)
    assert response.status_code == 200
    assert response.json()["data"]["return_url"] == "/webunit/default/index"

    # return url is used once
    assert client.get(LOGIN_URL).json()["data"].get("return_url") is None


def test_login_defaults_to_index(client):
    response = _login(client)
    assert response.json()["data"]["return_url"] == "/webunit/default/index"


def test_wrong_password(client, caplog):
    with caplog.at_level(logging.WARNING, logger="webunit"):
        response = _login(client, "nope")
    assert response.status_code == 401
    assert response.json()["error_code"] == "AUTH_INVALID_CREDENTIALS"
    assert "Failed login attempt" in caplog.text
    assert client.get("/webunit/default/index").status_code == 302


def test_index_lists_suites_after_login(client):
    _login(client)
    response = client.get("/webunit/default/index")
    assert response.status_code == 200
    suites = {s["name"]: s for s in response.json()["data"]}
    assert suites["unit"]["files"] == ["models/user_test.py", "test_math.py"]
    assert suites["functional"]["files"] == []

    assert client.get("/webunit/").status_code == 200


def test_logout_requires_login_again(client):
    _login(client)
    assert client.get("/webunit/default/logout").status_code == 200
    assert client.get("/webunit/default/index").status_code == 302


def test_disallowed_ip_is_forbidden(make_client):
    client = make_client(ip_filters=["10.0.0.1"])
    response = client.get("/webunit/default/index")
    assert response.status_code == 403
    assert response.json()["error_code"] == "ACCESS_IP_FORBIDDEN"

    # login page is public but not exempt from the IP check
    assert client.get(LOGIN_URL).status_code == 403


def test_error_page_reachable_from_disallowed_ip(make_client):
    client = make_client(ip_filters=["10.0.0.1"])
    client.get("/webunit/default/index")

    response = client.get("/webunit/default/error")
    assert response.status_code == 200
    error = response.json()["data"]
    assert error["status_code"] == 403
    assert error["error_code"] == "ACCESS_IP_FORBIDDEN"
    assert error["path"] == "/webunit/default/index"


def test_error_page_without_error(client):
    response = client.get("/webunit/default/error")
    assert response.status_code == 200
    assert response.json()["message"] == "No error recorded."


def test_password_disabled_needs_no_login(make_client):
    client = make_client(password=False)
    assert client.get("/webunit/default/index").status_code == 200


def test_empty_filters_allow_everyone(make_client):
    client = make_client(ip_filters=[], password=False)
    assert client.get("/webunit/default/index").status_code == 200


def test_wildcard_filter(make_client):
    client = make_client(ip_filters=["test*"], password=False)
    assert client.get("/webunit/default/index").status_code == 200


def test_run_suite(client):
    _login(client)
    response = client.post("/webunit/default/run", json={"suite": "unit", "target": "test_math.py::test_add"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "passed"
    assert data["totals"]["tests"] == 1


def test_run_rejects_unknown_suite(client):
    _login(client)
    response = client.post("/webunit/default/run", json={"suite": "integration"})
    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "RUNNER_SUITE_NOT_FOUND"
    assert body["error_details"]["suite"] == "integration"


def test_run_rejects_escaping_target(client):
    _login(client)
    response = client.post("/webunit/default/run", json={"suite": "unit", "target": "../../x.py"})
    assert response.status_code == 400
    assert response.json()["error_code"] == "RUNNER_INVALID_TARGET"


def test_run_requires_login(client):
    response = client.post("/webunit/default/run", json={"suite": "unit"})
    assert response.status_code == 302


def test_custom_module_id(make_client):
    client = make_client(module_id="tests-ui", password=False)
    assert client.get("/tests-ui/default/index").status_code == 200
    assert client.get("/webunit/default/index").status_code == 404


def test_assets_are_served(client):
    response = client.get("/webunit/assets/webunit.css")
    assert response.status_code == 200
    assert "text/css" in response.headers["content-type"]


def test_create_app_from_config_manager(suite_root):
    manager = ConfigManager(loader=DictConfigLoader({
        "server": {},
        "webunit": {"password": False, "ip_filters": False, "runner": {"base_path": str(suite_root)}},
    }))
    client = TestClient(create_app(config_manager=manager))
    assert client.get("/webunit/default/index").status_code == 200


def test_runner_error_is_remembered_for_error_page(client):
    _login(client)
    client.post("/webunit/default/run", json={"suite": "integration"})

    error = client.get("/webunit/default/error").json()["data"]
    assert error["status_code"] == 404
    assert error["error_code"] == "RUNNER_SUITE_NOT_FOUND"
    assert error["path"] == "/webunit/default/run"


def test_index_runs_in_threadpool():
    # the suite listing walks the filesystem, so it must not block the event loop
    assert not inspect.iscoroutinefunction(index)
