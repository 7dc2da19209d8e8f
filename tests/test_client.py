"""带令牌请求的约定：认证头、状态码、错误分类。"""
import tempfile
from pathlib import Path

import pytest
import requests

from auditoria.api.client import ApiClient, UnauthorizedPolicy, decode_list
from auditoria.errors import (
    DecodeError,
    InvalidCredentials,
    InvalidInput,
    InvalidURL,
    ServerError,
    TransportError,
    Unauthenticated,
)
from auditoria.files.models import FileRecord


def test_no_token_fails_without_network(client: ApiClient, http) -> None:
    with pytest.raises(Unauthenticated):
        client.get_json("/api/files/user")
    with pytest.raises(Unauthenticated):
        client.delete("/api/files/1")
    with pytest.raises(Unauthenticated):
        client.post_json("/api/audit-record", {"fileId": 1})
    assert http.calls == []


def test_bearer_header_is_exact(client: ApiClient, http) -> None:
    client.session.login("abc123")
    http.add("GET", "/api/files/user", json_body=[])
    client.get_json("/api/files/user")
    assert http.calls[0].headers["Authorization"] == "Bearer abc123"


def test_unauthenticated_endpoint_sends_no_header(client: ApiClient, http) -> None:
    http.add("POST", "/api/auth/login", json_body={"token": "x"})
    client.post_json("/api/auth/login", {"email": "a", "password": "b"}, auth=False)
    assert "Authorization" not in http.calls[0].headers


def test_401_is_invalid_credentials_and_keeps_session_by_default(client: ApiClient, http) -> None:
    client.session.login("stale")
    http.add("GET", "/api/files/user", status=401, json_body={"message": "Unauthorized"})
    with pytest.raises(InvalidCredentials) as exc:
        client.get_json("/api/files/user")
    client.handle_error(exc.value)
    assert exc.value.status_code == 401
    assert exc.value.token_rejected
    assert client.session.current_token() == "stale"


def test_401_with_logout_policy_clears_session(session, http, make_client) -> None:
    client = make_client(UnauthorizedPolicy.LOGOUT)
    session.login("stale")
    http.add("GET", "/api/files/user", status=401)
    with pytest.raises(InvalidCredentials) as exc:
        client.get_json("/api/files/user")
    client.handle_error(exc.value)
    assert session.current_token() is None


def test_failed_login_never_logs_out(session, http, make_client) -> None:
    client = make_client("logout")
    session.login("existing")
    http.add("POST", "/api/auth/login", status=401)
    with pytest.raises(InvalidCredentials) as exc:
        client.post_json("/api/auth/login", {}, auth=False)
    client.handle_error(exc.value)
    assert session.current_token() == "existing"


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"message": "El archivo no existe"}, "El archivo no existe"),
        ({"message": ["email must be an email", "password too short"]}, "email must be an email\npassword too short"),
        ({"error": "Bad Request"}, "Bad Request"),
        ({"detail": "ignored"}, None),
    ],
)
def test_server_error_carries_status_and_message(client: ApiClient, http, body, expected) -> None:
    client.session.login("t")
    http.add("DELETE", "/api/files/9", status=400, json_body=body)
    with pytest.raises(ServerError) as exc:
        client.delete("/api/files/9")
    assert exc.value.status_code == 400
    assert exc.value.server_message == expected
    assert "400" in exc.value.user_message()


def test_non_json_error_body(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("GET", "/api/ai/1", status=500, content=b"<html>oops</html>")
    with pytest.raises(ServerError) as exc:
        client.get_json("/api/ai/1")
    assert exc.value.status_code == 500
    assert exc.value.server_message is None


@pytest.mark.parametrize("error", [requests.ConnectionError("offline"), requests.Timeout("slow")])
def test_transport_failures_are_distinct(client: ApiClient, http, error) -> None:
    client.session.login("t")
    http.fail("GET", "/api/files/user", error)
    with pytest.raises(TransportError) as exc:
        client.get_json("/api/files/user")
    assert not isinstance(exc.value, ServerError)
    assert "重试" in exc.value.user_message()


def test_bad_json_is_decode_error(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("GET", "/api/files/user", content=b"not json")
    with pytest.raises(DecodeError) as exc:
        client.get_json("/api/files/user")
    assert "not json" not in exc.value.user_message()


def test_shape_mismatch_is_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_list(FileRecord, [{"id": 1, "filename": "a.csv"}])
    with pytest.raises(DecodeError):
        decode_list(FileRecord, {"id": 1})


def test_invalid_base_url(session, make_client) -> None:
    session.login("t")
    client = make_client(base_url="localhost:3000")
    with pytest.raises(InvalidURL):
        client.get_json("/api/files/user")


def test_empty_success_body_is_none(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("POST", "/api/audit-record", status=204)
    assert client.post_json("/api/audit-record", {"fileId": 1}) is None


def test_upload_uses_long_timeout_and_file_field(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("POST", "/api/processing-pipeline-module/data", status=201, json_body={"ok": True})
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "ventas.csv"
        path.write_text("fecha,ventas\n2024-01-01,10\n", encoding="utf-8")
        client.upload("/api/processing-pipeline-module/data", path)
    call = http.calls[0]
    assert call.kwargs["timeout"] == client.upload_timeout == 120
    assert call.kwargs["files"]["file"][0] == "ventas.csv"


def test_post_and_upload_accept_plain_text_success(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("POST", "/api/audit-record", status=200, content=b"OK")
    http.add("POST", "/api/processing-pipeline-module/data", status=201, content=b"Archivo recibido")
    assert client.post("/api/audit-record", {"fileId": 1}) is None
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "ventas.csv"
        path.write_text("fecha,ventas\n", encoding="utf-8")
        assert client.upload("/api/processing-pipeline-module/data", path) is None
    assert len(http.calls) == 2


def test_upload_unreadable_file_is_local_error(client: ApiClient, http) -> None:
    client.session.login("t")
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(InvalidInput):
            client.upload("/api/processing-pipeline-module/data", Path(tmp))
    assert http.calls == []
