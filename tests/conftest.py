"""测试公用：假 HTTP 传输、会话与客户端。"""
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
import requests
from PyQt6.QtCore import QCoreApplication

from auditoria.api.client import ApiClient, UnauthorizedPolicy
from auditoria.auth.credentials import MemoryCredentialStore
from auditoria.auth.session import SessionStore

BASE_URL = "http://test.local"


def make_response(status: int = 200, json_body: Any = None, content: Optional[bytes] = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.encoding = "utf-8"
    if json_body is not None:
        r._content = json.dumps(json_body).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = content or b""
    return r


@dataclass
class Call:
    method: str
    path: str
    kwargs: Dict[str, Any] = field(default_factory=dict)

    @property
    def headers(self) -> Dict[str, str]:
        return self.kwargs.get("headers", {})

    @property
    def json(self) -> Any:
        return self.kwargs.get("json")


class FakeHttp:
    """按 (method, path) 返回预设响应，并记录每次请求。"""

    def __init__(self):
        self.calls: List[Call] = []
        self.routes: Dict[Tuple[str, str], Any] = {}

    def add(self, method: str, path: str, status: int = 200, json_body: Any = None, content: Optional[bytes] = None) -> None:
        self.routes[(method, path)] = make_response(status, json_body, content)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        assert url.startswith(BASE_URL)
        path = url[len(BASE_URL):]
        self.calls.append(Call(method, path, kwargs))
        if (method, path) not in self.routes:
            raise AssertionError(f"未预期的请求: {method} {path}")
        result = self.routes[(method, path)]
        if isinstance(result, Exception):
            raise result
        return result

    def paths(self) -> List[str]:
        return [f"{c.method} {c.path}" for c in self.calls]


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def session(store: MemoryCredentialStore) -> SessionStore:
    return SessionStore(store)


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def client(session: SessionStore, http: FakeHttp) -> ApiClient:
    return ApiClient(session, base_url=BASE_URL, http=http)


@pytest.fixture
def make_client(session: SessionStore, http: FakeHttp) -> Callable[..., ApiClient]:
    """按需指定 401 策略或接口地址的客户端。"""
    def build(unauthorized_policy=UnauthorizedPolicy.KEEP_SESSION, base_url: str = BASE_URL) -> ApiClient:
        return ApiClient(session, base_url=base_url, http=http, unauthorized_policy=unauthorized_policy)
    return build


def make_file_json(file_id: int, filename: str = "a.csv", type_: str = "csv", is_active: bool = True, owner: str = "X") -> dict:
    return {"id": file_id, "filename": filename, "type": type_, "is_active": is_active, "user": {"fullName": owner}}


def make_audit_json(record_id: int, file_id: int, status: str = "pending", notes: str = "ok") -> dict:
    return {
        "id": record_id,
        "notes": notes,
        "status": status,
        "audited_at": "2024-05-01T10:00:00Z",
        "file": make_file_json(file_id),
    }


@pytest.fixture
def file_json() -> Callable[..., dict]:
    return make_file_json


@pytest.fixture
def audit_json() -> Callable[..., dict]:
    return make_audit_json
