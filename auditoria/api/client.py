"""后端 HTTP 客户端：带令牌的请求、状态码处理与响应解码。

需要认证的请求先从会话读取令牌：没有令牌直接抛 Unauthenticated，不发请求；
有令牌则加上 `Authorization: Bearer <token>`。
非 2xx 抛 ServerError（401 为 InvalidCredentials），网络层失败抛 TransportError。
"""
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import quote, urlparse

import requests
from pydantic import BaseModel, ValidationError

from auditoria.auth.session import SessionStore
from auditoria.config import API_BASE_URL, REQUEST_TIMEOUT, UPLOAD_TIMEOUT
from auditoria.errors import (
    DecodeError,
    InvalidCredentials,
    InvalidInput,
    InvalidURL,
    ServerError,
    TransportError,
    Unauthenticated,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class UnauthorizedPolicy(str, Enum):
    """收到 401 后如何处理会话。"""
    KEEP_SESSION = "keep_session"  # 只提示凭据无效
    LOGOUT = "logout"              # 同时退出登录


def extract_server_message(response: requests.Response) -> Optional[str]:
    """从错误响应中取出 {message: str | [str]} 或 {error: str}。"""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, list):
        parts = [str(m) for m in message if m]
        return "\n".join(parts) or None
    if isinstance(message, str) and message:
        return message
    error = data.get("error")
    if isinstance(error, str) and error:
        return error
    return None


def decode(model: Type[M], data: Any) -> M:
    """按模型校验一个 JSON 对象，失败抛 DecodeError。"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("[AuditorIA-接口] 响应解码失败 (%s): %s", model.__name__, e)
        logger.debug("[AuditorIA-接口] 原始响应: %r", data)
        raise DecodeError(str(e)) from e


def decode_list(model: Type[M], data: Any) -> List[M]:
    """按模型校验 JSON 数组。"""
    if not isinstance(data, list):
        logger.debug("[AuditorIA-接口] 期望数组，原始响应: %r", data)
        raise DecodeError(f"期望数组，得到 {type(data).__name__}")
    return [decode(model, item) for item in data]


class ApiClient:
    """AuditorIA 后端客户端。http 可注入（测试替身需提供 request 方法）。"""

    def __init__(
        self,
        session: SessionStore,
        base_url: str = API_BASE_URL,
        http: Optional[requests.Session] = None,
        unauthorized_policy: UnauthorizedPolicy = UnauthorizedPolicy.KEEP_SESSION,
        timeout: float = REQUEST_TIMEOUT,
        upload_timeout: float = UPLOAD_TIMEOUT,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.unauthorized_policy = UnauthorizedPolicy(unauthorized_policy)
        self.timeout = timeout
        self.upload_timeout = upload_timeout

    def url(self, path: str) -> str:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidURL(f"接口地址无效: {self.base_url!r}")
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def auth_headers(self) -> dict:
        """当前令牌对应的认证头；无令牌抛 Unauthenticated。"""
        token = self.session.current_token()
        if not token:
            raise Unauthenticated()
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = True,
        json_body: Any = None,
        files: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """发出请求并检查状态码，返回 2xx 的响应。"""
        headers = self.auth_headers() if auth else {}
        url = self.url(path)
        kwargs: dict = {"headers": headers, "timeout": timeout or self.timeout}
        if json_body is not None:
            kwargs["json"] = json_body
        if files is not None:
            kwargs["files"] = files
        logger.debug("[AuditorIA-接口] %s %s", method, url)
        try:
            response = self.http.request(method, url, **kwargs)
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise InvalidURL(str(e)) from e
        except requests.RequestException as e:
            logger.warning("[AuditorIA-接口] 请求失败 %s %s: %s", method, url, e)
            raise TransportError(str(e)) from e
        logger.debug("[AuditorIA-接口] 响应 HTTP %s", response.status_code)
        self._check(response, auth)
        return response

    def _check(self, response: requests.Response, auth: bool) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        message = extract_server_message(response)
        if status == 401:
            error = InvalidCredentials(message)
            error.token_rejected = auth
            raise error
        logger.warning("[AuditorIA-接口] HTTP %s: %s", status, message or response.text[:200])
        raise ServerError(status, message)

    def handle_error(self, error: Exception) -> None:
        """按 401 策略处理错误；须在持有会话的线程（主线程）调用。"""
        if not isinstance(error, InvalidCredentials) or not error.token_rejected:
            return
        if self.unauthorized_policy == UnauthorizedPolicy.LOGOUT:
            logger.info("[AuditorIA-接口] 令牌被拒绝，退出登录")
            self.session.logout()

    def json_of(self, response: requests.Response) -> Any:
        """解析 JSON 响应体；空响应返回 None。"""
        if not response.content:
            return None
        try:
            return response.json()
        except (ValueError, json.JSONDecodeError) as e:
            logger.warning("[AuditorIA-接口] 响应非 JSON")
            logger.debug("[AuditorIA-接口] 原始响应: %r", response.text[:500])
            raise DecodeError(str(e)) from e

    def get_json(self, path: str, *, auth: bool = True) -> Any:
        return self.json_of(self.request("GET", path, auth=auth))

    def post_json(self, path: str, body: Any, *, auth: bool = True) -> Any:
        return self.json_of(self.request("POST", path, auth=auth, json_body=body))

    def post(self, path: str, body: Any, *, auth: bool = True) -> None:
        """只关心状态码的写操作：2xx 即成功，不解析响应体。"""
        self.request("POST", path, auth=auth, json_body=body)

    def delete(self, path: str) -> None:
        self.request("DELETE", path)

    def get_bytes(self, path: str) -> bytes:
        return self.request("GET", path).content

    def upload(self, path: str, file_path: Path, field: str = "file") -> None:
        """multipart 上传单个文件，使用较长的超时；200/201 即成功，响应体不解析。"""
        try:
            f = open(file_path, "rb")
        except OSError as e:
            raise InvalidInput(f"无法读取文件: {file_path}") from e
        with f:
            files = {field: (file_path.name, f)}
            self.request("POST", path, files=files, timeout=self.upload_timeout)


def quote_segment(value: Any) -> str:
    """路径片段转义（文件名中可能有空格等）。"""
    return quote(str(value), safe="")
