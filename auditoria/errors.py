"""错误分类：每个错误都能转换为面向用户的提示文字。"""
from typing import Optional


class AuditoriaError(Exception):
    """客户端错误基类。"""

    default_message = "操作失败"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def user_message(self) -> str:
        return self.message


class Unauthenticated(AuditoriaError):
    """当前没有令牌，请求未发出。"""

    default_message = "请先登录"


class InvalidURL(AuditoriaError):
    """接口地址配置错误。"""

    default_message = "接口地址无效"


class InvalidInput(AuditoriaError):
    """本地输入校验失败（未发请求）。"""

    default_message = "输入无效"


class TransportError(AuditoriaError):
    """网络层失败：超时、无法连接等。"""

    default_message = "网络错误"

    def user_message(self) -> str:
        return f"网络错误: {self.message}，请检查网络后重试"


class ServerError(AuditoriaError):
    """服务器返回非 2xx。message 为服务器给出的文字（若可解析）。"""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.server_message = message
        super().__init__(message or f"HTTP {status_code}")

    def user_message(self) -> str:
        if self.server_message:
            return f"服务器错误 ({self.status_code}): {self.server_message}"
        return f"服务器错误 ({self.status_code})"


class InvalidCredentials(ServerError):
    """401：令牌或账号密码被拒绝。"""

    def __init__(self, message: Optional[str] = None, status_code: int = 401):
        super().__init__(status_code, message)
        # True 表示被拒绝的是会话令牌（而不是登录时的账号密码）
        self.token_rejected = False

    def user_message(self) -> str:
        if self.server_message:
            return f"凭据无效: {self.server_message}"
        return "凭据无效，请重新登录"


class DecodeError(AuditoriaError):
    """响应结构与预期不符。原始响应只写日志，不展示给用户。"""

    default_message = "服务器响应无效"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(self.default_message)
        self.detail = detail


def to_user_message(error: Exception) -> str:
    """把任意异常转为提示文字；本地文件读写失败单独提示，其余非 AuditoriaError 视为未知错误。"""
    if isinstance(error, AuditoriaError):
        return error.user_message()
    if isinstance(error, OSError):
        return f"文件读写失败: {error}"
    return f"未知错误: {error}"
