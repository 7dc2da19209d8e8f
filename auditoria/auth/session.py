"""当前登录会话：内存中的令牌 + 安全存储，状态变化时通知订阅者。"""
import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from auditoria.auth.credentials import CredentialStore

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[str]], None]


class SessionStore(QObject):
    """令牌的唯一来源。两种状态：未登录（token 为 None）/ 已登录(token)。

    启动时从安全存储读取一次，之后只读内存；只有 login / logout 会修改令牌，
    且修改后内存与存储保持一致（存储失败时仅记录日志，内存值仍然有效）。
    """
    changed = pyqtSignal(object)  # 新令牌或 None

    def __init__(self, store: CredentialStore, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._store = store
        self._listeners: List[SessionListener] = []
        self._epoch = 0
        try:
            self._token: Optional[str] = store.read() or None
        except Exception as e:
            logger.warning("[AuditorIA-会话] 读取已保存的令牌失败: %s", e)
            self._token = None

    def current_token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    @property
    def epoch(self) -> int:
        """每次登录状态变化加一，用于丢弃过期的响应。"""
        return self._epoch

    def login(self, token: str) -> None:
        """设置令牌并写入存储（覆盖旧值）。"""
        if not token:
            raise ValueError("token 不能为空")
        self._token = token
        try:
            self._store.save(token)
        except Exception as e:
            logger.warning("[AuditorIA-会话] 令牌未能持久化，重启后需重新登录: %s", e)
        self._notify()

    def logout(self) -> None:
        """清除令牌并删除存储中的值；未登录时不发通知。"""
        was_logged_in = self._token is not None
        self._token = None
        try:
            self._store.delete()
        except Exception as e:
            logger.warning("[AuditorIA-会话] 删除已保存的令牌失败: %s", e)
        if was_logged_in:
            self._notify()

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        self._epoch += 1
        logger.info("[AuditorIA-会话] %s", "已登录" if self._token else "已退出")
        for listener in list(self._listeners):
            listener(self._token)
        self.changed.emit(self._token)
