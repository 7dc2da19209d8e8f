"""视图模型基类：加载状态、错误提示、会话变化时重置。"""
import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from auditoria.api.client import ApiClient
from auditoria.errors import to_user_message
from auditoria.viewmodels.worker import Job, Runner, ThreadRunner

logger = logging.getLogger(__name__)


class ViewModel(QObject):
    """所有状态只在主线程修改。

    请求开始时记下会话 epoch；结果回来时若已登录/退出过，直接丢弃。
    错误在这里统一转成 error_message，不向界面抛出。
    """
    loadingChanged = pyqtSignal(bool)
    errorChanged = pyqtSignal(object)  # str 或 None
    stateChanged = pyqtSignal()

    def __init__(self, client: ApiClient, runner: Optional[Runner] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.client = client
        self.session = client.session
        self._runner = runner or ThreadRunner(self)
        self._pending = 0
        self.loading = False
        self.error_message: Optional[str] = None
        self.session.changed.connect(self._on_session_changed)

    def _set_pending(self, count: int) -> None:
        self._pending = max(count, 0)
        loading = self._pending > 0
        if self.loading != loading:
            self.loading = loading
            self.loadingChanged.emit(loading)

    def _set_error(self, message: Optional[str]) -> None:
        self.error_message = message
        self.errorChanged.emit(message)

    def run(
        self,
        job: Job,
        on_success: Callable[[Any], None],
        current: Optional[Callable[[], bool]] = None,
    ) -> None:
        """在后台执行 job，成功后在主线程调用 on_success。

        current 可选：结果回来时返回 False 表示界面已切换到别的对象，结果丢弃。
        """
        epoch = self.session.epoch
        self._set_pending(self._pending + 1)
        self._set_error(None)

        def success(result: Any) -> None:
            if epoch != self.session.epoch:
                logger.debug("[AuditorIA-界面] 会话已变化，丢弃过期响应 (%s)", type(self).__name__)
                return
            self._set_pending(self._pending - 1)
            if current is not None and not current():
                logger.debug("[AuditorIA-界面] 已切换对象，丢弃旧响应 (%s)", type(self).__name__)
                return
            on_success(result)
            self.stateChanged.emit()

        def fail(error: Exception) -> None:
            if epoch != self.session.epoch:
                logger.debug("[AuditorIA-界面] 会话已变化，丢弃过期错误 (%s)", type(self).__name__)
                return
            self._set_pending(self._pending - 1)
            logger.info("[AuditorIA-界面] %s: %s", type(self).__name__, error)
            # 可能触发退出登录（见 UnauthorizedPolicy），之后再显示错误
            self.client.handle_error(error)
            if current is not None and not current():
                return
            self._set_error(to_user_message(error))
            self.stateChanged.emit()

        self._runner(job, success, fail)

    def _on_session_changed(self, token: Optional[str]) -> None:
        self._set_pending(0)
        self._set_error(None)
        self.reset()
        self.stateChanged.emit()

    def reset(self) -> None:
        """丢弃与登录用户相关的缓存数据。子类覆盖。"""
