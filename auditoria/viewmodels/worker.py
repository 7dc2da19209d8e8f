"""后台请求 Worker（QThread）：在子线程执行网络调用，结果通过信号回到主线程。"""
import logging
from typing import Any, Callable, Dict, Optional, Set

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

logger = logging.getLogger(__name__)

Job = Callable[[], Any]
OnSuccess = Callable[[Any], None]
OnFail = Callable[[Exception], None]
Runner = Callable[[Job, OnSuccess, OnFail], None]


class RequestWorker(QThread):
    """执行一个无参函数。"""
    finished_success = pyqtSignal(object)  # 返回值
    finished_fail = pyqtSignal(object)     # 异常

    def __init__(self, job: Job):
        super().__init__()
        self._job = job

    def run(self) -> None:
        try:
            result = self._job()
        except Exception as e:
            self.finished_fail.emit(e)
            return
        self.finished_success.emit(result)


class ThreadRunner(QObject):
    """为每个请求启动一个 RequestWorker；回调总在本对象所在线程（主线程）执行。"""

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._callbacks: Dict[int, tuple] = {}
        self._running: Set[RequestWorker] = set()

    def __call__(self, job: Job, on_success: OnSuccess, on_fail: OnFail) -> None:
        worker = RequestWorker(job)
        self._callbacks[id(worker)] = (on_success, on_fail)
        self._running.add(worker)
        worker.finished_success.connect(self._on_success)
        worker.finished_fail.connect(self._on_fail)
        worker.finished.connect(self._on_finished)
        worker.start()

    @pyqtSlot(object)
    def _on_success(self, result: Any) -> None:
        callbacks = self._callbacks.pop(id(self.sender()), None)
        if callbacks:
            callbacks[0](result)

    @pyqtSlot(object)
    def _on_fail(self, error: Exception) -> None:
        callbacks = self._callbacks.pop(id(self.sender()), None)
        if callbacks:
            callbacks[1](error)

    @pyqtSlot()
    def _on_finished(self) -> None:
        worker = self.sender()
        self._running.discard(worker)
        if worker is not None:
            worker.deleteLater()

    def pending(self) -> int:
        return len(self._running)


def run_inline(job: Job, on_success: OnSuccess, on_fail: OnFail) -> None:
    """在当前线程同步执行（测试与命令行使用）。"""
    try:
        result = job()
    except Exception as e:
        on_fail(e)
        return
    on_success(result)
