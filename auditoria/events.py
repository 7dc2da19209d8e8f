"""文件变更事件：上传 / 删除后通知其他界面刷新。"""
from dataclasses import dataclass
from typing import Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal


@dataclass(frozen=True)
class FileUploaded:
    """上传成功。kind 为 data（销售数据）或 contract（合同）。"""
    filename: str
    kind: str


@dataclass(frozen=True)
class FileDeleted:
    file_id: int


FileEvent = Union[FileUploaded, FileDeleted]


class EventBus(QObject):
    """按事件类型分发的信号总线。"""
    fileUploaded = pyqtSignal(object)  # FileUploaded
    fileDeleted = pyqtSignal(object)   # FileDeleted
    filesChanged = pyqtSignal(object)  # 任意 FileEvent

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

    def publish(self, event: FileEvent) -> None:
        if isinstance(event, FileUploaded):
            self.fileUploaded.emit(event)
        elif isinstance(event, FileDeleted):
            self.fileDeleted.emit(event)
        else:
            raise TypeError(f"未知事件: {event!r}")
        self.filesChanged.emit(event)
