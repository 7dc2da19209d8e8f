"""文件列表与文件详情的视图模型。"""
from pathlib import Path
from typing import List, Optional, Union

from PyQt6.QtCore import QObject

from auditoria.config import FILE_TYPE_ALL
from auditoria.events import EventBus
from auditoria.files.models import AnalysisDetail, FileRecord, UploadKind
from auditoria.files.preview import FilePreview
from auditoria.files.service import FileService, active_count, filter_files
from auditoria.viewmodels.base import ViewModel
from auditoria.viewmodels.worker import Runner


class FileListViewModel(ViewModel):
    """当前用户的文件：搜索、类型筛选、删除、上传；收到文件事件后自动刷新。"""

    def __init__(
        self,
        service: FileService,
        events: Optional[EventBus] = None,
        runner: Optional[Runner] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(service.client, runner, parent)
        self.service = service
        self.files: List[FileRecord] = []
        self.search = ""
        self.file_type = FILE_TYPE_ALL
        if events is not None:
            events.filesChanged.connect(self._on_files_changed)

    @property
    def active_count(self) -> int:
        return active_count(self.files)

    def visible_files(self) -> List[FileRecord]:
        return filter_files(self.files, self.search, self.file_type)

    def set_search(self, text: str) -> None:
        self.search = text
        self.stateChanged.emit()

    def set_file_type(self, file_type: str) -> None:
        self.file_type = file_type
        self.stateChanged.emit()

    def refresh(self) -> None:
        if not self.session.is_authenticated:
            self._set_error("请先登录")
            return
        self.run(self.service.list_user_files, self._apply_files)

    def delete(self, file_id: int) -> None:
        self.run(lambda: self.service.delete_file(file_id), lambda _: None)

    def upload(self, file_path: Union[str, Path], kind: Union[UploadKind, str] = UploadKind.DATA) -> None:
        self.run(lambda: self.service.upload(file_path, kind), lambda _: None)

    def _apply_files(self, files: List[FileRecord]) -> None:
        self.files = files

    def _on_files_changed(self, event: object) -> None:
        if self.session.is_authenticated:
            self.refresh()

    def reset(self) -> None:
        self.files = []
        self.search = ""
        self.file_type = FILE_TYPE_ALL
        if self.session.is_authenticated:
            self.refresh()


class FileDetailViewModel(ViewModel):
    """单个文件：AI 分析结果与内容预览。"""

    def __init__(
        self,
        service: FileService,
        runner: Optional[Runner] = None,
        parent: Optional[QObject] = None,
        preview_dir: Optional[Path] = None,
    ):
        super().__init__(service.client, runner, parent)
        self.service = service
        self.preview_dir = preview_dir
        self.record: Optional[FileRecord] = None
        self.analysis: Optional[AnalysisDetail] = None
        self.preview: Optional[FilePreview] = None

    def load(self, record: FileRecord) -> None:
        """切换到 record；之前文件晚到的结果会被丢弃。"""
        self.record = record
        self.analysis = None
        self.preview = None

        def current() -> bool:
            return self.record is record

        self.run(lambda: self.service.analysis(record.id), self._apply_analysis, current)
        self.run(lambda: self.service.preview(record, self.preview_dir), self._apply_preview, current)

    def _apply_analysis(self, analysis: AnalysisDetail) -> None:
        self.analysis = analysis

    def _apply_preview(self, preview: FilePreview) -> None:
        self.preview = preview

    def reset(self) -> None:
        self.record = None
        self.analysis = None
        self.preview = None
