"""审计备注视图模型：草稿、提交、历史记录。"""
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject

from auditoria.audit.models import AuditRecord, AuditStatus
from auditoria.audit.service import AuditService
from auditoria.viewmodels.base import ViewModel
from auditoria.viewmodels.worker import Runner


class AuditNotesViewModel(ViewModel):
    """一次只对应一个文件（file_id）；切换文件后，前一个文件晚到的结果丢弃。"""

    def __init__(self, service: AuditService, runner: Optional[Runner] = None, parent: Optional[QObject] = None):
        super().__init__(service.client, runner, parent)
        self.service = service
        self.file_id: Optional[int] = None
        self.current_notes = ""
        self.selected_status = AuditStatus.PENDING
        self.records: List[AuditRecord] = []
        self.show_success = False

    def _select(self, file_id: int) -> Callable[[], bool]:
        if file_id != self.file_id:
            self.file_id = file_id
            self.records = []
        return lambda: self.file_id == file_id

    def submit(self, file_id: int) -> None:
        """空白备注直接提示，不发请求；成功后清空草稿并重新加载该文件的记录。"""
        if not self.current_notes.strip():
            self._set_error("备注不能为空")
            return
        self.show_success = False
        notes, status = self.current_notes, self.selected_status
        current = self._select(file_id)
        self.run(lambda: self.service.submit(file_id, notes, status), lambda _: self._on_submitted(file_id), current)

    def _on_submitted(self, file_id: int) -> None:
        self.show_success = True
        self.current_notes = ""
        self.selected_status = AuditStatus.PENDING
        self.load_history(file_id)

    def load_history(self, file_id: int) -> None:
        current = self._select(file_id)
        self.run(lambda: self.service.records_for_file(file_id), self._apply_records, current)

    def load_existing(self, file_id: int) -> None:
        """用该文件已有的记录预填草稿。"""
        current = self._select(file_id)
        self.run(lambda: self.service.existing_record(file_id), self._apply_existing, current)

    def _apply_records(self, records: List[AuditRecord]) -> None:
        self.records = records

    def _apply_existing(self, record: Optional[AuditRecord]) -> None:
        if record is not None:
            self.current_notes = record.notes
            self.selected_status = AuditStatus(record.status)

    def reset(self) -> None:
        self.file_id = None
        self.current_notes = ""
        self.selected_status = AuditStatus.PENDING
        self.records = []
        self.show_success = False
