"""首页统计：文件总数、已完成审计、待复核。"""
from typing import List, Optional, Tuple

from PyQt6.QtCore import QObject

from auditoria.audit.models import AuditRecord, AuditStatus
from auditoria.audit.service import AuditService
from auditoria.events import EventBus
from auditoria.files.models import FileRecord
from auditoria.files.service import FileService, active_count
from auditoria.viewmodels.base import ViewModel
from auditoria.viewmodels.worker import Runner


def summarize(files: List[FileRecord], records: List[AuditRecord]) -> Tuple[int, int, int, int]:
    """返回 (文件总数, 有效文件数, 已完成审计数, 待复核文件数)。

    已完成：状态不是 pending 的审计记录；待复核：没有任何已完成记录的文件。
    """
    done = [r for r in records if r.status != AuditStatus.PENDING]
    reviewed_ids = {r.file_id for r in done}
    pending = sum(1 for f in files if f.id not in reviewed_ids)
    return len(files), active_count(files), len(done), pending


class DashboardViewModel(ViewModel):
    def __init__(
        self,
        files: FileService,
        audits: AuditService,
        events: Optional[EventBus] = None,
        runner: Optional[Runner] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(files.client, runner, parent)
        self.files_service = files
        self.audit_service = audits
        self.total_files = 0
        self.active_files = 0
        self.completed_audits = 0
        self.pending_review = 0
        if events is not None:
            events.filesChanged.connect(self._on_files_changed)

    def refresh(self) -> None:
        if not self.session.is_authenticated:
            return
        self.run(self._fetch, self._apply)

    def _on_files_changed(self, _event: object) -> None:
        self.refresh()

    def _fetch(self) -> Tuple[int, int, int, int]:
        return summarize(self.files_service.list_user_files(), self.audit_service.list_user_records())

    def _apply(self, counts: Tuple[int, int, int, int]) -> None:
        self.total_files, self.active_files, self.completed_audits, self.pending_review = counts

    def reset(self) -> None:
        self.total_files = 0
        self.active_files = 0
        self.completed_audits = 0
        self.pending_review = 0
        if self.session.is_authenticated:
            self.refresh()
