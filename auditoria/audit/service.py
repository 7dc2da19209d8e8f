"""审计记录接口：查询当前用户的记录、提交备注与状态。"""
import logging
from typing import List, Optional, Union

from auditoria.api.client import ApiClient, decode_list
from auditoria.audit.models import AuditRecord, AuditRequest, AuditStatus
from auditoria.errors import InvalidInput

logger = logging.getLogger(__name__)

AUDIT_RECORD_PATH = "/api/audit-record"
USER_AUDIT_RECORDS_PATH = "/api/audit-record/user"


class AuditService:
    """审计记录。服务器没有按文件查询的接口，按文件筛选在本地完成。"""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_user_records(self) -> List[AuditRecord]:
        return decode_list(AuditRecord, self.client.get_json(USER_AUDIT_RECORDS_PATH))

    def records_for_file(self, file_id: int) -> List[AuditRecord]:
        return [r for r in self.list_user_records() if r.file_id == file_id]

    def existing_record(self, file_id: int) -> Optional[AuditRecord]:
        """该文件已有的第一条记录（用于预填备注）。"""
        records = self.records_for_file(file_id)
        return records[0] if records else None

    def submit(self, file_id: int, notes: str, status: Union[AuditStatus, str] = AuditStatus.PENDING) -> None:
        """提交备注；空白备注在本地拒绝，不发请求。200/201/204 均视为成功。"""
        if not notes.strip():
            raise InvalidInput("备注不能为空")
        body = AuditRequest(file_id=file_id, notes=notes, status=AuditStatus(status))
        self.client.post(AUDIT_RECORD_PATH, body.model_dump(by_alias=True))
        logger.info("[AuditorIA-审计] 已提交文件 %s 的备注", file_id)
