"""审计记录与状态。"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from auditoria.files.models import FileRecord


class AuditStatus(str, Enum):
    """审计状态。后端用 rejected 表示「已复核」。"""
    PENDING = "pending"    # 待处理
    APPROVED = "approved"  # 已通过
    REVIEWED = "rejected"  # 已复核

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    AuditStatus.PENDING: "待处理",
    AuditStatus.APPROVED: "已通过",
    AuditStatus.REVIEWED: "已复核",
}


class AuditRequest(BaseModel):
    """提交审计备注。"""
    file_id: int = Field(..., alias="fileId")
    notes: str = Field(..., min_length=1)
    status: AuditStatus = AuditStatus.PENDING

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class AuditRecord(BaseModel):
    """审计记录（带完整的 file 对象）。"""
    id: int
    notes: str
    status: AuditStatus
    audited_at: str
    file: FileRecord

    model_config = ConfigDict(extra="ignore")

    @property
    def file_id(self) -> int:
        return self.file.id
