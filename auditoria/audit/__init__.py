"""审计备注与状态。"""
from auditoria.audit.models import AuditRecord, AuditRequest, AuditStatus
from auditoria.audit.service import AuditService

__all__ = [
    "AuditRecord",
    "AuditRequest",
    "AuditStatus",
    "AuditService",
]
