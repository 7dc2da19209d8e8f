"""用户文件：列表、上传、删除、预览与 AI 分析。"""
from auditoria.files.models import AnalysisDetail, FileOwner, FileRecord, UploadKind
from auditoria.files.preview import FilePreview, build_preview
from auditoria.files.service import FileService, active_count, filter_files

__all__ = [
    "AnalysisDetail",
    "FileOwner",
    "FileRecord",
    "UploadKind",
    "FilePreview",
    "build_preview",
    "FileService",
    "active_count",
    "filter_files",
]
