"""文件接口：列表、删除、上传、AI 分析、内容预览。"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from auditoria.api.client import ApiClient, decode, decode_list, quote_segment
from auditoria.config import FILE_TYPE_ALL
from auditoria.errors import InvalidInput
from auditoria.events import EventBus, FileDeleted, FileUploaded
from auditoria.files.models import AnalysisDetail, FileRecord, UploadKind
from auditoria.files.preview import FilePreview, build_preview

logger = logging.getLogger(__name__)

USER_FILES_PATH = "/api/files/user"
FILE_PATH = "/api/files/{id}"
UPLOAD_PATH = "/api/processing-pipeline-module/{kind}"
ANALYSIS_PATH = "/api/ai/{id}"
SEE_FILE_PATH = "/api/files/see-file/{filename}"


def active_count(files: Iterable[FileRecord]) -> int:
    return sum(1 for f in files if f.is_active)


def filter_files(files: Iterable[FileRecord], search: str = "", file_type: str = FILE_TYPE_ALL) -> List[FileRecord]:
    """按文件名（不区分大小写）与类型筛选。file_type 为 all 或 .csv / .xlsx / .pdf。"""
    search = search.strip().lower()
    wanted = file_type.strip().lower().lstrip(".")
    out = []
    for f in files:
        if wanted and wanted != FILE_TYPE_ALL and f.type.lower().lstrip(".") != wanted:
            continue
        if search and search not in f.filename.lower():
            continue
        out.append(f)
    return out


class FileService:
    """用户文件相关接口。events 可选：上传 / 删除成功后发布事件。"""

    def __init__(self, client: ApiClient, events: Optional[EventBus] = None):
        self.client = client
        self.events = events

    def list_user_files(self) -> List[FileRecord]:
        return decode_list(FileRecord, self.client.get_json(USER_FILES_PATH))

    def delete_file(self, file_id: int) -> None:
        self.client.delete(FILE_PATH.format(id=int(file_id)))
        logger.info("[AuditorIA-文件] 已删除文件 %s", file_id)
        if self.events is not None:
            self.events.publish(FileDeleted(file_id=int(file_id)))

    def upload(self, file_path: Union[str, Path], kind: Union[UploadKind, str] = UploadKind.DATA) -> None:
        """上传销售数据或合同（multipart 字段 file）。"""
        path = Path(file_path)
        if not path.is_file():
            raise InvalidInput(f"文件不存在: {path}")
        kind = UploadKind(kind)
        self.client.upload(UPLOAD_PATH.format(kind=kind.value), path)
        logger.info("[AuditorIA-文件] 上传成功: %s (%s)", path.name, kind.value)
        if self.events is not None:
            self.events.publish(FileUploaded(filename=path.name, kind=kind.value))

    def analysis(self, file_id: int) -> AnalysisDetail:
        return decode(AnalysisDetail, self.client.get_json(ANALYSIS_PATH.format(id=int(file_id))))

    def content(self, filename: str) -> bytes:
        return self.client.get_bytes(SEE_FILE_PATH.format(filename=quote_segment(filename)))

    def preview(self, record: FileRecord, preview_dir: Optional[Path] = None) -> FilePreview:
        return build_preview(record, self.content(record.filename), preview_dir)
