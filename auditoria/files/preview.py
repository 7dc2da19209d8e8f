"""文件内容预览：表格类拆成行列，PDF 写到临时文件，其它按文本显示。"""
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from auditoria.config import PREVIEW_DIR, ensure_dirs
from auditoria.files.models import FileRecord

logger = logging.getLogger(__name__)

PREVIEW_UNAVAILABLE = "无法加载预览。"


@dataclass
class FilePreview:
    """预览结果，三种形式至多一种有内容（表格同时保留原文）。"""
    text: Optional[str] = None
    table: List[List[str]] = field(default_factory=list)
    pdf_path: Optional[Path] = None


def parse_table(text: str) -> List[List[str]]:
    """按换行和逗号拆分 CSV 文本；忽略末尾空行。"""
    lines = text.replace("\r\n", "\n").split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    return [line.split(",") for line in lines]


def build_preview(record: FileRecord, content: bytes, preview_dir: Optional[Path] = None) -> FilePreview:
    """根据文件类型把下载到的字节转成预览。"""
    if record.is_tabular:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("[AuditorIA-预览] %s 不是 UTF-8 文本", record.filename)
            return FilePreview(text=PREVIEW_UNAVAILABLE)
        return FilePreview(text=text, table=parse_table(text))
    if record.is_pdf:
        if preview_dir is None:
            ensure_dirs()
            preview_dir = PREVIEW_DIR
        else:
            preview_dir.mkdir(parents=True, exist_ok=True)
        # 文件名只取最后一段，避免路径穿越
        name = Path(record.filename).name or f"{uuid.uuid4().hex[:8]}.pdf"
        dest = preview_dir / name
        with open(dest, "wb") as f:
            f.write(content)
        return FilePreview(pdf_path=dest)
    try:
        return FilePreview(text=content.decode("utf-8"))
    except UnicodeDecodeError:
        return FilePreview(text=PREVIEW_UNAVAILABLE)
