"""文件、上传者与 AI 分析结果的数据模型。"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadKind(str, Enum):
    """上传类型，对应 processing-pipeline-module 下的路径。"""
    DATA = "data"          # 销售数据
    CONTRACT = "contract"  # 合同


class FileOwner(BaseModel):
    """上传者（只有 fullName 是列表接口一定返回的）。"""
    id: Optional[int] = None
    full_name: str = Field(..., alias="fullName")
    email: Optional[str] = None
    google_id: Optional[str] = Field(None, alias="googleId")
    roles: List[str] = Field(default_factory=list)
    created_at: Optional[str] = Field(None, alias="createdAt")
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FileRecord(BaseModel):
    """用户上传的文件。"""
    id: int
    filename: str
    type: str = Field(..., description="文件类型，如 csv / xlsx / pdf")
    is_active: bool
    url: Optional[str] = None
    path: Optional[str] = None
    uploaded_at: Optional[str] = None
    user: FileOwner

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def uploaded_by(self) -> str:
        return self.user.full_name

    @property
    def is_tabular(self) -> bool:
        t = self.type.lower()
        return "csv" in t or "xlsx" in t

    @property
    def is_pdf(self) -> bool:
        return "pdf" in self.type.lower()


class AnalysisDetail(BaseModel):
    """AI 分析结果。"""
    id: int
    text_extraction: int
    ai_response: str
    analyzed_at: str

    model_config = ConfigDict(extra="ignore")
