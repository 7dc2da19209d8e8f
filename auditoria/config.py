"""AuditorIA 客户端全局配置与路径。"""
import os
from pathlib import Path

# 项目根目录（auditoria 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：凭据（文件后端）、预览临时文件等
DATA_DIR = Path(os.environ.get("AUDITORIA_DATA_DIR", "") or ROOT_DIR / "data")
AUTH_DATA_DIR = DATA_DIR / "auth"  # 文件后端的令牌存储
PREVIEW_DIR = DATA_DIR / "preview"  # 下载的 PDF 预览

# 后端 API
API_BASE_URL = os.environ.get("AUDITORIA_API_BASE_URL", "http://localhost:3000").strip()

# 超时（秒）：大文件上传约两分钟，其余请求 30 秒
REQUEST_TIMEOUT = 30
UPLOAD_TIMEOUT = 120

# 安全存储：固定 (service, account)
KEYCHAIN_SERVICE = os.environ.get("AUDITORIA_KEYCHAIN_SERVICE", "AuditorIA").strip() or "AuditorIA"
KEYCHAIN_ACCOUNT = "auth_token"
# keyring | file | memory
CREDENTIAL_BACKEND = os.environ.get("AUDITORIA_CREDENTIAL_BACKEND", "keyring").strip().lower()

# 预测默认
FORECAST_LEVEL = "weekly"
FORECAST_DAYS = 7

# 文件类型筛选
FILE_TYPE_ALL = "all"
FILE_TYPE_FILTERS = (FILE_TYPE_ALL, ".csv", ".xlsx", ".pdf")


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, AUTH_DATA_DIR, PREVIEW_DIR):
        d.mkdir(parents=True, exist_ok=True)
