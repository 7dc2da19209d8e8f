"""界面层使用的视图模型（Qt 信号 + 后台线程请求）。"""
from auditoria.viewmodels.audit import AuditNotesViewModel
from auditoria.viewmodels.base import ViewModel
from auditoria.viewmodels.dashboard import DashboardViewModel
from auditoria.viewmodels.files import FileDetailViewModel, FileListViewModel
from auditoria.viewmodels.forecast import ForecastViewModel
from auditoria.viewmodels.login import LoginViewModel
from auditoria.viewmodels.worker import RequestWorker, ThreadRunner, run_inline

__all__ = [
    "AuditNotesViewModel",
    "ViewModel",
    "DashboardViewModel",
    "FileDetailViewModel",
    "FileListViewModel",
    "ForecastViewModel",
    "LoginViewModel",
    "RequestWorker",
    "ThreadRunner",
    "run_inline",
]
