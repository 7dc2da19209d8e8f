"""命令行入口：登录 / 退出 / 文件 / 审计 / 分析 / 预测。

令牌保存在安全存储中，多次执行之间保持登录状态。
"""
import argparse
import logging
import sys
from typing import Callable, List, Optional

from auditoria import __version__
from auditoria.api.client import ApiClient, UnauthorizedPolicy
from auditoria.audit.models import AuditStatus
from auditoria.audit.service import AuditService
from auditoria.auth.credentials import default_store
from auditoria.auth.service import AuthService
from auditoria.auth.session import SessionStore
from auditoria.config import API_BASE_URL, FILE_TYPE_ALL, FILE_TYPE_FILTERS, FORECAST_DAYS, ensure_dirs
from auditoria.errors import AuditoriaError, to_user_message
from auditoria.files.models import UploadKind
from auditoria.files.service import FileService, active_count, filter_files
from auditoria.forecast.service import ForecastService


class App:
    """进程内唯一的会话与各接口服务。"""

    def __init__(self, client: ApiClient):
        self.client = client
        self.session = client.session
        self.auth = AuthService(client)
        self.files = FileService(client)
        self.audits = AuditService(client)
        self.forecast = ForecastService(client)


def build_app(base_url: str = API_BASE_URL, backend: Optional[str] = None, logout_on_401: bool = False) -> App:
    session = SessionStore(default_store(backend))
    policy = UnauthorizedPolicy.LOGOUT if logout_on_401 else UnauthorizedPolicy.KEEP_SESSION
    return App(ApiClient(session, base_url=base_url, unauthorized_policy=policy))


def cmd_login(app: App, args: argparse.Namespace) -> None:
    if args.google_id_token:
        app.auth.google_login(args.google_id_token)
    else:
        app.auth.login(args.email, args.password)
    print("登录成功")


def cmd_register(app: App, args: argparse.Namespace) -> None:
    app.auth.register(args.full_name, args.email, args.password)
    print("注册成功，请登录")


def cmd_logout(app: App, args: argparse.Namespace) -> None:
    app.auth.logout()
    print("已退出登录")


def cmd_status(app: App, args: argparse.Namespace) -> None:
    print("已登录" if app.session.is_authenticated else "未登录")


def cmd_files(app: App, args: argparse.Namespace) -> None:
    files = app.files.list_user_files()
    for f in filter_files(files, args.search, args.type):
        state = "有效" if f.is_active else "停用"
        print(f"{f.id}\t{f.filename}\t{f.type}\t{state}\t{f.uploaded_by}")
    print(f"共 {len(files)} 个文件，有效 {active_count(files)} 个")


def cmd_delete(app: App, args: argparse.Namespace) -> None:
    app.files.delete_file(args.file_id)
    print(f"已删除文件 {args.file_id}")


def cmd_upload(app: App, args: argparse.Namespace) -> None:
    app.files.upload(args.path, UploadKind.CONTRACT if args.contract else UploadKind.DATA)
    print("上传成功")


def cmd_analysis(app: App, args: argparse.Namespace) -> None:
    detail = app.files.analysis(args.file_id)
    print(f"分析时间: {detail.analyzed_at}")
    print(detail.ai_response)


def cmd_preview(app: App, args: argparse.Namespace) -> None:
    record = next((f for f in app.files.list_user_files() if f.id == args.file_id), None)
    if record is None:
        raise AuditoriaError(f"找不到文件 {args.file_id}")
    preview = app.files.preview(record)
    if preview.pdf_path:
        print(f"PDF 已保存到: {preview.pdf_path}")
    else:
        print(preview.text)


def cmd_audits(app: App, args: argparse.Namespace) -> None:
    records = app.audits.records_for_file(args.file_id) if args.file_id else app.audits.list_user_records()
    for r in records:
        print(f"{r.id}\t{r.file.filename}\t{r.status.display_name}\t{r.audited_at}\t{r.notes}")


def cmd_note(app: App, args: argparse.Namespace) -> None:
    app.audits.submit(args.file_id, args.notes, AuditStatus(args.status))
    print("备注已保存")


def cmd_forecast(app: App, args: argparse.Namespace) -> None:
    forecast = app.forecast.fetch(args.file_id, args.days)
    s = forecast.summary
    print(f"{forecast.message}")
    print(f"周期: {s.period}  趋势: {s.trend}")
    print(f"日均销售: {s.avg_daily_sales:.2f}  预测总额: {s.total_predicted_sales:.2f}")
    print(f"最好: {s.best_day.date} ({s.best_day.predicted_sales:.2f})  最差: {s.worst_day.date} ({s.worst_day.predicted_sales:.2f})")
    for p in forecast.predictions:
        print(f"{p.date}\t{p.day_of_week}\t{p.predicted_sales:.2f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="auditoria", description="AuditorIA 客户端")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--base-url", default=API_BASE_URL, help="后端地址")
    parser.add_argument("--store", choices=("keyring", "file", "memory"), default=None, help="令牌存储后端")
    parser.add_argument("--logout-on-401", action="store_true", help="令牌被拒绝时自动退出登录")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="登录")
    p.add_argument("--email", default="")
    p.add_argument("--password", default="")
    p.add_argument("--google-id-token", default="")
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("register", help="注册")
    p.add_argument("full_name")
    p.add_argument("email")
    p.add_argument("password")
    p.set_defaults(func=cmd_register)

    sub.add_parser("logout", help="退出登录").set_defaults(func=cmd_logout)
    sub.add_parser("status", help="登录状态").set_defaults(func=cmd_status)

    p = sub.add_parser("files", help="我的文件")
    p.add_argument("--search", default="")
    p.add_argument("--type", choices=FILE_TYPE_FILTERS, default=FILE_TYPE_ALL)
    p.set_defaults(func=cmd_files)

    p = sub.add_parser("delete", help="删除文件")
    p.add_argument("file_id", type=int)
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("upload", help="上传销售数据或合同")
    p.add_argument("path")
    p.add_argument("--contract", action="store_true")
    p.set_defaults(func=cmd_upload)

    p = sub.add_parser("analysis", help="AI 分析结果")
    p.add_argument("file_id", type=int)
    p.set_defaults(func=cmd_analysis)

    p = sub.add_parser("preview", help="文件内容预览")
    p.add_argument("file_id", type=int)
    p.set_defaults(func=cmd_preview)

    p = sub.add_parser("audits", help="审计记录")
    p.add_argument("--file-id", type=int, default=None)
    p.set_defaults(func=cmd_audits)

    p = sub.add_parser("note", help="提交审计备注")
    p.add_argument("file_id", type=int)
    p.add_argument("notes")
    p.add_argument("--status", choices=[s.value for s in AuditStatus], default=AuditStatus.PENDING.value)
    p.set_defaults(func=cmd_note)

    p = sub.add_parser("forecast", help="销售预测")
    p.add_argument("file_id", type=int)
    p.add_argument("--days", type=int, default=FORECAST_DAYS)
    p.set_defaults(func=cmd_forecast)
    return parser


def main(argv: Optional[List[str]] = None, app_factory: Callable[..., App] = build_app) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )
    ensure_dirs()
    app = app_factory(base_url=args.base_url, backend=args.store, logout_on_401=args.logout_on_401)
    try:
        args.func(app, args)
    except (AuditoriaError, OSError) as e:
        app.client.handle_error(e)
        print(to_user_message(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
