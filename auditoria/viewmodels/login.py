"""登录 / 注册视图模型。令牌在后台换取，写入会话在主线程完成。"""
from typing import Optional

from PyQt6.QtCore import QObject

from auditoria.auth.service import AuthService
from auditoria.viewmodels.base import ViewModel
from auditoria.viewmodels.worker import Runner


class LoginViewModel(ViewModel):
    def __init__(self, service: AuthService, runner: Optional[Runner] = None, parent: Optional[QObject] = None):
        super().__init__(service.client, runner, parent)
        self.service = service
        self.registered = False

    def login(self, email: str, password: str) -> None:
        self.run(lambda: self.service.authenticate(email, password), self.session.login)

    def google_login(self, id_token: str) -> None:
        self.run(lambda: self.service.google_authenticate(id_token), self.session.login)

    def register(self, full_name: str, email: str, password: str) -> None:
        self.registered = False
        self.run(lambda: self.service.register(full_name, email, password), self._on_registered)

    def logout(self) -> None:
        self.session.logout()

    def _on_registered(self, _result: object) -> None:
        self.registered = True

    def reset(self) -> None:
        self.registered = False
