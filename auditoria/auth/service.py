"""登录、Google 登录与注册。

authenticate / google_authenticate 只换取令牌，不修改会话，可在后台线程调用；
login / google_login 换取后直接写入会话，供单线程（命令行）使用。
"""
import logging

from auditoria.api.client import ApiClient, decode
from auditoria.auth.models import (
    GoogleLoginRequest,
    GoogleLoginResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from auditoria.errors import InvalidInput

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/auth/login"
GOOGLE_LOGIN_PATH = "/api/auth/google/mobile"
REGISTER_PATH = "/api/auth/register"


class AuthService:
    """账号相关接口（无需令牌）。"""

    def __init__(self, client: ApiClient):
        self.client = client

    def authenticate(self, email: str, password: str) -> str:
        """邮箱密码换取令牌；401 抛 InvalidCredentials。"""
        email = email.strip()
        if not email or not password:
            raise InvalidInput("请输入邮箱和密码")
        body = LoginRequest(email=email, password=password).model_dump()
        data = self.client.post_json(LOGIN_PATH, body, auth=False)
        token = decode(LoginResponse, data).token
        logger.info("[AuditorIA-账号] 登录成功: %s", email)
        return token

    def google_authenticate(self, id_token: str) -> str:
        """用 Google idToken 换取后端令牌。"""
        if not id_token:
            raise InvalidInput("缺少 Google 凭据")
        body = GoogleLoginRequest(id_token=id_token).model_dump(by_alias=True)
        data = self.client.post_json(GOOGLE_LOGIN_PATH, body, auth=False)
        token = decode(GoogleLoginResponse, data).access_token
        logger.info("[AuditorIA-账号] Google 登录成功")
        return token

    def login(self, email: str, password: str) -> str:
        token = self.authenticate(email, password)
        self.client.session.login(token)
        return token

    def google_login(self, id_token: str) -> str:
        token = self.google_authenticate(id_token)
        self.client.session.login(token)
        return token

    def register(self, full_name: str, email: str, password: str) -> None:
        """注册新账号；不会自动登录。"""
        full_name = full_name.strip()
        email = email.strip()
        if not full_name or not email or not password:
            raise InvalidInput("请填写姓名、邮箱和密码")
        body = RegisterRequest(full_name=full_name, email=email, password=password)
        self.client.post(REGISTER_PATH, body.model_dump(by_alias=True), auth=False)
        logger.info("[AuditorIA-账号] 注册成功: %s", email)

    def logout(self) -> None:
        self.client.session.logout()
