"""登录与注册的请求/响应模型。"""
from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """邮箱密码登录。"""
    email: str = Field(..., description="登录邮箱")
    password: str = Field(..., description="密码")


class LoginResponse(BaseModel):
    token: str = Field(..., min_length=1, description="Bearer 令牌")

    model_config = ConfigDict(extra="ignore")


class GoogleLoginRequest(BaseModel):
    """Google 移动端登录：提交 Google 返回的 idToken。"""
    id_token: str = Field(..., alias="idToken", description="Google ID Token")

    model_config = ConfigDict(populate_by_name=True)


class GoogleLoginResponse(BaseModel):
    access_token: str = Field(..., min_length=1, description="Bearer 令牌")

    model_config = ConfigDict(extra="ignore")


class RegisterRequest(BaseModel):
    """注册新账号。"""
    full_name: str = Field(..., alias="fullName", description="姓名")
    email: str = Field(..., description="邮箱")
    password: str = Field(..., description="密码")

    model_config = ConfigDict(populate_by_name=True)
