"""登录与会话：令牌存储与当前会话（账号接口见 auditoria.auth.service）。"""
from auditoria.auth.credentials import (
    CredentialStore,
    FileCredentialStore,
    KeyringCredentialStore,
    MemoryCredentialStore,
    default_store,
)
from auditoria.auth.session import SessionStore

__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "KeyringCredentialStore",
    "MemoryCredentialStore",
    "default_store",
    "SessionStore",
]
