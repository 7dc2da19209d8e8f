"""令牌的安全存储：固定 (service, account) 下只存一个字符串。

- KeyringCredentialStore：系统钥匙串（macOS Keychain / Windows 凭据管理器 / Secret Service）
- FileCredentialStore：本地 JSON 文件，供无钥匙串的环境使用
- MemoryCredentialStore：进程内，测试用
"""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

import keyring
from keyring.errors import PasswordDeleteError

from auditoria.config import (
    AUTH_DATA_DIR,
    CREDENTIAL_BACKEND,
    KEYCHAIN_ACCOUNT,
    KEYCHAIN_SERVICE,
    ensure_dirs,
)

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """安全存储能力：读 / 写（覆盖）/ 删除一个秘密字符串。"""

    def read(self) -> Optional[str]:
        ...

    def save(self, secret: str) -> None:
        ...

    def delete(self) -> None:
        ...


class KeyringCredentialStore:
    """系统钥匙串后端。"""

    def __init__(self, service: str = KEYCHAIN_SERVICE, account: str = KEYCHAIN_ACCOUNT):
        self.service = service
        self.account = account

    def read(self) -> Optional[str]:
        return keyring.get_password(self.service, self.account)

    def save(self, secret: str) -> None:
        keyring.set_password(self.service, self.account, secret)

    def delete(self) -> None:
        try:
            keyring.delete_password(self.service, self.account)
        except PasswordDeleteError:
            # 本来就没有
            pass


class FileCredentialStore:
    """JSON 文件后端：{service: {account: secret}}。"""
    _filename = "credentials.json"

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        service: str = KEYCHAIN_SERVICE,
        account: str = KEYCHAIN_ACCOUNT,
    ):
        self.base_dir = base_dir or AUTH_DATA_DIR
        self.service = service
        self.account = account
        if base_dir is None:
            ensure_dirs()
        else:
            self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self) -> Path:
        return self.base_dir / self._filename

    def _load(self) -> dict:
        if not self._path().exists():
            return {}
        with open(self._path(), "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: dict) -> None:
        with open(self._path(), "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def read(self) -> Optional[str]:
        return self._load().get(self.service, {}).get(self.account)

    def save(self, secret: str) -> None:
        data = self._load()
        data.setdefault(self.service, {})[self.account] = secret
        self._write(data)

    def delete(self) -> None:
        data = self._load()
        accounts = data.get(self.service, {})
        if self.account not in accounts:
            return
        del accounts[self.account]
        if not accounts:
            data.pop(self.service, None)
        self._write(data)


class MemoryCredentialStore:
    """进程内存储；可通过共享实例模拟「重启后读取」。"""

    def __init__(self, secret: Optional[str] = None):
        self.secret = secret

    def read(self) -> Optional[str]:
        return self.secret

    def save(self, secret: str) -> None:
        self.secret = secret

    def delete(self) -> None:
        self.secret = None


def default_store(backend: Optional[str] = None) -> CredentialStore:
    """按配置选择后端（keyring / file / memory）。"""
    backend = (backend or CREDENTIAL_BACKEND).lower()
    if backend == "file":
        return FileCredentialStore()
    if backend == "memory":
        return MemoryCredentialStore()
    if backend != "keyring":
        logger.warning("[AuditorIA-凭据] 未知的存储后端 %r，改用 keyring", backend)
    return KeyringCredentialStore()
