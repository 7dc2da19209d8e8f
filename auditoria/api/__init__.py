"""后端 HTTP 客户端。"""
from auditoria.api.client import ApiClient, UnauthorizedPolicy, decode, decode_list

__all__ = ["ApiClient", "UnauthorizedPolicy", "decode", "decode_list"]
