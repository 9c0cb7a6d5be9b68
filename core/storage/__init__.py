"""
스토리지 모듈

사용자 저장소 제공
"""

from core.storage.user_store import LoginResult, UserRow, UserStore

__all__ = [
    "LoginResult",
    "UserRow",
    "UserStore",
]
