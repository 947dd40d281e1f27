"""
Utils layer
工具函数层
"""

from .auth import get_current_user, get_bearer_token

__all__ = ["get_current_user", "get_bearer_token"]
