"""
Router utils
路由层工具函数
"""

from .errors import to_http_exception
from .query import get_filter_options

__all__ = ["to_http_exception", "get_filter_options"]
