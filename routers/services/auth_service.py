"""
认证会话服务类
处理登录、退出、令牌解析
"""
# 标准库导包
import logging
import uuid
from typing import Optional

# 项目内部导包
from config import settings
from models import UserInfo
from redis_client import (
    get_auth_session,
    set_auth_session,
    delete_auth_session
)

# 配置日志
logger = logging.getLogger(__name__)


class AuthService:
    """认证会话服务类"""

    @staticmethod
    async def sign_in(user_info: UserInfo) -> str:
        """
        创建认证会话

        Args:
            user_info: 用户信息

        Returns:
            会话令牌
        """
        token = uuid.uuid4().hex
        await set_auth_session(token, user_info.model_dump(), settings.AUTH_SESSION_TTL)
        logger.info(f"用户登录: user_id={user_info.user_id}, display_name={user_info.display_name}")
        return token

    @staticmethod
    async def resolve(token: str) -> Optional[UserInfo]:
        """
        根据令牌获取用户

        Args:
            token: 会话令牌

        Returns:
            UserInfo，令牌无效或过期时返回None
        """
        session_data = await get_auth_session(token)
        if not session_data:
            return None
        return UserInfo(**session_data)

    @staticmethod
    async def sign_out(token: str) -> bool:
        """
        退出登录

        Returns:
            会话是否存在
        """
        existed = await delete_auth_session(token)
        logger.info(f"用户退出: existed={existed}")
        return existed
