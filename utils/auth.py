"""
认证工具
从请求中解析当前用户，用于给条目署名（author / cancelled_by）
"""
# 标准库导包
import logging
from typing import Optional

# 第三方库导包
from fastapi import Header, HTTPException

# 项目内部导包
from config import settings
from models import UserInfo
from routers.services.auth_service import AuthService

# 配置日志
logger = logging.getLogger(__name__)


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """从Authorization头中取出Bearer令牌"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    x_user_name: Optional[str] = Header(None, alias="X-User-Name")
) -> UserInfo:
    """
    获取当前用户

    优先使用Bearer令牌对应的认证会话；
    开启AUTH_ALLOW_MOCK_USER时（开发阶段），无令牌请求可用X-User-Id/X-User-Name头或mock用户

    Args:
        authorization: Authorization header值
        x_user_id: X-User-Id header值
        x_user_name: X-User-Name header值

    Returns:
        UserInfo对象
    """
    token = get_bearer_token(authorization)
    if token:
        user_info = await AuthService.resolve(token)
        if user_info is None:
            raise HTTPException(status_code=401, detail="登录已过期，请重新登录")
        return user_info

    if not settings.AUTH_ALLOW_MOCK_USER:
        raise HTTPException(status_code=401, detail="未登录")

    if x_user_id:
        return UserInfo(user_id=x_user_id, name=x_user_name)

    # 开发阶段默认返回mock用户
    return UserInfo(
        user_id="mock_user_001",
        name="Mock User"
    )
