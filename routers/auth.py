"""
认证路由
登录、退出、获取当前用户
"""
# 标准库导包
import logging
from typing import Optional

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Header

# 项目内部导包
from config import settings
from models import (
    UserInfo,
    SignInRequest,
    AuthSessionResponse,
    CurrentUserResponse,
    SimpleResponse
)
from routers.services.auth_service import AuthService
from utils import get_current_user, get_bearer_token

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/auth",
    tags=["认证"]
)


@router.post("/sign-in", response_model=AuthSessionResponse, summary="登录")
async def sign_in(request: SignInRequest):
    """
    创建认证会话，返回Bearer令牌

    身份校验由外部认证服务完成，这里只保存会话
    """
    try:
        user_info = UserInfo(user_id=request.user_id, name=request.name, email=request.email)
        token = await AuthService.sign_in(user_info)
        return AuthSessionResponse(
            success=True,
            message="登录成功",
            token=token,
            expires_in=settings.AUTH_SESSION_TTL,
            user=user_info,
            display_name=user_info.display_name
        )

    except Exception as e:
        logger.error(f"登录失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"登录失败: {str(e)}")


@router.post("/sign-out", response_model=SimpleResponse, summary="退出登录")
async def sign_out(authorization: Optional[str] = Header(None)):
    """
    删除当前令牌对应的认证会话
    """
    token = get_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="未登录")

    try:
        await AuthService.sign_out(token)
        return SimpleResponse(success=True, message="已退出登录")

    except Exception as e:
        logger.error(f"退出登录失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"退出登录失败: {str(e)}")


@router.get("/me", response_model=CurrentUserResponse, summary="获取当前用户")
async def get_me(user_info: UserInfo = Depends(get_current_user)):
    """
    返回当前用户及其显示名（条目署名使用）
    """
    return CurrentUserResponse(
        success=True,
        message="获取成功",
        user=user_info,
        display_name=user_info.display_name
    )
