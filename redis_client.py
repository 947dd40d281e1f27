# 标准库导包
import json
import logging
import threading
from typing import Optional

# 第三方库导包
import redis.asyncio as redis

# 项目内部导包
from config import settings

logger = logging.getLogger(__name__)

# 全局Redis连接池实例
_redis_pool = None
_redis_pool_lock = threading.Lock()


def get_redis():
    """获取Redis连接实例，支持连接池重建"""
    global _redis_pool

    with _redis_pool_lock:
        if _redis_pool is None:
            logger.info("创建新的Redis连接池...")
            _redis_pool = redis.ConnectionPool.from_url(
                settings.REDIS_URL,
                max_connections=50,
                socket_connect_timeout=10.0,  # 连接超时
                socket_keepalive=True,  # 保持连接
                health_check_interval=15,  # 健康检查间隔
                retry_on_timeout=True,  # 超时重试
                decode_responses=True
            )
            logger.info(f"Redis连接池创建完成，连接地址: {settings.REDIS_URL}")

        return redis.Redis(connection_pool=_redis_pool)


async def close_redis():
    """关闭Redis连接池（应用关闭时调用）"""
    global _redis_pool

    with _redis_pool_lock:
        pool = _redis_pool
        _redis_pool = None
    if pool is not None:
        await pool.disconnect()
        logger.info("Redis连接池已关闭")


# ========== 认证会话相关的Redis操作封装 ==========

def _auth_session_key(token: str) -> str:
    return f"{settings.REDIS_KEY_PREFIXES['AUTH_SESSION']}{token}"


async def get_auth_session(token: str) -> Optional[dict]:
    """
    获取认证会话

    参数:
        token: 会话令牌

    返回:
        会话数据字典，如果不存在或已过期返回None
    """
    r = get_redis()
    data = await r.get(_auth_session_key(token))
    if data:
        return json.loads(data)
    return None


async def set_auth_session(token: str, session_data: dict, ttl: int = None):
    """
    保存认证会话

    参数:
        token: 会话令牌
        session_data: 会话数据（用户信息）
        ttl: 过期时间（秒），默认使用settings.AUTH_SESSION_TTL
    """
    if ttl is None:
        ttl = settings.AUTH_SESSION_TTL
    r = get_redis()

    # 设置数据并添加过期时间
    await r.setex(_auth_session_key(token), ttl, json.dumps(session_data))
    logger.debug(f"认证会话已保存到Redis，用户: {session_data.get('user_id')}，TTL: {ttl}秒")


async def delete_auth_session(token: str) -> bool:
    """
    删除认证会话（退出登录）

    参数:
        token: 会话令牌

    返回:
        会话是否存在
    """
    r = get_redis()
    deleted = await r.delete(_auth_session_key(token))
    return deleted > 0
