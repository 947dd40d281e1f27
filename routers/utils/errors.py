"""
业务异常到HTTP错误的转换
"""
# 第三方库导包
from fastapi import HTTPException

# 项目内部导包
from routers.services.exceptions import (
    JournalError,
    ValidationError,
    NotFoundError,
    InvalidStateError
)

# 异常类型 -> HTTP状态码
STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    InvalidStateError: 409,
}


def to_http_exception(error: JournalError) -> HTTPException:
    """
    将业务异常转换为HTTPException

    Args:
        error: 业务异常

    Returns:
        HTTPException，detail中包含错误类型和信息
    """
    status_code = STATUS_CODES.get(type(error), 400)
    return HTTPException(
        status_code=status_code,
        detail={"error": type(error).__name__, "message": error.message}
    )
