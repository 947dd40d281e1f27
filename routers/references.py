"""
字典数据路由
分类、设备、位置字典的查询、创建、修改、启用/停用
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import (
    UserInfo,
    CategoryResponse,
    EquipmentResponse,
    LocationResponse,
    CreateReferenceRequest,
    UpdateReferenceRequest,
    ReferenceListResponse,
    ReferenceDetailResponse
)
from storage.database import get_session
from routers.services.exceptions import JournalError
from routers.services.reference_service import ReferenceService
from routers.utils import to_http_exception
from utils import get_current_user

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/references",
    tags=["字典管理"]
)

# 字典类型 -> 响应模型
RESPONSE_MODELS = {
    "categories": CategoryResponse,
    "equipment": EquipmentResponse,
    "locations": LocationResponse,
}

KIND_PATTERN = "^(categories|equipment|locations)$"


def _reference_to_dict(kind: str, instance) -> dict:
    """将字典项模型转换为可序列化的字典"""
    return RESPONSE_MODELS[kind].model_validate(instance).model_dump(mode="json")


@router.get("/{kind}", response_model=ReferenceListResponse, summary="获取字典项列表")
async def list_references(
    kind: str = Path(..., pattern=KIND_PATTERN, description="字典类型：categories/equipment/locations"),
    active_only: bool = Query(False, description="是否只返回启用项"),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    获取字典项列表，分类按sort_order排序，其余按名称排序
    """
    try:
        items = await ReferenceService(session).list_references(kind, active_only=active_only)
        data = [_reference_to_dict(kind, item) for item in items]
        return ReferenceListResponse(success=True, message="获取成功", data=data, total=len(data))

    except JournalError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"获取字典项列表失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取字典项列表失败: {str(e)}")


@router.post("/{kind}", response_model=ReferenceDetailResponse, summary="创建字典项")
async def create_reference(
    request: CreateReferenceRequest,
    kind: str = Path(..., pattern=KIND_PATTERN),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    创建字典项，分类必须提供唯一的code
    """
    try:
        instance = await ReferenceService(session).create_reference(
            kind,
            name=request.name,
            description=request.description,
            code=request.code,
            sort_order=request.sort_order
        )
        return ReferenceDetailResponse(success=True, message="创建成功", data=_reference_to_dict(kind, instance))

    except JournalError as e:
        logger.warning(f"创建字典项被拒绝: kind={kind}, {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"创建字典项失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"创建字典项失败: {str(e)}")


@router.put("/{kind}/{reference_id}", response_model=ReferenceDetailResponse, summary="修改字典项")
async def update_reference(
    reference_id: str,
    request: UpdateReferenceRequest,
    kind: str = Path(..., pattern=KIND_PATTERN),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    修改字典项，未提交的字段保持不变
    """
    try:
        instance = await ReferenceService(session).update_reference(
            kind,
            reference_id,
            **request.model_dump(exclude_none=True)
        )
        return ReferenceDetailResponse(success=True, message="修改成功", data=_reference_to_dict(kind, instance))

    except JournalError as e:
        logger.warning(f"修改字典项被拒绝: kind={kind}, id={reference_id}, {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"修改字典项失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"修改字典项失败: {str(e)}")


@router.post("/{kind}/{reference_id}/deactivate", response_model=ReferenceDetailResponse, summary="停用字典项")
async def deactivate_reference(
    reference_id: str,
    kind: str = Path(..., pattern=KIND_PATTERN),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    停用字典项：已有条目仍显示该字典项，新建条目不再可选
    """
    try:
        instance = await ReferenceService(session).set_active(kind, reference_id, False)
        return ReferenceDetailResponse(success=True, message="停用成功", data=_reference_to_dict(kind, instance))

    except JournalError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"停用字典项失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"停用字典项失败: {str(e)}")


@router.post("/{kind}/{reference_id}/activate", response_model=ReferenceDetailResponse, summary="启用字典项")
async def activate_reference(
    reference_id: str,
    kind: str = Path(..., pattern=KIND_PATTERN),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    重新启用字典项
    """
    try:
        instance = await ReferenceService(session).set_active(kind, reference_id, True)
        return ReferenceDetailResponse(success=True, message="启用成功", data=_reference_to_dict(kind, instance))

    except JournalError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"启用字典项失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"启用字典项失败: {str(e)}")
