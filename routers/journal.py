"""
运行日志路由
提供条目的创建、查询、激活、撤销及统计API接口
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import (
    UserInfo,
    FilterOptions,
    CreateEntryRequest,
    CancelEntryRequest,
    EntryResponse,
    EntryListResponse,
    EntryDetailResponse,
    EntryOptionsResponse,
    StatsResponse,
    CategoryResponse,
    EquipmentResponse,
    LocationResponse
)
from storage.database import get_session
from routers.services.exceptions import JournalError
from routers.services.journal_service import JournalService
from routers.services.reference_service import ReferenceService, ReferenceSnapshot
from routers.utils import to_http_exception, get_filter_options
from utils import get_current_user

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/journal",
    tags=["运行日志"]
)


def _entry_to_response(entry, snapshot: ReferenceSnapshot) -> EntryResponse:
    """
    将Entry模型转换为EntryResponse，并通过字典快照解析设备/位置/分类

    Args:
        entry: Entry模型实例
        snapshot: 字典数据快照

    Returns:
        EntryResponse对象
    """
    equipment = snapshot.equipment_item(entry.equipment_id)
    location = snapshot.location(entry.location_id)
    category_data = snapshot.category(entry.category_id)

    return EntryResponse(
        id=entry.id,
        category=entry.category,
        title=entry.title,
        description=entry.description,
        timestamp=entry.timestamp,
        author=entry.author,
        status=entry.status,
        priority=entry.priority,
        equipment=EquipmentResponse.model_validate(equipment) if equipment else None,
        location=LocationResponse.model_validate(location) if location else None,
        category_data=CategoryResponse.model_validate(category_data) if category_data else None,
        cancelled_at=entry.cancelled_at,
        cancelled_by=entry.cancelled_by,
        cancel_reason=entry.cancel_reason,
        created_at=entry.created_at,
        updated_at=entry.updated_at
    )


async def _single_entry_response(session: AsyncSession, entry, message: str) -> EntryDetailResponse:
    snapshot = await ReferenceService(session).snapshot()
    return EntryDetailResponse(
        success=True,
        message=message,
        data=_entry_to_response(entry, snapshot)
    )


@router.get("/entries", response_model=EntryListResponse, summary="获取条目列表")
async def get_entries(
    filters: FilterOptions = Depends(get_filter_options),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    获取条目列表（最新事件在前）

    stats为过滤后条目的统计，与返回的列表一致；全部条目的统计见 /journal/stats
    """
    try:
        journal_service = JournalService(session)
        entries, stats = await journal_service.browse(filters)
        snapshot = await journal_service.reference_service.snapshot()

        # 转换为响应格式
        entry_responses = [_entry_to_response(entry, snapshot) for entry in entries]

        return EntryListResponse(
            success=True,
            message="获取成功",
            data=entry_responses,
            total=len(entry_responses),
            stats=stats,
            filters_applied=filters.active_filters()
        )

    except Exception as e:
        logger.error(f"获取条目列表失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取条目列表失败: {str(e)}")


@router.post("/entries", response_model=EntryDetailResponse, summary="创建条目")
async def create_entry(
    request: CreateEntryRequest,
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    创建新的条目，作者为当前登录用户的显示名
    """
    try:
        journal_service = JournalService(session)
        entry = await journal_service.create_entry(
            category=request.category,
            title=request.title,
            description=request.description,
            author=user_info.display_name,
            priority=request.priority,
            timestamp=request.timestamp,
            status=request.status,
            equipment_id=request.equipment_id,
            location_id=request.location_id,
            category_id=request.category_id
        )

        return await _single_entry_response(session, entry, "创建成功")

    except JournalError as e:
        logger.warning(f"创建条目被拒绝: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"创建条目失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"创建条目失败: {str(e)}")


@router.get("/entries/{entry_id}", response_model=EntryDetailResponse, summary="获取条目详情")
async def get_entry(
    entry_id: str,
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    获取单个条目
    """
    try:
        entry = await JournalService(session).get_entry(entry_id)
        return await _single_entry_response(session, entry, "获取成功")

    except JournalError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"获取条目失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取条目失败: {str(e)}")


@router.post("/entries/{entry_id}/cancel", response_model=EntryDetailResponse, summary="撤销条目")
async def cancel_entry(
    entry_id: str,
    request: CancelEntryRequest,
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    撤销条目，撤销人为当前登录用户

    已撤销的条目再次撤销返回409
    """
    try:
        journal_service = JournalService(session)
        entry = await journal_service.cancel_entry(
            entry_id,
            reason=request.reason,
            cancelled_by=user_info.display_name
        )
        return await _single_entry_response(session, entry, "撤销成功")

    except JournalError as e:
        logger.warning(f"撤销条目被拒绝: entry_id={entry_id}, {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"撤销条目失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"撤销条目失败: {str(e)}")


@router.post("/entries/{entry_id}/activate", response_model=EntryDetailResponse, summary="发布草稿")
async def activate_entry(
    entry_id: str,
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    将草稿条目转为active
    """
    try:
        entry = await JournalService(session).activate_entry(entry_id)
        return await _single_entry_response(session, entry, "发布成功")

    except JournalError as e:
        logger.warning(f"发布草稿被拒绝: entry_id={entry_id}, {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"发布草稿失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"发布草稿失败: {str(e)}")


@router.get("/stats", response_model=StatsResponse, summary="获取条目统计")
async def get_stats(
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    统计全部条目：总数、active、草稿、已撤销、active中的critical
    """
    try:
        stats = await JournalService(session).get_stats()
        return StatsResponse(success=True, message="获取成功", data=stats)

    except Exception as e:
        logger.error(f"获取条目统计失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取条目统计失败: {str(e)}")


@router.get("/options", response_model=EntryOptionsResponse, summary="获取新建条目的可选项")
async def get_entry_options(
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    新建条目表单的下拉选项，只包含启用中的字典项
    """
    try:
        reference_service = ReferenceService(session)
        categories = await reference_service.list_references("categories", active_only=True)
        equipment = await reference_service.list_references("equipment", active_only=True)
        locations = await reference_service.list_references("locations", active_only=True)

        return EntryOptionsResponse(
            success=True,
            message="获取成功",
            categories=[CategoryResponse.model_validate(item) for item in categories],
            equipment=[EquipmentResponse.model_validate(item) for item in equipment],
            locations=[LocationResponse.model_validate(item) for item in locations]
        )

    except Exception as e:
        logger.error(f"获取可选项失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取可选项失败: {str(e)}")
