"""
运行日志服务类
处理条目的创建、查询、激活与撤销等业务逻辑
"""
# 标准库导包
import logging
from datetime import datetime
from typing import Optional, List, Tuple

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import EntryCategory, EntryPriority, EntryStatus, FilterOptions, JournalStats, to_naive_utc
from storage.models.entry import Entry
from storage.repositories.entry_repository import EntryRepository
from routers.services import lifecycle
from routers.services.entry_filter import apply_filters
from routers.services.entry_stats import summarize
from routers.services.exceptions import ValidationError, NotFoundError, InvalidStateError
from routers.services.reference_service import ReferenceService

# 配置日志
logger = logging.getLogger(__name__)


def _require_text(field_name: str, value: Optional[str]) -> str:
    """校验必填文本字段，返回去除首尾空白后的值"""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field_name}不能为空")
    return text


def _require_enum(field_name: str, enum_cls, value) -> str:
    """校验枚举取值，返回字符串值"""
    if not value:
        raise ValidationError(f"{field_name}不能为空")
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(item.value for item in enum_cls)
        raise ValidationError(f"{field_name}取值非法: {value}，可选值: {allowed}")


class JournalService:
    """运行日志服务类"""

    def __init__(self, session: AsyncSession):
        """
        初始化运行日志服务

        Args:
            session: 数据库会话
        """
        self.session = session
        self.entry_repo = EntryRepository(session)
        self.reference_service = ReferenceService(session)

    async def list_entries(self, filters: Optional[FilterOptions] = None) -> List[Entry]:
        """
        获取条目列表

        Args:
            filters: 过滤条件（可选）

        Returns:
            条目列表（按事件时间倒序）
        """
        entries = await self.entry_repo.list_entries()
        return apply_filters(entries, filters)

    async def browse(self, filters: Optional[FilterOptions] = None) -> Tuple[List[Entry], JournalStats]:
        """
        获取过滤后的条目及其统计（主界面的统计卡片与列表使用同一组条目）

        Args:
            filters: 过滤条件（可选）

        Returns:
            (过滤后的条目列表, 过滤后条目的统计)
        """
        entries = await self.list_entries(filters)
        return entries, summarize(entries)

    async def get_stats(self) -> JournalStats:
        """获取全部条目的统计"""
        entries = await self.entry_repo.list_entries()
        return summarize(entries)

    async def get_entry(self, entry_id: str) -> Entry:
        """
        获取条目详情

        Raises:
            NotFoundError: 条目不存在
        """
        entry = await self.entry_repo.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError(f"条目不存在: {entry_id}")
        return entry

    async def create_entry(
        self,
        category: str,
        title: str,
        description: str,
        author: str,
        priority: str = EntryPriority.MEDIUM.value,
        timestamp: Optional[datetime] = None,
        status: Optional[str] = None,
        equipment_id: Optional[str] = None,
        location_id: Optional[str] = None,
        category_id: Optional[str] = None
    ) -> Entry:
        """
        创建条目

        先完成全部校验再写入，校验失败时不产生任何记录。

        Args:
            category: 分类
            title: 标题
            description: 描述
            author: 作者显示名
            priority: 优先级
            timestamp: 事件时间，默认当前时间
            status: 初始状态（draft/active），默认取DEFAULT_ENTRY_STATUS
            equipment_id: 设备ID（可选，须为启用中的设备）
            location_id: 位置ID（可选，须为启用中的位置）
            category_id: 分类字典ID（可选，须为启用中的分类）

        Returns:
            创建的Entry实例

        Raises:
            ValidationError: 字段缺失或取值非法
        """
        values = {
            "title": _require_text("标题", title),
            "description": _require_text("描述", description),
            "author": _require_text("作者", author),
            "category": _require_enum("分类", EntryCategory, category),
            "priority": _require_enum("优先级", EntryPriority, priority),
            "status": lifecycle.resolve_initial_status(status, settings.DEFAULT_ENTRY_STATUS),
            "timestamp": to_naive_utc(timestamp) or datetime.utcnow(),
        }

        # 解析字典引用，只允许启用中的字典项
        equipment = await self.reference_service.require_active("equipment", equipment_id)
        location = await self.reference_service.require_active("locations", location_id)
        category_data = await self.reference_service.require_active("categories", category_id)
        values["equipment_id"] = equipment.id if equipment else None
        values["location_id"] = location.id if location else None
        values["category_id"] = category_data.id if category_data else None

        entry = await self.entry_repo.create(**values)

        logger.info(
            f"创建条目成功: entry_id={entry.id}, category={entry.category}, "
            f"priority={entry.priority}, status={entry.status}, author={entry.author}"
        )
        return entry

    async def activate_entry(self, entry_id: str) -> Entry:
        """
        草稿条目转为active

        Raises:
            NotFoundError: 条目不存在
            InvalidStateError: 条目不是草稿
        """
        entry = await self.get_entry(entry_id)
        lifecycle.ensure_transition(entry.status, EntryStatus.ACTIVE.value)

        updated = await self.entry_repo.transition_status(
            entry_id,
            lifecycle.sources_for(EntryStatus.ACTIVE.value),
            EntryStatus.ACTIVE.value
        )
        if updated is None:
            await self._raise_lost_transition(entry_id, EntryStatus.ACTIVE.value)

        logger.info(f"条目已激活: entry_id={entry_id}")
        return updated

    async def cancel_entry(self, entry_id: str, reason: str, cancelled_by: str) -> Entry:
        """
        撤销条目

        撤销是单向的，已撤销的条目再次撤销总是失败，不会静默成功。

        Args:
            entry_id: 条目ID
            reason: 撤销原因
            cancelled_by: 撤销人显示名

        Returns:
            撤销后的Entry实例

        Raises:
            NotFoundError: 条目不存在
            InvalidStateError: 条目已撤销
            ValidationError: 撤销原因或撤销人为空
        """
        entry = await self.get_entry(entry_id)
        lifecycle.ensure_transition(entry.status, EntryStatus.CANCELLED.value)

        reason = _require_text("撤销原因", reason)
        cancelled_by = _require_text("撤销人", cancelled_by)

        updated = await self.entry_repo.transition_status(
            entry_id,
            lifecycle.sources_for(EntryStatus.CANCELLED.value),
            EntryStatus.CANCELLED.value,
            cancelled_at=datetime.utcnow(),
            cancelled_by=cancelled_by,
            cancel_reason=reason
        )
        if updated is None:
            await self._raise_lost_transition(entry_id, EntryStatus.CANCELLED.value)

        logger.info(f"条目已撤销: entry_id={entry_id}, cancelled_by={cancelled_by}, reason={reason}")
        return updated

    async def _raise_lost_transition(self, entry_id: str, target: str):
        """条件更新未命中：条目在读取之后被删除或被其他会话改变了状态"""
        current = await self.entry_repo.reload(entry_id)
        if current is None:
            raise NotFoundError(f"条目不存在: {entry_id}")
        lifecycle.ensure_transition(current.status, target)
        raise InvalidStateError(f"条目状态已变更: {entry_id}, status={current.status}")
