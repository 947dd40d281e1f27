"""
EntryRepository - 运行日志条目Repository
"""
# 标准库导包
from datetime import datetime
from typing import List, Optional

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.entry import Entry
from storage.repositories.base import BaseRepository


class EntryRepository(BaseRepository[Entry]):
    """运行日志条目Repository"""

    # 最新事件在前，同一时间按创建顺序倒序
    default_ordering = (("timestamp", True), ("created_at", True))

    def __init__(self, session: AsyncSession):
        super().__init__(session, Entry)

    async def list_entries(self) -> List[Entry]:
        """
        获取所有条目

        Returns:
            条目列表（按事件时间倒序）
        """
        return await self.get_all()

    async def transition_status(
        self,
        entry_id: str,
        from_statuses: List[str],
        to_status: str,
        **values
    ) -> Optional[Entry]:
        """
        仅当条目当前状态属于from_statuses时，将其切换为to_status

        Args:
            entry_id: 条目ID
            from_statuses: 允许的当前状态
            to_status: 目标状态
            **values: 同时写入的其他字段（如撤销信息）

        Returns:
            更新后的条目；状态不满足或条目不存在时返回None
        """
        updated = await self.update_where(
            entry_id,
            [Entry.status.in_(from_statuses)],
            status=to_status,
            updated_at=datetime.utcnow(),
            **values
        )
        if not updated:
            return None
        return await self.reload(entry_id)

