"""
ReferenceRepository - 字典数据（分类、设备、位置）通用Repository
"""
# 标准库导包
from typing import Optional, List

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.category import Category
from storage.models.equipment import Equipment
from storage.models.location import Location
from storage.repositories.base import BaseRepository, ModelType


class ReferenceRepository(BaseRepository[ModelType]):
    """字典数据Repository，字典项只停用不删除"""

    default_ordering = (("name", False),)

    async def list_references(self, active_only: bool = False) -> List[ModelType]:
        """
        获取字典项列表

        Args:
            active_only: 是否仅返回启用的字典项

        Returns:
            字典项列表
        """
        filters = {"is_active": True} if active_only else {}
        return await self.query_by_filters(filters=filters)

    async def get_active_by_id(self, id: str) -> Optional[ModelType]:
        """
        获取启用中的字典项

        Args:
            id: 字典项ID

        Returns:
            字典项，不存在或已停用时返回None
        """
        instance = await self.get_by_id(id)
        if instance is None or not instance.is_active:
            return None
        return instance

    async def set_active(self, id: str, is_active: bool) -> Optional[ModelType]:
        """设置字典项启用状态"""
        return await self.update_by_id(id, is_active=is_active)


class CategoryRepository(ReferenceRepository[Category]):
    """分类Repository"""

    default_ordering = (("sort_order", False), ("name", False))

    def __init__(self, session: AsyncSession):
        super().__init__(session, Category)

    async def get_by_code(self, code: str) -> Optional[Category]:
        """
        根据编码获取分类

        Args:
            code: 分类编码

        Returns:
            分类实例或None
        """
        results = await self.query_by_filters(filters={"code": code})
        return results[0] if results else None


class EquipmentRepository(ReferenceRepository[Equipment]):
    """设备Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Equipment)


class LocationRepository(ReferenceRepository[Location]):
    """位置Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Location)
