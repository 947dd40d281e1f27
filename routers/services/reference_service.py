"""
字典数据服务类
管理分类、设备、位置字典，并为条目提供按ID解析的引用快照
"""
# 标准库导包
import logging
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.category import Category
from storage.models.equipment import Equipment
from storage.models.location import Location
from storage.repositories.reference_repository import (
    ReferenceRepository,
    CategoryRepository,
    EquipmentRepository,
    LocationRepository
)
from routers.services.exceptions import ValidationError, NotFoundError

# 配置日志
logger = logging.getLogger(__name__)

# 字典类型
REFERENCE_KINDS = ("categories", "equipment", "locations")


@dataclass
class ReferenceSnapshot:
    """字典数据快照，按ID查找"""
    categories: Dict[str, Category] = field(default_factory=dict)
    equipment: Dict[str, Equipment] = field(default_factory=dict)
    locations: Dict[str, Location] = field(default_factory=dict)

    def category(self, category_id: Optional[str]) -> Optional[Category]:
        return self.categories.get(category_id) if category_id else None

    def equipment_item(self, equipment_id: Optional[str]) -> Optional[Equipment]:
        return self.equipment.get(equipment_id) if equipment_id else None

    def location(self, location_id: Optional[str]) -> Optional[Location]:
        return self.locations.get(location_id) if location_id else None


class ReferenceService:
    """字典数据服务类"""

    def __init__(self, session: AsyncSession):
        """
        初始化字典数据服务

        Args:
            session: 数据库会话
        """
        self.session = session
        self.repos: Dict[str, ReferenceRepository] = {
            "categories": CategoryRepository(session),
            "equipment": EquipmentRepository(session),
            "locations": LocationRepository(session),
        }

    def _repo(self, kind: str) -> ReferenceRepository:
        repo = self.repos.get(kind)
        if repo is None:
            raise NotFoundError(f"未知的字典类型: {kind}")
        return repo

    async def snapshot(self) -> ReferenceSnapshot:
        """
        获取全部字典项快照（含已停用项，历史条目仍需解析）

        Returns:
            ReferenceSnapshot
        """
        categories = await self.repos["categories"].list_references()
        equipment = await self.repos["equipment"].list_references()
        locations = await self.repos["locations"].list_references()
        return ReferenceSnapshot(
            categories={item.id: item for item in categories},
            equipment={item.id: item for item in equipment},
            locations={item.id: item for item in locations},
        )

    async def list_references(self, kind: str, active_only: bool = False) -> List:
        """
        获取字典项列表

        Args:
            kind: 字典类型（categories/equipment/locations）
            active_only: 是否只返回启用项（新建条目的可选项）

        Returns:
            字典项列表
        """
        return await self._repo(kind).list_references(active_only=active_only)

    async def get_reference(self, kind: str, reference_id: str):
        """获取单个字典项，不存在时抛出NotFoundError"""
        instance = await self._repo(kind).get_by_id(reference_id)
        if instance is None:
            raise NotFoundError(f"字典项不存在: {kind}/{reference_id}")
        return instance

    async def require_active(self, kind: str, reference_id: Optional[str]):
        """
        校验新建条目引用的字典项存在且处于启用状态

        Args:
            kind: 字典类型
            reference_id: 字典项ID，为空时不校验

        Returns:
            字典项或None

        Raises:
            ValidationError: 字典项不存在或已停用
        """
        if not reference_id:
            return None
        instance = await self._repo(kind).get_active_by_id(reference_id)
        if instance is None:
            raise ValidationError(f"字典项不存在或已停用: {kind}/{reference_id}")
        return instance

    async def create_reference(
        self,
        kind: str,
        name: str,
        description: Optional[str] = None,
        code: Optional[str] = None,
        sort_order: Optional[int] = None
    ):
        """
        创建字典项

        Args:
            kind: 字典类型
            name: 名称
            description: 描述
            code: 分类编码（仅分类，必填且唯一）
            sort_order: 排序顺序（仅分类）

        Returns:
            创建的字典项
        """
        repo = self._repo(kind)
        name = (name or "").strip()
        if not name:
            raise ValidationError("名称不能为空")

        values: Dict[str, Any] = {"name": name, "description": description}
        if kind == "categories":
            code = (code or "").strip()
            if not code:
                raise ValidationError("分类编码不能为空")
            if await repo.get_by_code(code):
                raise ValidationError(f"分类编码已存在: {code}")
            values["code"] = code
            values["sort_order"] = sort_order or 0

        instance = await repo.create(**values)
        logger.info(f"创建字典项: kind={kind}, id={instance.id}, name={name}")
        return instance

    async def update_reference(self, kind: str, reference_id: str, **changes):
        """
        更新字典项，值为None的字段保持不变

        Args:
            kind: 字典类型
            reference_id: 字典项ID
            **changes: name/description/code/sort_order

        Returns:
            更新后的字典项
        """
        repo = self._repo(kind)
        instance = await self.get_reference(kind, reference_id)

        allowed = ("name", "description", "code", "sort_order") if kind == "categories" else ("name", "description")
        values = {key: value for key, value in changes.items() if key in allowed and value is not None}

        if "name" in values:
            values["name"] = values["name"].strip()
            if not values["name"]:
                raise ValidationError("名称不能为空")
        if "code" in values:
            values["code"] = values["code"].strip()
            if not values["code"]:
                raise ValidationError("分类编码不能为空")
        if "code" in values and values["code"] != instance.code:
            existing = await repo.get_by_code(values["code"])
            if existing and existing.id != reference_id:
                raise ValidationError(f"分类编码已存在: {values['code']}")

        if not values:
            return instance

        updated = await repo.update_by_id(reference_id, **values)
        logger.info(f"更新字典项: kind={kind}, id={reference_id}, fields={sorted(values)}")
        return updated

    async def set_active(self, kind: str, reference_id: str, is_active: bool):
        """
        启用/停用字典项

        停用的字典项仍可被已有条目引用，但不再出现在新建条目的可选项中。
        """
        await self.get_reference(kind, reference_id)
        instance = await self._repo(kind).set_active(reference_id, is_active)
        logger.info(f"字典项状态变更: kind={kind}, id={reference_id}, is_active={is_active}")
        return instance
