"""
基础Repository类
"""
# 标准库导包
from typing import TypeVar, Generic, Optional, List, Dict, Any, Sequence
from abc import ABC

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_

# 项目内部导包
from storage.database import Base

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """基础Repository类，提供通用的CRUD操作（不提供物理删除）"""

    # 默认排序字段及方向，子类按需覆盖，如 [("timestamp", True)]
    default_ordering: Sequence[tuple] = ()

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        根据ID获取单条记录

        Args:
            id: 记录ID

        Returns:
            模型实例或None
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[ModelType]:
        """按默认排序获取所有记录"""
        return await self.query_by_filters(filters={})

    async def create(self, **kwargs) -> ModelType:
        """
        创建新记录

        Args:
            **kwargs: 模型字段值

        Returns:
            创建的模型实例
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_by_id(self, id: str, **kwargs) -> Optional[ModelType]:
        """
        根据ID更新记录

        Args:
            id: 记录ID
            **kwargs: 要更新的字段值

        Returns:
            更新后的模型实例，记录不存在时返回None
        """
        updated = await self.update_where(id, [], **kwargs)
        if not updated:
            return None
        return await self.reload(id)

    async def update_where(self, id: str, conditions: List, **kwargs) -> bool:
        """
        带条件的更新（比较并设置）

        UPDATE ... WHERE id = :id AND <conditions>，由数据库保证原子性，
        并发的两个请求中最多只有一个能命中条件。

        Args:
            id: 记录ID
            conditions: 额外的WHERE条件列表
            **kwargs: 要更新的字段值

        Returns:
            是否有记录被更新
        """
        # MySQL不支持RETURNING子句，所以通过rowcount判断是否命中
        result = await self.session.execute(
            update(self.model)
            .where(and_(self.model.id == id, *conditions))
            .values(**kwargs)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def reload(self, id: str) -> Optional[ModelType]:
        """重新查询记录并刷新会话中的实例"""
        instance = await self.get_by_id(id)
        if instance:
            await self.session.refresh(instance)
        return instance

    def _build_filter_conditions(self, filters: Dict[str, Any]) -> List:
        """
        构建过滤条件

        Args:
            filters: 过滤条件字典，值可以是列表（IN）或等值

        Returns:
            条件列表
        """
        conditions = []

        for key, value in filters.items():
            if not hasattr(self.model, key):
                continue

            column = getattr(self.model, key)

            if isinstance(value, (list, tuple)):
                # IN 条件
                conditions.append(column.in_(value))
            else:
                # 等于条件
                conditions.append(column == value)

        return conditions

    async def query_by_filters(
        self,
        filters: Dict[str, Any],
        ordering: Optional[Sequence[tuple]] = None
    ) -> List[ModelType]:
        """
        根据过滤条件查询记录

        Args:
            filters: 过滤条件字典
            ordering: 排序字段列表 [(字段名, 是否降序)]，默认使用default_ordering

        Returns:
            模型实例列表
        """
        conditions = self._build_filter_conditions(filters)
        query = select(self.model)

        if conditions:
            query = query.where(and_(*conditions))

        for field_name, descending in (ordering if ordering is not None else self.default_ordering):
            column = getattr(self.model, field_name)
            query = query.order_by(column.desc() if descending else column.asc())

        result = await self.session.execute(query)
        return list(result.scalars().all())
