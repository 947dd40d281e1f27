"""
条目过滤
纯函数，不修改输入，输出保持输入的相对顺序
"""
# 标准库导包
from typing import Iterable, List, Optional

# 项目内部导包
from models import FilterOptions


def _enum_value(value) -> Optional[str]:
    return value.value if hasattr(value, "value") else value


def matches_search(entry, search_text: str) -> bool:
    """标题或描述中包含search_text（不区分大小写）"""
    needle = search_text.casefold()
    return needle in (entry.title or "").casefold() or needle in (entry.description or "").casefold()


def matches(entry, filters: FilterOptions) -> bool:
    """
    判断单个条目是否满足全部过滤条件

    Args:
        entry: 条目（Entry模型或具有相同属性的对象）
        filters: 过滤条件

    Returns:
        是否满足
    """
    if filters.category is not None and entry.category != _enum_value(filters.category):
        return False
    if filters.status is not None and entry.status != _enum_value(filters.status):
        return False
    if filters.priority is not None and entry.priority != _enum_value(filters.priority):
        return False

    # 没有对应引用的条目不匹配非空的引用过滤
    if filters.equipment_id is not None and entry.equipment_id != filters.equipment_id:
        return False
    if filters.location_id is not None and entry.location_id != filters.location_id:
        return False
    if filters.category_id is not None and entry.category_id != filters.category_id:
        return False

    if filters.date_from is not None and entry.timestamp < filters.date_from:
        return False
    if filters.date_to is not None and entry.timestamp > filters.date_to:
        return False

    if filters.search_text is not None and not matches_search(entry, filters.search_text):
        return False

    return True


def apply_filters(entries: Iterable, filters: Optional[FilterOptions] = None) -> List:
    """
    按过滤条件筛选条目

    Args:
        entries: 条目序列
        filters: 过滤条件，为空时原样返回

    Returns:
        筛选后的条目列表
    """
    if filters is None or filters.is_empty():
        return list(entries)
    return [entry for entry in entries if matches(entry, filters)]
