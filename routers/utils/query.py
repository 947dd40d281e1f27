"""
查询参数解析
"""
# 标准库导包
from typing import Optional

# 第三方库导包
from fastapi import HTTPException, Query
from pydantic import ValidationError as PydanticValidationError

# 项目内部导包
from models import FilterOptions


def get_filter_options(
    category: Optional[str] = Query(None, description="分类"),
    status: Optional[str] = Query(None, description="状态：draft/active/cancelled"),
    priority: Optional[str] = Query(None, description="优先级：low/medium/high/critical"),
    date_from: Optional[str] = Query(None, description="事件时间下限（含），ISO 8601"),
    date_to: Optional[str] = Query(None, description="事件时间上限（含），ISO 8601"),
    search_text: Optional[str] = Query(None, description="标题或描述中的文本"),
    equipment_id: Optional[str] = Query(None, description="设备ID"),
    location_id: Optional[str] = Query(None, description="位置ID"),
    category_id: Optional[str] = Query(None, description="分类字典ID")
) -> FilterOptions:
    """
    从查询参数构建过滤条件

    空字符串视为未设置，便于前端直接提交表单状态
    """
    try:
        return FilterOptions(
            category=category,
            status=status,
            priority=priority,
            date_from=date_from or None,
            date_to=date_to or None,
            search_text=search_text,
            equipment_id=equipment_id,
            location_id=location_id,
            category_id=category_id
        )
    except PydanticValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "ValidationError", "message": f"过滤条件非法: {e.error_count()}处错误", "fields": [
                ".".join(str(part) for part in error["loc"]) for error in e.errors()
            ]}
        )
