"""
报告路由
根据过滤条件生成运行日志报告
"""
# 标准库导包
import logging
from typing import Optional

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import UserInfo, FilterOptions, ReportResponse
from storage.database import get_session
from routers.services.journal_service import JournalService
from routers.services.report_service import ReportService, render_text
from routers.utils import get_filter_options
from utils import get_current_user

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/reports",
    tags=["报告"]
)


@router.get("/journal", response_model=ReportResponse, summary="生成运行日志报告")
async def get_journal_report(
    format: str = Query("json", pattern="^(json|text)$", description="报告格式：json/text"),
    title: Optional[str] = Query(None, description="报告标题，默认使用配置中的REPORT_TITLE"),
    filters: FilterOptions = Depends(get_filter_options),
    user_info: UserInfo = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """
    按与条目列表相同的过滤条件生成报告

    format=text时返回纯文本
    """
    try:
        journal_service = JournalService(session)
        entries = await journal_service.list_entries(filters)
        snapshot = await journal_service.reference_service.snapshot()

        report = ReportService(snapshot).build_report(
            entries,
            filters,
            generated_by=user_info.display_name,
            title=title
        )

        if format == "text":
            return PlainTextResponse(render_text(report))

        return ReportResponse(success=True, message="生成成功", data=report)

    except Exception as e:
        logger.error(f"生成报告失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"生成报告失败: {str(e)}")
