"""
报告服务类
根据（条目, 过滤条件）生成运行日志报告
"""
# 标准库导包
import logging
from datetime import datetime
from typing import List, Optional

# 项目内部导包
from config import settings
from models import (
    FilterOptions,
    JournalReport,
    ReportRow,
    CATEGORY_LABELS,
    STATUS_LABELS,
    PRIORITY_LABELS
)
from routers.services.entry_stats import summarize, count_by
from routers.services.reference_service import ReferenceSnapshot

# 配置日志
logger = logging.getLogger(__name__)

TIME_FORMAT = "%d.%m.%Y %H:%M"


class ReportService:
    """报告服务类"""

    def __init__(self, snapshot: ReferenceSnapshot):
        """
        初始化报告服务

        Args:
            snapshot: 字典数据快照，用于解析设备/位置/分类名称
        """
        self.snapshot = snapshot

    def _to_row(self, entry) -> ReportRow:
        equipment = self.snapshot.equipment_item(entry.equipment_id)
        location = self.snapshot.location(entry.location_id)
        category_data = self.snapshot.category(entry.category_id)
        return ReportRow(
            id=entry.id,
            timestamp=entry.timestamp,
            category=entry.category,
            category_label=CATEGORY_LABELS.get(entry.category, entry.category),
            title=entry.title,
            description=entry.description,
            author=entry.author,
            status=entry.status,
            status_label=STATUS_LABELS.get(entry.status, entry.status),
            priority=entry.priority,
            priority_label=PRIORITY_LABELS.get(entry.priority, entry.priority),
            equipment=equipment.name if equipment else None,
            location=location.name if location else None,
            category_name=category_data.name if category_data else None,
            cancelled_at=entry.cancelled_at,
            cancelled_by=entry.cancelled_by,
            cancel_reason=entry.cancel_reason
        )

    def build_report(
        self,
        entries: List,
        filters: Optional[FilterOptions],
        generated_by: str,
        title: Optional[str] = None
    ) -> JournalReport:
        """
        生成报告

        报告期间优先取过滤条件中的日期范围，否则取条目的最早/最晚事件时间。

        Args:
            entries: 已过滤的条目（保持调用方给出的顺序）
            filters: 生成这些条目所用的过滤条件
            generated_by: 报告生成人显示名
            title: 报告标题，默认REPORT_TITLE

        Returns:
            JournalReport
        """
        filters = filters or FilterOptions()
        timestamps = [entry.timestamp for entry in entries]

        report = JournalReport(
            title=title or settings.REPORT_TITLE,
            generated_at=datetime.utcnow(),
            generated_by=generated_by,
            period_from=filters.date_from or (min(timestamps) if timestamps else None),
            period_to=filters.date_to or (max(timestamps) if timestamps else None),
            filters=filters.active_filters(),
            stats=summarize(entries),
            by_category=count_by(entries, "category"),
            by_priority=count_by(entries, "priority"),
            rows=[self._to_row(entry) for entry in entries]
        )
        logger.info(f"生成报告: rows={len(report.rows)}, generated_by={generated_by}")
        return report


def _format_time(value: Optional[datetime]) -> str:
    return value.strftime(TIME_FORMAT) if value else "—"


def render_text(report: JournalReport) -> str:
    """
    将报告渲染为纯文本

    Args:
        report: JournalReport

    Returns:
        文本报告
    """
    stats = report.stats
    lines = [
        report.title,
        f"Период: {_format_time(report.period_from)} — {_format_time(report.period_to)}",
        f"Сформирован: {_format_time(report.generated_at)} ({report.generated_by})",
        "",
        f"Всего записей: {stats.total}",
        f"Активные: {stats.active}",
        f"Черновики: {stats.drafts}",
        f"Отмененные: {stats.cancelled}",
        f"Критические: {stats.critical}",
    ]

    if report.by_category:
        lines.append("")
        lines.append("По категориям:")
        for category, count in report.by_category.items():
            lines.append(f"  {CATEGORY_LABELS.get(category, category)}: {count}")

    lines.append("")
    if not report.rows:
        lines.append("Записи не найдены")

    for index, row in enumerate(report.rows, start=1):
        lines.append(
            f"{index}. [{_format_time(row.timestamp)}] {row.title} "
            f"({row.category_label}, {row.priority_label}, {row.status_label})"
        )
        lines.append(f"   {row.description}")
        details = [f"Автор: {row.author}"]
        if row.equipment:
            details.append(f"Оборудование: {row.equipment}")
        if row.location:
            details.append(f"Местоположение: {row.location}")
        lines.append("   " + "; ".join(details))
        if row.status == "cancelled":
            lines.append(
                f"   Отменена {_format_time(row.cancelled_at)} ({row.cancelled_by}): {row.cancel_reason}"
            )

    return "\n".join(lines) + "\n"
