"""
Entry模型 - 运行日志条目表
"""
# 标准库导包
import uuid
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base


class Entry(Base):
    """运行日志条目表"""

    __tablename__ = "journal_entries"

    # 核心字段
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True, comment="分类：equipment_work/relay_protection/team_permits/emergency/network_outages/other")
    title: Mapped[str] = mapped_column(String(255), nullable=False, comment="标题")
    description: Mapped[str] = mapped_column(Text, nullable=False, comment="事件描述")
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True, comment="事件时间")
    author: Mapped[str] = mapped_column(String(100), nullable=False, comment="作者显示名")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", comment="状态：draft/active/cancelled")
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium", comment="优先级：low/medium/high/critical")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 引用字段（显示时通过引用快照解析）
    equipment_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("equipment.id"), nullable=True, index=True)
    location_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("locations.id"), nullable=True, index=True)
    category_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("categories.id"), nullable=True, index=True)

    # 撤销字段，仅在status=cancelled时同时存在
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, comment="撤销时间")
    cancelled_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="撤销人")
    cancel_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="撤销原因")

    # 复合索引
    __table_args__ = (
        Index("idx_status_timestamp", "status", "timestamp"),
    )

    def __repr__(self):
        return f"<Entry(id={self.id}, category={self.category}, status={self.status}, priority={self.priority})>"
