"""
Category模型 - 分类字典表
"""
# 标准库导包
import uuid
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import String, Boolean, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base


class Category(Base):
    """分类字典表"""

    __tablename__ = "categories"

    # 核心字段
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, comment="分类编码")
    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="分类名称")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, comment="是否启用")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="排序顺序")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 扩展字段
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True, comment="分类描述")

    def __repr__(self):
        return f"<Category(id={self.id}, code={self.code}, name={self.name})>"
