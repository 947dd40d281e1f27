"""
数据模型定义
"""
# 标准库导包
from enum import Enum
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone

# 第三方库导包
from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """带时区的时间转换为UTC naive时间（数据库统一存储naive UTC）"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class UserInfo(BaseModel):
    """用户信息模型"""
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        """用于署名的显示名：姓名 > 邮箱 > 用户ID"""
        return self.name or self.email or self.user_id


# ========== 枚举 ==========

class EntryCategory(str, Enum):
    """条目分类"""
    EQUIPMENT_WORK = "equipment_work"
    RELAY_PROTECTION = "relay_protection"
    TEAM_PERMITS = "team_permits"
    EMERGENCY = "emergency"
    NETWORK_OUTAGES = "network_outages"
    OTHER = "other"


class EntryStatus(str, Enum):
    """条目状态"""
    DRAFT = "draft"
    ACTIVE = "active"
    CANCELLED = "cancelled"


class EntryPriority(str, Enum):
    """条目优先级"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 界面与报告使用的显示名称
CATEGORY_LABELS: Dict[str, str] = {
    EntryCategory.EQUIPMENT_WORK.value: "Работы на оборудовании",
    EntryCategory.RELAY_PROTECTION.value: "Релейная защита",
    EntryCategory.TEAM_PERMITS.value: "Допуски бригад",
    EntryCategory.EMERGENCY.value: "Аварийные ситуации",
    EntryCategory.NETWORK_OUTAGES.value: "Отключения в сети",
    EntryCategory.OTHER.value: "Прочее",
}

STATUS_LABELS: Dict[str, str] = {
    EntryStatus.DRAFT.value: "Черновик",
    EntryStatus.ACTIVE.value: "Активная",
    EntryStatus.CANCELLED.value: "Отменена",
}

PRIORITY_LABELS: Dict[str, str] = {
    EntryPriority.LOW.value: "Низкий",
    EntryPriority.MEDIUM.value: "Средний",
    EntryPriority.HIGH.value: "Высокий",
    EntryPriority.CRITICAL.value: "Критический",
}


# ========== 过滤与统计 ==========

class FilterOptions(BaseModel):
    """
    条目过滤条件

    所有字段均可选，未设置（或为空字符串）的字段不做约束，已设置的字段之间为AND关系。
    """
    category: Optional[EntryCategory] = None
    status: Optional[EntryStatus] = None
    priority: Optional[EntryPriority] = None
    date_from: Optional[datetime] = Field(default=None, description="事件时间下限（含）")
    date_to: Optional[datetime] = Field(default=None, description="事件时间上限（含）")
    search_text: Optional[str] = Field(default=None, description="标题或描述包含的文本，不区分大小写")
    equipment_id: Optional[str] = None
    location_id: Optional[str] = None
    category_id: Optional[str] = None

    @field_validator(
        "category", "status", "priority", "search_text",
        "equipment_id", "location_id", "category_id",
        mode="before"
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("date_from", "date_to")
    @classmethod
    def _normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    def active_filters(self) -> Dict[str, Any]:
        """返回已设置的过滤字段"""
        return self.model_dump(exclude_none=True, mode="json")

    def is_empty(self) -> bool:
        return not self.active_filters()


class JournalStats(BaseModel):
    """条目统计"""
    total: int = 0
    active: int = 0
    drafts: int = 0
    cancelled: int = 0
    critical: int = Field(default=0, description="处于active状态的critical条目数")


# ========== 认证相关模型 ==========

class SignInRequest(BaseModel):
    """登录请求模型"""
    user_id: str = Field(..., min_length=1, max_length=100)
    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=200)


class AuthSessionResponse(BaseModel):
    """登录响应模型"""
    success: bool = True
    message: str = "登录成功"
    token: str
    expires_in: int
    user: UserInfo
    display_name: str


class CurrentUserResponse(BaseModel):
    """当前用户响应模型"""
    success: bool = True
    message: str = "获取成功"
    user: UserInfo
    display_name: str


class SimpleResponse(BaseModel):
    """通用操作响应模型"""
    success: bool = True
    message: str


# ========== 字典数据模型 ==========

class CategoryResponse(BaseModel):
    """分类响应模型"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    description: Optional[str] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class EquipmentResponse(BaseModel):
    """设备响应模型"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LocationResponse(BaseModel):
    """位置响应模型"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CreateReferenceRequest(BaseModel):
    """创建字典项请求模型（code/sort_order仅分类使用）"""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    code: Optional[str] = Field(default=None, max_length=50)
    sort_order: Optional[int] = None


class UpdateReferenceRequest(BaseModel):
    """更新字典项请求模型，未设置的字段保持不变"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    sort_order: Optional[int] = None


class ReferenceListResponse(BaseModel):
    """字典项列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[Dict[str, Any]]
    total: int


class ReferenceDetailResponse(BaseModel):
    """字典项详情响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: Dict[str, Any]


# ========== Journal模块相关模型 ==========

class CreateEntryRequest(BaseModel):
    """创建条目请求模型，作者取自当前登录用户"""
    category: str = Field(..., description="分类：equipment_work/relay_protection/team_permits/emergency/network_outages/other")
    title: str = Field(..., max_length=255)
    description: str
    priority: str = Field(default=EntryPriority.MEDIUM.value, description="优先级：low/medium/high/critical")
    timestamp: Optional[datetime] = Field(default=None, description="事件时间，默认为当前时间")
    status: Optional[str] = Field(default=None, description="初始状态：draft/active，默认active")
    equipment_id: Optional[str] = None
    location_id: Optional[str] = None
    category_id: Optional[str] = None


class CancelEntryRequest(BaseModel):
    """撤销条目请求模型"""
    reason: str = Field(..., description="撤销原因")


class EntryResponse(BaseModel):
    """条目响应模型"""
    id: str
    category: str
    title: str
    description: str
    timestamp: datetime
    author: str
    status: str
    priority: str
    equipment: Optional[EquipmentResponse] = None
    location: Optional[LocationResponse] = None
    category_data: Optional[CategoryResponse] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EntryListResponse(BaseModel):
    """条目列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[EntryResponse]
    total: int
    stats: JournalStats = Field(..., description="过滤后条目的统计")
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class EntryDetailResponse(BaseModel):
    """条目详情/创建/撤销响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: EntryResponse


class StatsResponse(BaseModel):
    """统计响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: JournalStats


class EntryOptionsResponse(BaseModel):
    """新建条目表单可选项响应模型"""
    success: bool = True
    message: str = "获取成功"
    categories: List[CategoryResponse]
    equipment: List[EquipmentResponse]
    locations: List[LocationResponse]
    entry_categories: Dict[str, str] = Field(default_factory=lambda: dict(CATEGORY_LABELS))
    priorities: Dict[str, str] = Field(default_factory=lambda: dict(PRIORITY_LABELS))
    statuses: Dict[str, str] = Field(default_factory=lambda: dict(STATUS_LABELS))


# ========== 报告模块相关模型 ==========

class ReportRow(BaseModel):
    """报告中的一行"""
    id: str
    timestamp: datetime
    category: str
    category_label: str
    title: str
    description: str
    author: str
    status: str
    status_label: str
    priority: str
    priority_label: str
    equipment: Optional[str] = None
    location: Optional[str] = None
    category_name: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancel_reason: Optional[str] = None


class JournalReport(BaseModel):
    """运行日志报告"""
    title: str
    generated_at: datetime
    generated_by: str
    period_from: Optional[datetime] = None
    period_to: Optional[datetime] = None
    filters: Dict[str, Any] = Field(default_factory=dict)
    stats: JournalStats
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
    rows: List[ReportRow] = Field(default_factory=list)


class ReportResponse(BaseModel):
    """报告响应模型"""
    success: bool = True
    message: str = "生成成功"
    data: JournalReport
