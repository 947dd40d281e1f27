"""
条目生命周期
draft -> active -> cancelled，或 draft -> cancelled；cancelled为终态
"""
# 标准库导包
import logging
from typing import Dict, FrozenSet

# 项目内部导包
from models import EntryStatus
from routers.services.exceptions import InvalidStateError, ValidationError

# 配置日志
logger = logging.getLogger(__name__)

# 创建时允许的初始状态
INITIAL_STATUSES: FrozenSet[str] = frozenset({EntryStatus.DRAFT.value, EntryStatus.ACTIVE.value})

# 终态
TERMINAL_STATUSES: FrozenSet[str] = frozenset({EntryStatus.CANCELLED.value})

# 状态流转表：当前状态 -> 允许的目标状态
TRANSITIONS: Dict[str, FrozenSet[str]] = {
    EntryStatus.DRAFT.value: frozenset({EntryStatus.ACTIVE.value, EntryStatus.CANCELLED.value}),
    EntryStatus.ACTIVE.value: frozenset({EntryStatus.CANCELLED.value}),
    EntryStatus.CANCELLED.value: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    """判断状态流转是否合法"""
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """
    校验状态流转

    Args:
        current: 当前状态
        target: 目标状态

    Raises:
        InvalidStateError: 流转不合法
    """
    if can_transition(current, target):
        return

    if current in TERMINAL_STATUSES:
        message = f"条目已处于终态{current}，不能再变更为{target}"
    else:
        message = f"不允许的状态流转: {current} -> {target}"
    logger.warning(message)
    raise InvalidStateError(message)


def sources_for(target: str) -> list:
    """返回可以流转到target的所有状态"""
    return sorted(state for state, targets in TRANSITIONS.items() if target in targets)


def resolve_initial_status(requested: str = None, default: str = EntryStatus.ACTIVE.value) -> str:
    """
    确定新建条目的初始状态

    Args:
        requested: 调用方请求的状态，为空时使用默认值
        default: 默认状态

    Returns:
        初始状态

    Raises:
        ValidationError: 请求的状态不能作为初始状态
    """
    status = requested or default
    if status not in INITIAL_STATUSES:
        raise ValidationError(f"新建条目的状态只能是draft或active，收到: {status}")
    return status
