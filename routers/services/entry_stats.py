"""
条目统计
"""
# 标准库导包
from collections import Counter
from typing import Iterable, Dict

# 项目内部导包
from models import EntryPriority, EntryStatus, JournalStats


def summarize(entries: Iterable) -> JournalStats:
    """
    统计条目数量

    critical只统计处于active状态的critical条目，草稿和已撤销的不计入。

    Args:
        entries: 条目序列

    Returns:
        JournalStats
    """
    by_status: Counter = Counter()
    critical = 0
    for entry in entries:
        by_status[entry.status] += 1
        if entry.priority == EntryPriority.CRITICAL.value and entry.status == EntryStatus.ACTIVE.value:
            critical += 1

    return JournalStats(
        total=sum(by_status.values()),
        active=by_status[EntryStatus.ACTIVE.value],
        drafts=by_status[EntryStatus.DRAFT.value],
        cancelled=by_status[EntryStatus.CANCELLED.value],
        critical=critical
    )


def count_by(entries: Iterable, field_name: str) -> Dict[str, int]:
    """按字段取值计数，保持首次出现的顺序"""
    counts: Dict[str, int] = {}
    for entry in entries:
        key = getattr(entry, field_name)
        counts[key] = counts.get(key, 0) + 1
    return counts
