"""
Storage models package.
"""
# 项目内部导包
from .category import Category
from .equipment import Equipment
from .location import Location
from .entry import Entry

__all__ = [
    "Category",
    "Equipment",
    "Location",
    "Entry",
]
