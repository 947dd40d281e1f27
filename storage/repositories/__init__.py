"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository
from .entry_repository import EntryRepository
from .reference_repository import (
    ReferenceRepository,
    CategoryRepository,
    EquipmentRepository,
    LocationRepository
)

__all__ = [
    "BaseRepository",
    "EntryRepository",
    "ReferenceRepository",
    "CategoryRepository",
    "EquipmentRepository",
    "LocationRepository",
]
