"""
Services layer
业务逻辑层
"""

from .auth_service import AuthService
from .journal_service import JournalService
from .reference_service import ReferenceService, ReferenceSnapshot
from .report_service import ReportService

__all__ = [
    "AuthService",
    "JournalService",
    "ReferenceService",
    "ReferenceSnapshot",
    "ReportService"
]
