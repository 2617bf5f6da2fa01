"""
Audit Log Use Cases
"""

from .export_audit_logs_use_case import ExportAuditLogsUseCase
from .get_audit_logs_use_case import GetAuditLogsUseCase
from .purge_audit_logs_use_case import PurgeAuditLogsUseCase

__all__ = [
    "ExportAuditLogsUseCase",
    "GetAuditLogsUseCase",
    "PurgeAuditLogsUseCase",
]
