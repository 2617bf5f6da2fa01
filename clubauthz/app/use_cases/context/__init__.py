"""
Tenant Context Use Cases
"""

from .list_available_contexts_use_case import ListAvailableContextsUseCase
from .select_context_use_case import SelectContextUseCase

__all__ = [
    "ListAvailableContextsUseCase",
    "SelectContextUseCase",
]
