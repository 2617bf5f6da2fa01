"""
Scheduled Maintenance Use Cases
"""

from .expire_grants_use_case import ExpireGrantsResponse, ExpireGrantsUseCase

__all__ = [
    "ExpireGrantsResponse",
    "ExpireGrantsUseCase",
]
