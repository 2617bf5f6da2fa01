"""
Permission Grant Use Cases
"""

from .create_grant_use_case import CreateGrantUseCase
from .list_grants_use_case import ListGrantsUseCase
from .revoke_grant_use_case import RevokeGrantUseCase

__all__ = [
    "CreateGrantUseCase",
    "ListGrantsUseCase",
    "RevokeGrantUseCase",
]
