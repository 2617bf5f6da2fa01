"""
Platform Administration Use Cases
"""

from .list_super_admins_use_case import ListSuperAdminsUseCase
from .seed_super_admin_use_case import SeedSuperAdminUseCase
from .set_user_status_use_case import DeactivateUserUseCase, ReactivateUserUseCase

__all__ = [
    "DeactivateUserUseCase",
    "ListSuperAdminsUseCase",
    "ReactivateUserUseCase",
    "SeedSuperAdminUseCase",
]
