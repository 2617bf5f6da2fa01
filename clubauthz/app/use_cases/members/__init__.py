"""
Club Membership Use Cases
"""

from .add_member_use_case import AddMemberUseCase
from .update_member_roles_use_case import UpdateMemberRolesUseCase

__all__ = [
    "AddMemberUseCase",
    "UpdateMemberRolesUseCase",
]
