"""
SSO Use Cases
"""

from .sync_sso_roles_use_case import SyncSsoRolesUseCase
from .update_sso_config_use_case import UpdateSsoConfigUseCase

__all__ = [
    "SyncSsoRolesUseCase",
    "UpdateSsoConfigUseCase",
]
