"""
API Key Use Cases
"""

from .create_api_key_use_case import CreateApiKeyUseCase
from .list_api_keys_use_case import ListApiKeysUseCase
from .revoke_api_key_use_case import RevokeApiKeyUseCase

__all__ = [
    "CreateApiKeyUseCase",
    "ListApiKeysUseCase",
    "RevokeApiKeyUseCase",
]
