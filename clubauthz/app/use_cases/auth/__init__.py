"""
Authentication & Authorization Context Use Cases
"""

from .authenticate_api_key_use_case import ApiKeyPrincipal, AuthenticateApiKeyUseCase
from .load_auth_context_use_case import LoadAuthContextUseCase

__all__ = [
    "ApiKeyPrincipal",
    "AuthenticateApiKeyUseCase",
    "LoadAuthContextUseCase",
]
