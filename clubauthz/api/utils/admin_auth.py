"""
Shared-secret Authentication

Service-to-service callers (identity layer, scheduler) authenticate with
configured secrets instead of user JWTs.
"""

import hmac
import logging

from fastapi import Header, status

from clubauthz.api.error import ClientError, ServerError
from clubauthz.libs.result import Error
from config import ApplicationConfig

logger = logging.getLogger(__name__)


def _matches(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used by the identity layer to push SSO group claims at login.

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key or not _matches(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY):
        raise ClientError(
            Error("UNAUTHORIZED", "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return True


async def verify_cron_secret(authorization: str = Header(None)):
    """
    Verify the scheduler's "Authorization: Bearer <CRON_SECRET>" header.

    Raises:
        ServerError: when no secret is configured
        ClientError: 401 if the header is missing or wrong
    """
    secret = ApplicationConfig.CRON_SECRET
    if not secret:
        logger.error("CRON_SECRET is not configured; refusing scheduled job")
        raise ServerError(Error("CRON_NOT_CONFIGURED", "Cron secret not configured"))

    if not authorization or not _matches(authorization, f"Bearer {secret}"):
        raise ClientError(
            Error("UNAUTHORIZED", "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return True
