from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, Header, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.adapter.services.audit_recorder import BackgroundAuditRecorder
from clubauthz.adapter.services.notification_publisher import LoggingNotificationPublisher
from clubauthz.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from clubauthz.api.error import ClientError
from clubauthz.api.utils.jwt import verify_jwt
from clubauthz.app.services.audit_recorder import AuditRecorder, ClientInfo
from clubauthz.app.services.auth_context import AuthContext, ContextHint
from clubauthz.app.services.notifications import NotificationPublisher
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.auth import AuthenticateApiKeyUseCase, LoadAuthContextUseCase
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import ContextScope
from clubauthz.libs.result import Error
from config import ApplicationConfig

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

audit_recorder = BackgroundAuditRecorder(
    AsyncSessionLocal,
    retries=ApplicationConfig.AUDIT_WRITE_RETRIES,
    retry_delay=ApplicationConfig.AUDIT_RETRY_DELAY_SECONDS,
)
notification_publisher = LoggingNotificationPublisher()

security = HTTPBearer(auto_error=False)


def _unauthorized() -> ClientError:
    # Same body for every authentication failure
    return ClientError(
        Error("UNAUTHORIZED", "Unauthorized"), status_code=status.HTTP_401_UNAUTHORIZED
    )


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_audit_recorder() -> AuditRecorder:
    return audit_recorder


def get_notification_publisher() -> NotificationPublisher:
    return notification_publisher


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_client_info(request: Request) -> ClientInfo:
    return ClientInfo.from_request(request)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> UUID:
    """
    Dependency to extract the principal from the bearer JWT.

    The user is reloaded from storage so a ban takes effect immediately.

    Raises:
        ClientError: generic 401 for a missing, invalid or expired token and
        for unknown or banned users
    """
    if credentials is None:
        raise _unauthorized()
    payload = verify_jwt(credentials.credentials)
    if payload is None or "sub" not in payload:
        raise _unauthorized()
    try:
        user_id = UUID(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized()

    async with uow:
        user = await uow.users.get_by_id(user_id)
        if user is None or user.is_blocked(clock()):
            raise _unauthorized()
    return user_id


def _context_hint(request: Request, x_club_id: Optional[str]) -> Optional[ContextHint]:
    if x_club_id:
        try:
            return ContextHint(ContextScope.club, UUID(x_club_id))
        except ValueError:
            return None
    return ContextHint.parse(request.cookies.get(ApplicationConfig.CONTEXT_COOKIE_NAME))


async def get_auth_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_api_key: Optional[str] = Header(None),
    x_club_id: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> AuthContext:
    """
    Resolve who is calling, in which tenant, with what ability.

    Accepts a bearer JWT (context from X-Club-Id or the context cookie) or
    an X-API-Key (context pinned to the key's club).
    """
    client = ClientInfo.from_request(request)
    api_key_id = None

    if x_api_key:
        key_result = await AuthenticateApiKeyUseCase(uow, clock).execute(x_api_key)
        if key_result.is_err():
            raise _unauthorized()
        principal = key_result.value
        user_id = principal.user_id
        hint = ContextHint(ContextScope.club, principal.club_id)
        pinned = True
        api_key_id = principal.key_id
    else:
        if credentials is None:
            raise _unauthorized()
        payload = verify_jwt(credentials.credentials)
        if payload is None or "sub" not in payload:
            raise _unauthorized()
        try:
            user_id = UUID(payload["sub"])
        except (TypeError, ValueError):
            raise _unauthorized()
        hint = _context_hint(request, x_club_id)
        pinned = False

    result = await LoadAuthContextUseCase(uow, clock).execute(
        user_id, hint=hint, pinned=pinned, client=client, api_key_id=api_key_id
    )
    if result.is_err():
        raise _unauthorized()
    return result.value
