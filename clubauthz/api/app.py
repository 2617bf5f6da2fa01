import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


def _error_ref() -> str:
    return uuid.uuid4().hex[:8]


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    ref = _error_ref()
    error_dict = {"code": exc.base_error.code, "message": "Internal server error", "ref": ref}
    logger.error(f"Server error ref={ref}: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    ref = _error_ref()
    logger.error(f"Unhandled error ref={ref} on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error", "ref": ref}},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    from sqlmodel import SQLModel

    from clubauthz.depends import audit_recorder, engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    # Let scheduled audit writes land before the process exits
    await audit_recorder.drain()


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Club Authorization API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from clubauthz.api.routes import (
        admin,
        api_keys,
        audit,
        context,
        cron,
        grants,
        health_check,
        me,
        members,
        sso,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(me.router, prefix=prefix, tags=["Me"])
    app.include_router(context.router, prefix=prefix, tags=["Context"])
    app.include_router(grants.router, prefix=prefix, tags=["Permission Grants"])
    app.include_router(members.router, prefix=prefix, tags=["Members"])
    app.include_router(audit.router, prefix=prefix, tags=["Audit"])
    app.include_router(sso.router, prefix=prefix, tags=["SSO"])
    app.include_router(api_keys.router, prefix=prefix, tags=["API Keys"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])
    app.include_router(cron.router, prefix=prefix, tags=["Cron"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
