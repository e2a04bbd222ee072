from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.auth_service import AuthService
from ..application.services.passwords import PasswordHasher
from ..application.services.tokens import TokenSigner
from ..infrastructure.repositories.user_repository import SQLiteUserRepository
from ..presentation.api.errors import register_error_handlers, register_security_headers
from ..presentation.api.routers import auth as auth_router
from ..presentation.api.routers import users as users_router

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="User Management API", lifespan=_create_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_security_headers(app)
    register_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(users_router.router)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        container: ApplicationContainer = app.state.container  # type: ignore[attr-defined]
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            "database": "SQLite connected",
            "users": container.user_repository.count(),
        }

    return app


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        user_repository = SQLiteUserRepository(settings.database_path)
        auth_service = AuthService(
            user_repository=user_repository,
            password_hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
            token_signer=TokenSigner(
                secret_key=settings.jwt_secret,
                ttl=timedelta(hours=settings.jwt_expires_hours),
            ),
        )

        app.state.container = ApplicationContainer(  # type: ignore[attr-defined]
            settings=settings,
            user_repository=user_repository,
            auth_service=auth_service,
        )
        logger.info("User store ready at %s", settings.database_path)

        try:
            yield
        finally:
            user_repository.close()

    return lifespan
