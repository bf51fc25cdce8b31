from __future__ import annotations

import logging

from fastapi import FastAPI

from .bootstrap import initialize_application
from .env_settings import EnvSettings, get_env
from .log_config import setup_logging
from .routers import auth as auth_router
from .routers import configuration as configuration_router
from .routers import users as users_router
from .services import DirectoryGateway

log = logging.getLogger(__name__)


def create_app(env: EnvSettings | None = None, directory_client: DirectoryGateway | None = None) -> FastAPI:
    """Application factory (`uvicorn --factory adsoft_api.main:create_app`).

    Raises ConfigurationError when key material or bind credentials are
    unusable, so the server refuses to start.
    """
    env = env or get_env()
    setup_logging(level=env.log_level, retention_days=env.log_retention_days, log_dir=env.log_dir)

    components = initialize_application(env, directory_client=directory_client)

    app = FastAPI(title=env.app_name)
    app.state.env = env
    app.state.api_keys = dict(env.api_keys)
    app.state.codec = components.codec
    app.state.directory_service = components.directory_service
    app.state.token_issuer = components.token_issuer

    app.include_router(auth_router.router)
    app.include_router(users_router.router)
    app.include_router(configuration_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    log.info("%s запущен", env.app_name)
    return app
