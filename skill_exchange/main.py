from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skill_exchange.api.errors import register_exception_handlers
from skill_exchange.api.routes.health import router as health_router
from skill_exchange.api.routes.reviews import router as reviews_router
from skill_exchange.api.routes.skills import router as skills_router
from skill_exchange.config import Settings, build_sqlalchemy_db_url, get_settings, should_create_tables
from skill_exchange.database import Database


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    root.setLevel(level.upper())


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        logger.info("Starting %s v%s (%s)", settings.app_name, settings.version, settings.environment)

        db = Database(build_sqlalchemy_db_url(settings), echo=settings.db_echo)
        if should_create_tables(settings):
            db.create_all()
        app.state.db = db
        try:
            yield
        finally:
            app.state.db = None
            db.dispose()
            logger.info("Shut down %s", settings.app_name)

    application = FastAPI(
        title=settings.app_name,
        description="Community marketplace for skills people offer or seek, with reviews and ratings",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.state.settings = settings

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)

    # Liveness probe answers both at the root and under the API prefix.
    application.include_router(health_router)
    application.include_router(health_router, prefix=settings.api_prefix)

    application.include_router(skills_router, prefix=settings.api_prefix)
    application.include_router(reviews_router, prefix=settings.api_prefix)

    @application.get("/", include_in_schema=False)
    def root() -> dict:
        return {
            "service": settings.app_name,
            "version": settings.version,
            "docs": "/docs",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "skill_exchange.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
