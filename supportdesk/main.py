import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from supportdesk.core.backend import Backend, build_backend
from supportdesk.core.config import settings
from supportdesk.core.errors import AppError, NotFoundError, RemoteOperationError
from supportdesk.core.logging_config import setup_logging
from supportdesk.api.routes.auth import router as auth_router
from supportdesk.api.routes.businesses import router as businesses_router
from supportdesk.api.routes.dashboard import router as dashboard_router
from supportdesk.api.routes.navigation import router as navigation_router
from supportdesk.api.routes.settings import router as settings_router
from supportdesk.api.routes.tickets import router as tickets_router
from supportdesk.models import Base

logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: AppError):
    if isinstance(exc, RemoteOperationError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    content = {"detail": exc.message}
    if isinstance(exc, NotFoundError) and exc.redirect_to:
        content["redirect_to"] = exc.redirect_to
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app(backend: Optional[Backend] = None) -> FastAPI:
    setup_logging()

    if backend is None:
        backend = build_backend(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            engine = backend.sessions.kw["bind"]
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created/verified")
        yield

    # 1) Create the app FIRST
    app = FastAPI(title="Support Desk", lifespan=lifespan)
    app.state.backend = backend

    # 2) Add CORS Middleware BEFORE routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        logger.info(
            "%s %s - %s - %.3fs",
            request.method, request.url.path, response.status_code, time.time() - start_time,
        )
        return response

    app.add_exception_handler(AppError, handle_app_error)

    # 3) Include routers AFTER app is created
    app.include_router(auth_router)
    app.include_router(businesses_router)
    app.include_router(tickets_router)
    app.include_router(settings_router)
    app.include_router(dashboard_router)
    app.include_router(navigation_router)

    # 4) Health check endpoints
    @app.get("/health")
    def health():
        return {"ok": True, "service": "supportdesk"}

    @app.get("/db-health")
    def db_health():
        db = backend.sessions()
        try:
            db.execute(text("select 1"))
            return {"ok": True, "db": "connected"}
        finally:
            db.close()

    return app


app = create_app()
