from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.middleware import RequestIdMiddleware
from app.api.v1.router import v1_router
from app.db.session import SessionLocal, init_db

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled error",
        extra={"request_id": getattr(request.state, "request_id", None), "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": "INTERNAL_ERROR", "message": "Internal server error."}},
    )


def create_app(*, init_storage: bool = True) -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    # Middleware: Request ID + access log
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)
    # Middleware: CORS for the browser frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_exception_handler(Exception, unhandled_error)

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    if init_storage:
        init_db()
        if settings.seed_demo_data:
            from app.seed import seed

            db = SessionLocal()
            try:
                seed(db)
            finally:
                db.close()
            logger.info("demo data seeded")

    return app


app = create_app()
