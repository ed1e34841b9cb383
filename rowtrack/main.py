from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from . import config
from .db import init_db, get_repository
from .exceptions import LoginRequired, StoreError, store_unavailable
from .logging_config import init_logging
from .routers import auth, catalog, student, teacher, admin
from .seed import seed

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Rowtrack",
        description="Grading and progress tracking for rowing instruction",
        version="1.0.0"
    )

    init_logging(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(catalog.router)
    app.include_router(student.router)
    app.include_router(teacher.router)
    app.include_router(admin.router)

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        response = RedirectResponse(url=config.LOGIN_URL, status_code=303)
        if exc.clear_session:
            response.delete_cookie(config.SESSION_COOKIE_NAME)
        return response

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        # No retry: the operation is simply not applied
        error = store_unavailable(exc)
        return JSONResponse(status_code=error.status_code, content={"detail": error.detail})

    @app.on_event("startup")
    def on_startup():
        init_db()
        seed(get_repository())
        logger.info("Rowtrack started")

    @app.get("/")
    async def root():
        # Login entry point; gated views redirect here
        return {
            "message": "Rowtrack API",
            "version": "1.0.0",
            "login": "/auth/login",
            "endpoints": {
                "student": "/student/dashboard",
                "teacher": "/teacher/grading/{student_id}",
                "history": "/teacher/history/{student_id}",
                "admin": "/admin/panel",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "rowtrack"
        }

    return app


app = create_app()
