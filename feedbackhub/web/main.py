"""Main web application - FastAPI server for the feedback platform API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..shared.db.database import close_db, init_db
from ..shared.db.repositories.base import DuplicateEntityError
from ..shared.redis.client import close_redis
from .api import admins, bookmarks, employees, feedback, properties
from .api import router as api_router
from .auth.revocation import reset_revocation_store
from .config import config
from .errors import ApiError, Conflict, Internal, NotFound, ValidationError

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

_CREDENTIALS_MESSAGE = "Please provide email and password"
_PASSWORD_CHANGE_MESSAGE = "Please provide current password and a new password of at least 6 characters"
_FEEDBACK_MESSAGE = "Please provide a valid receiver email, subject and description"
_EMPLOYEE_MESSAGE = "Please provide username and a valid email"
_RESPONSE_MESSAGE = "Please provide a response"

# Messages for request bodies that fail schema validation, by route endpoint
_VALIDATION_MESSAGES = {
    admins.register: "Please provide username, a valid email, a password of at least 6 characters and company name",
    admins.login: _CREDENTIALS_MESSAGE,
    admins.change_password: _PASSWORD_CHANGE_MESSAGE,
    employees.add_employee: _EMPLOYEE_MESSAGE,
    employees.login: _CREDENTIALS_MESSAGE,
    employees.update_profile: _EMPLOYEE_MESSAGE,
    employees.change_password: _PASSWORD_CHANGE_MESSAGE,
    feedback.submit_feedback: _FEEDBACK_MESSAGE,
    feedback.submit_employee_feedback: _FEEDBACK_MESSAGE,
    feedback.respond_to_feedback: _RESPONSE_MESSAGE,
    feedback.employee_respond: _RESPONSE_MESSAGE,
    properties.create_property: "Please provide title and address",
    bookmarks.add_bookmark: "Please provide a valid property id",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # Validate configuration; a missing JWT secret stops startup here
    for warning in config.validate():
        logger.warning("config.warning %s", warning)

    logger.info("startup.database create_all=%s", config.DB_CREATE_ALL)
    await init_db(create_all=config.DB_CREATE_ALL)

    logger.info(
        "startup.ready port=%s production=%s revocation=%s",
        config.PORT,
        config.is_production(),
        config.REVOCATION_BACKEND,
    )

    yield  # Application runs here

    logger.info("shutdown.closing")
    await close_db()
    if config.REVOCATION_BACKEND == "redis":
        await close_redis()
    reset_revocation_store()


def create_app() -> FastAPI:
    app = FastAPI(
        title="FeedbackHub API",
        description="Multi-tenant company feedback and property platform",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if not config.is_production() else None,
        redoc_url="/redoc" if not config.is_production() else None,
    )

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(DuplicateEntityError)
    async def handle_duplicate(request: Request, exc: DuplicateEntityError) -> JSONResponse:
        logger.info("request.conflict method=%s path=%s entity=%s", request.method, request.url.path, exc)
        error = Conflict()
        return JSONResponse(
            status_code=error.status_code,
            content=error.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        endpoint = request.scope.get("endpoint")

        # Malformed ids in the path cannot name an existing resource
        if any(error.get("loc", ("",))[0] == "path" for error in exc.errors()):
            error = NotFound()
        else:
            error = ValidationError(_VALIDATION_MESSAGES.get(endpoint, "Invalid request data"))

        logger.info(
            "request.invalid method=%s path=%s status=%s",
            request.method,
            request.url.path,
            error.status_code,
        )
        return JSONResponse(
            status_code=error.status_code,
            content=error.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request.failed method=%s path=%s", request.method, request.url.path)
        error = Internal()
        return JSONResponse(
            status_code=error.status_code,
            content=error.payload.model_dump(mode="json", exclude_none=True),
        )

    # CORS middleware
    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": "API is running..."}

    @app.get("/api/test")
    async def api_test():
        return {"message": "API is working!"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "web",
            "version": VERSION,
        }

    return app


app = create_app()


def main():
    """Main entry point."""
    import uvicorn

    uvicorn.run(
        "feedbackhub.web.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=not config.is_production(),
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
