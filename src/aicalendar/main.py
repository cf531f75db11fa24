# main.py
from dotenv import load_dotenv
load_dotenv()
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import uvicorn
import logging

from aicalendar.core.config import get_settings
from aicalendar.core.database import init_db
from aicalendar.api.users_api import router as users_router
from aicalendar.api.calendar_api import router as calendar_router
from aicalendar.api.participants_api import router as participants_router
from aicalendar.api.availability_api import router as availability_router
from aicalendar.api.health_api import health_api_router
from aicalendar.schemas.common import ErrorResponse
from aicalendar.services.error_handling import ServiceError

logger = logging.getLogger("MAIN")


def create_app(initialize_database: bool = True) -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    @app.on_event("startup")
    def on_startup():
        # Application loggers share uvicorn's handler and the configured level
        uvicorn_logger = logging.getLogger("uvicorn")
        for logger_name in [
            "CORE_DATABASE", "UNIT_OF_WORK", "aicalendar",
            "UserService", "EventService", "ParticipantService", "SlotFindingService",
        ]:
            app_logger = logging.getLogger(logger_name)
            app_logger.setLevel(settings.log_level.upper())
            if not app_logger.handlers and uvicorn_logger.handlers:
                app_logger.addHandler(uvicorn_logger.handlers[0])

        if initialize_database:
            init_db()

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.error(f"Unhandled service error on {request.url.path}: {exc.message}")
        body = ErrorResponse(error="Internal server error", detail=exc.message, error_code=exc.error_code or "SERVICE_ERROR")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
        )

    app.include_router(users_router, prefix=settings.api_prefix)
    app.include_router(calendar_router, prefix=settings.api_prefix)
    app.include_router(participants_router, prefix=settings.api_prefix)
    app.include_router(availability_router, prefix=settings.api_prefix)
    app.include_router(health_api_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to the {settings.app_name} Service"}

    return app


def uvicorn_options(environment: str) -> dict:
    """Server options for the given deployment environment."""
    if environment.lower() == "production":
        # Multiple workers, no reload
        return {"workers": 4}
    # reload=True is incompatible with workers > 1
    return {"reload": True}


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "aicalendar.main:app",
        host="0.0.0.0",
        port=9020,
        **uvicorn_options(get_settings().environment),
    )
