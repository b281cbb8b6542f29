import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.endpoints import auth as auth_endpoints
from app.api.endpoints import events as event_endpoints
from app.api.endpoints import matches as match_endpoints
from app.api.endpoints import players as player_endpoints
from app.api.endpoints import teams as team_endpoints
from app.api.endpoints import tournaments as tournament_endpoints
from app.api.endpoints import users as user_endpoints
from app.api.responses import failure, success
from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.exceptions import AppError, InternalError
from app.core.logging_config import configure_logging
from app.repositories import role_repository

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(failure(message, **extra)))


def _internal_error_response(error: InternalError, cause: Exception) -> JSONResponse:
    # The underlying error text is returned to the client under "error"
    return _error_response(error.status_code, error.message, detalle=error.detail, error=str(cause))


def _field_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        message = error.get("msg", "")
        # pydantic prefixes messages raised from our own validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({
            "campo": ".".join(location) or "body",
            "mensaje": message,
            "tipo": error.get("type"),
        })
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return _error_response(exc.status_code, exc.message, detalle=exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Errores de validación",
            errors=_field_errors(exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _internal_error_response(InternalError("Error en la base de datos"), exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _internal_error_response(InternalError(), exc)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    db = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.create_all()
        session = db.session()
        try:
            added = role_repository.seed_defaults(session)
            if added:
                logger.info("Seeded %s default roles", added)
        finally:
            session.close()
        if db.ping():
            logger.info("Database connection established")
        yield
        db.dispose()

    app = FastAPI(title="Tournament Management API", lifespan=lifespan)
    app.state.db = db
    app.state.settings = settings

    register_exception_handlers(app)

    app.include_router(auth_endpoints.router, prefix="/auth", tags=["Autenticación"])
    app.include_router(user_endpoints.router, prefix="/usuarios", tags=["Usuarios"])
    app.include_router(tournament_endpoints.router, prefix="/torneos", tags=["Torneos"])
    app.include_router(team_endpoints.router, prefix="/equipos", tags=["Equipos"])
    app.include_router(player_endpoints.router, prefix="/jugadores", tags=["Jugadores"])
    app.include_router(match_endpoints.router, prefix="/partidos", tags=["Partidos"])
    app.include_router(event_endpoints.router, prefix="/eventos", tags=["Eventos"])

    @app.get("/health")
    def health():
        if not app.state.db.ping():
            return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Base de datos no disponible")
        return success("API funcionando correctamente")

    return app


app = create_app()
