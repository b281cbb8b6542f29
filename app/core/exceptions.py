from typing import Any, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP status and the error envelope.

    ``detail`` is an optional block with the conflicting values, returned to the
    client under ``detalle``.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Error interno del servidor"

    def __init__(self, message: Optional[str] = None, detail: Optional[Any] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Datos inválidos"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Credenciales inválidas"


class AccountInactive(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Usuario inactivo. Contacte al administrador"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token no proporcionado o inválido"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "No tienes permisos para realizar esta acción"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso no encontrado"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "El recurso ya existe"


class InternalError(AppError):
    pass
