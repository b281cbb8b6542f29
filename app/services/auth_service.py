import logging
from datetime import timedelta
from typing import Optional, Tuple

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, get_settings
from app.core import security
from app.core.config import Settings, settings as default_settings
from app.core.exceptions import AccountInactive, InvalidCredentials, NotFound, Unauthorized
from app.core.permissions import Capability, authorize
from app.models import User
from app.repositories import user_repository
from app.schemas import auth_schemas

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

def create_token_for(user: User, settings: Settings = default_settings) -> str:
    access_token_expires = timedelta(minutes=settings.JWT_EXPIRES_MINUTES)
    return security.create_access_token(
        data={
            "sub": str(user.id),
            "email": user.email,
            "rol_id": user.rol_id,
            "rol_nombre": user.rol.nombre,
        },
        expires_delta=access_token_expires,
        secret_key=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )

def login(db: Session, email: str, password: str, settings: Settings = default_settings) -> Tuple[str, User]:
    user = user_repository.get_by_email(db, email)
    # Unknown email and wrong password look the same to the caller
    if user is None or not security.verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise InvalidCredentials()
    if not user.activo:
        logger.warning("Login attempt on inactive account %s", email)
        raise AccountInactive()
    logger.info("User %s logged in", user.id)
    return create_token_for(user, settings), user

def verify_token(db: Session, token: Optional[str], settings: Settings = default_settings) -> auth_schemas.CurrentUser:
    if not token:
        raise Unauthorized("Token no proporcionado")
    payload = security.decode_access_token(token, secret_key=settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    token_data = auth_schemas.TokenData(
        id=int(payload["sub"]),
        email=payload.get("email"),
        rol_id=payload.get("rol_id"),
        rol_nombre=payload.get("rol_nombre"),
    )
    user = user_repository.get(db, token_data.id)
    if user is None or not user.activo:
        raise Unauthorized("Usuario no válido o inactivo")
    return auth_schemas.CurrentUser(
        id=user.id,
        email=user.email,
        rol_id=user.rol_id,
        rol_nombre=user.rol.nombre,
    )

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> auth_schemas.CurrentUser:
    token = credentials.credentials if credentials else None
    return verify_token(db, token, settings)

def get_profile(db: Session, user_id: int) -> User:
    user = user_repository.get(db, user_id)
    if user is None:
        raise NotFound("Usuario no encontrado")
    return user

def change_password(
    db: Session,
    user_id: int,
    current_password: str,
    new_password: str,
    settings: Settings = default_settings,
) -> None:
    user = get_profile(db, user_id)
    if not security.verify_password(current_password, user.password_hash):
        raise InvalidCredentials("La contraseña actual es incorrecta")
    user_repository.update_password(db, user, new_password, rounds=settings.BCRYPT_ROUNDS)
    logger.info("User %s changed their password", user_id)

def require(capability: Capability):
    """Route-level gate: the caller must hold ``capability`` by role alone."""
    def dependency(
        current_user: auth_schemas.CurrentUser = Depends(get_current_user),
    ) -> auth_schemas.CurrentUser:
        authorize(current_user, capability)
        return current_user
    return dependency
