import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import Conflict, NotFound, ValidationError
from app.models import User
from app.repositories import role_repository, user_repository
from app.schemas import auth_schemas, user_schemas

logger = logging.getLogger(__name__)

def list_users(db: Session) -> List[User]:
    return user_repository.list_all(db)

def get_user(db: Session, user_id: int) -> User:
    user = user_repository.get(db, user_id)
    if user is None:
        raise NotFound("Usuario no encontrado")
    return user

def _ensure_role(db: Session, role_id: int) -> None:
    if role_repository.get(db, role_id) is None:
        raise ValidationError("El rol especificado no existe")

def create_user(db: Session, user_in: user_schemas.UserCreate, settings: Settings = default_settings) -> User:
    if user_repository.email_exists(db, user_in.email):
        raise Conflict("El email ya está registrado")
    _ensure_role(db, user_in.rol_id)
    user = user_repository.create(db, user_in.model_dump(), rounds=settings.BCRYPT_ROUNDS)
    logger.info("Created user %s with role %s", user.id, user.rol_id)
    return user

def update_user(
    db: Session,
    user_id: int,
    user_update: user_schemas.UserUpdate,
    current_user: auth_schemas.CurrentUser,
) -> User:
    user = get_user(db, user_id)
    patch = user_update.to_patch()

    if patch.get("activo") is False and user_id == current_user.id:
        raise ValidationError("No puedes desactivar tu propia cuenta")

    if "email" in patch and patch["email"] != user.email:
        if user_repository.email_exists(db, patch["email"], exclude_id=user_id):
            raise Conflict("El email ya está registrado por otro usuario")

    if "rol_id" in patch:
        _ensure_role(db, patch["rol_id"])

    return user_repository.update(db, user, patch)

def update_password(db: Session, user_id: int, password: str, settings: Settings = default_settings) -> None:
    user = get_user(db, user_id)
    user_repository.update_password(db, user, password, rounds=settings.BCRYPT_ROUNDS)
    logger.info("Password reset for user %s", user_id)

def delete_user(db: Session, user_id: int, current_user: auth_schemas.CurrentUser) -> None:
    user = get_user(db, user_id)
    if user_id == current_user.id:
        raise ValidationError("No puedes eliminar tu propia cuenta")
    # Soft delete: the account is deactivated, never removed
    user_repository.deactivate(db, user)
    logger.info("Deactivated user %s", user_id)
