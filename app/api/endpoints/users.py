from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, get_settings
from app.api.responses import success
from app.core.config import Settings
from app.core.permissions import Capability
from app.services import auth_service, user_service
from app.schemas import auth_schemas, user_schemas

router = APIRouter()

admin_only = auth_service.require(Capability.MANAGE_USERS)

@router.get("")
def list_users_endpoint(
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(admin_only),
):
    users = [user_schemas.UserRead.model_validate(u) for u in user_service.list_users(db)]
    return success("Usuarios obtenidos exitosamente", data=users, total=len(users))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_user_endpoint(
    user_in: user_schemas.UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: auth_schemas.CurrentUser = Depends(admin_only),
):
    user = user_service.create_user(db, user_in, settings)
    return success("Usuario creado exitosamente", data=user_schemas.UserRead.model_validate(user))

@router.get("/{user_id}")
def get_user_endpoint(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(admin_only),
):
    user = user_service.get_user(db, user_id)
    return success("Usuario encontrado", data=user_schemas.UserRead.model_validate(user))

@router.put("/{user_id}")
def update_user_endpoint(
    user_in: user_schemas.UserUpdate,
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(admin_only),
):
    user = user_service.update_user(db, user_id, user_in, current_user)
    return success("Usuario actualizado exitosamente", data=user_schemas.UserRead.model_validate(user))

@router.put("/{user_id}/password")
def reset_user_password_endpoint(
    password_in: user_schemas.UserPasswordReset,
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: auth_schemas.CurrentUser = Depends(admin_only),
):
    user_service.update_password(db, user_id, password_in.password, settings)
    return success("Contraseña actualizada exitosamente")

@router.delete("/{user_id}")
def delete_user_endpoint(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(admin_only),
):
    user_service.delete_user(db, user_id, current_user)
    return success("Usuario eliminado exitosamente")
