from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, get_settings
from app.api.responses import success
from app.core.config import Settings
from app.services import auth_service
from app.schemas import auth_schemas, user_schemas

router = APIRouter()

@router.post("/login")
def login(
    request: auth_schemas.LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = auth_service.login(db, email=request.email, password=request.password, settings=settings)
    return success(
        "Login exitoso",
        data=auth_schemas.LoginResponse(token=token, usuario=user_schemas.UserRead.model_validate(user)),
    )

@router.get("/perfil")
def get_profile(
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(auth_service.get_current_user),
):
    user = auth_service.get_profile(db, current_user.id)
    return success("Perfil obtenido exitosamente", data=user_schemas.UserRead.model_validate(user))

@router.put("/cambiar-password")
def change_password(
    request: auth_schemas.ChangePasswordRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: auth_schemas.CurrentUser = Depends(auth_service.get_current_user),
):
    auth_service.change_password(
        db,
        user_id=current_user.id,
        current_password=request.password_actual,
        new_password=request.password_nuevo,
        settings=settings,
    )
    return success("Contraseña actualizada exitosamente")
