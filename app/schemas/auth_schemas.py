from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.core.security import check_password_policy
from .user_schemas import UserRead

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class LoginResponse(BaseModel):
    token: str
    usuario: UserRead

class TokenData(BaseModel):
    id: int
    email: Optional[EmailStr] = None
    rol_id: Optional[int] = None
    rol_nombre: Optional[str] = None

class CurrentUser(BaseModel):
    """Identity attached to an authenticated request."""
    id: int
    email: str
    rol_id: int
    rol_nombre: str

class ChangePasswordRequest(BaseModel):
    password_actual: str = Field(..., alias="passwordActual", min_length=1)
    password_nuevo: str = Field(..., alias="passwordNuevo", max_length=72)

    class Config:
        populate_by_name = True

    @field_validator("password_nuevo")
    def password_meets_policy(cls, v):
        problems = check_password_policy(v)
        if problems:
            raise ValueError("La nueva contraseña debe tener " + ", ".join(problems))
        return v

    @model_validator(mode="after")
    def password_changes(self):
        if self.password_nuevo == self.password_actual:
            raise ValueError("La nueva contraseña debe ser diferente a la actual")
        return self
