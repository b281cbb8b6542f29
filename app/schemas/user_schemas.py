from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .common import PatchModel

class RoleRead(BaseModel):
    id: int
    nombre: str
    descripcion: Optional[str] = None

    class Config:
        from_attributes = True

class UserBase(BaseModel):
    nombre: str = Field(..., min_length=2, max_length=100)
    apellido: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    telefono: Optional[str] = Field(None, max_length=30)

    class Config:
        str_strip_whitespace = True

class UserCreate(UserBase):
    password: str = Field(..., min_length=8, max_length=72)
    rol_id: int = Field(..., gt=0)

class UserUpdate(PatchModel):
    nombre: Optional[str] = Field(None, min_length=2, max_length=100)
    apellido: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    telefono: Optional[str] = Field(None, max_length=30)
    rol_id: Optional[int] = Field(None, gt=0)
    activo: Optional[bool] = None

class UserPasswordReset(BaseModel):
    password: str = Field(..., min_length=8, max_length=72)

class UserRead(BaseModel):
    id: int
    nombre: str
    apellido: str
    email: str
    telefono: Optional[str] = None
    activo: bool
    rol: RoleRead
    creado_en: Optional[datetime] = None
    actualizado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
