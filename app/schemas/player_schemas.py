from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .common import PatchModel

class PlayerCreate(BaseModel):
    nombre: str = Field(..., min_length=2, max_length=100)
    apellido: str = Field(..., min_length=2, max_length=100)
    nro_camiseta: Optional[int] = Field(None, ge=0, le=999)
    equipo_id: int = Field(..., gt=0)

    class Config:
        str_strip_whitespace = True

class PlayerUpdate(PatchModel):
    nombre: Optional[str] = Field(None, min_length=2, max_length=100)
    apellido: Optional[str] = Field(None, min_length=2, max_length=100)
    nro_camiseta: Optional[int] = Field(None, ge=0, le=999)

class PlayerRead(BaseModel):
    id: int
    nombre: str
    apellido: str
    nro_camiseta: Optional[int] = None
    equipo_id: int
    equipo_nombre: Optional[str] = None
    torneo_id: Optional[int] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
