from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .common import PatchModel

class TeamCreate(BaseModel):
    nombre: str = Field(..., min_length=2, max_length=100)
    color: Optional[str] = Field(None, max_length=30)
    representante: Optional[str] = Field(None, max_length=150)
    telefono_representante: Optional[str] = Field(None, max_length=30)
    torneo_id: int = Field(..., gt=0)

    class Config:
        str_strip_whitespace = True

class TeamUpdate(PatchModel):
    nombre: Optional[str] = Field(None, min_length=2, max_length=100)
    color: Optional[str] = Field(None, max_length=30)
    representante: Optional[str] = Field(None, max_length=150)
    telefono_representante: Optional[str] = Field(None, max_length=30)

class TeamRead(BaseModel):
    id: int
    nombre: str
    color: Optional[str] = None
    representante: Optional[str] = None
    telefono_representante: Optional[str] = None
    torneo_id: Optional[int] = None
    torneo_nombre: Optional[str] = None
    total_jugadores: Optional[int] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
