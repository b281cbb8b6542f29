from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .common import PatchModel

class TournamentStatus(str, Enum):
    PLANNED = "planificado"
    IN_PROGRESS = "en_curso"
    FINISHED = "finalizado"
    CANCELLED = "cancelado"

END_BEFORE_START = "La fecha de fin debe ser mayor o igual a la fecha de inicio"

class TournamentBase(BaseModel):
    nombre: str = Field(..., min_length=3, max_length=150)
    disciplina: str = Field(..., min_length=2, max_length=50)
    temporada: Optional[str] = Field(None, max_length=50)
    fecha_inicio: date
    fecha_fin: date
    estado: Optional[TournamentStatus] = None
    descripcion: Optional[str] = Field(None, max_length=500)

    class Config:
        str_strip_whitespace = True
        use_enum_values = True

class TournamentCreate(TournamentBase):

    @model_validator(mode="after")
    def end_date_after_start_date(self):
        if self.fecha_fin < self.fecha_inicio:
            raise ValueError(END_BEFORE_START)
        return self

class TournamentUpdate(PatchModel):
    nombre: Optional[str] = Field(None, min_length=3, max_length=150)
    disciplina: Optional[str] = Field(None, min_length=2, max_length=50)
    temporada: Optional[str] = Field(None, max_length=50)
    fecha_inicio: Optional[date] = None
    fecha_fin: Optional[date] = None
    estado: Optional[TournamentStatus] = None
    descripcion: Optional[str] = Field(None, max_length=500)

class TournamentRead(BaseModel):
    id: int
    nombre: str
    disciplina: str
    temporada: Optional[str] = None
    fecha_inicio: date
    fecha_fin: date
    estado: str
    descripcion: Optional[str] = None
    organizador_id: Optional[int] = None
    organizador_nombre: Optional[str] = None
    organizador_email: Optional[str] = None
    total_equipos: Optional[int] = None
    total_partidos: Optional[int] = None
    creado_en: Optional[datetime] = None
    actualizado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
