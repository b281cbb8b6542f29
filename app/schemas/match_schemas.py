from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .common import PatchModel

class MatchStatus(str, Enum):
    PENDING = "pendiente"
    IN_PROGRESS = "en_curso"
    FINISHED = "finalizado"
    SUSPENDED = "suspendido"
    CANCELLED = "cancelado"

SAME_TEAM = "El equipo local y visitante no pueden ser el mismo"

class MatchCreate(BaseModel):
    torneo_id: int = Field(..., gt=0)
    equipo_local_id: int = Field(..., gt=0)
    equipo_visitante_id: int = Field(..., gt=0)
    fecha: datetime
    lugar: Optional[str] = Field(None, max_length=200)
    estado: Optional[MatchStatus] = None
    observaciones: Optional[str] = Field(None, max_length=500)

    class Config:
        str_strip_whitespace = True
        use_enum_values = True

    @model_validator(mode="after")
    def teams_differ(self):
        if self.equipo_local_id == self.equipo_visitante_id:
            raise ValueError(SAME_TEAM)
        return self

class MatchUpdate(PatchModel):
    fecha: Optional[datetime] = None
    lugar: Optional[str] = Field(None, max_length=200)
    marcador_local: Optional[int] = Field(None, ge=0)
    marcador_visitante: Optional[int] = Field(None, ge=0)
    estado: Optional[MatchStatus] = None
    observaciones: Optional[str] = Field(None, max_length=500)

class MatchRead(BaseModel):
    id: int
    torneo_id: Optional[int] = None
    equipo_local_id: int
    equipo_visitante_id: int
    fecha: datetime
    lugar: Optional[str] = None
    marcador_local: int
    marcador_visitante: int
    estado: str
    observaciones: Optional[str] = None
    creado_en: Optional[datetime] = None
    actualizado_en: Optional[datetime] = None

    class Config:
        from_attributes = True

class MatchDetail(MatchRead):
    torneo_nombre: Optional[str] = None
    torneo_disciplina: Optional[str] = None
    torneo_fecha_inicio: Optional[date] = None
    torneo_fecha_fin: Optional[date] = None
    torneo_organizador_id: Optional[int] = None
    equipo_local_nombre: Optional[str] = None
    equipo_local_color: Optional[str] = None
    equipo_visitante_nombre: Optional[str] = None
    equipo_visitante_color: Optional[str] = None
    total_eventos: Optional[int] = None

class TeamMatchRead(MatchDetail):
    # "local" or "visitante" from the queried team's side
    tipo_participacion: str
