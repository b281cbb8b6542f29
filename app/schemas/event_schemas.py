from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .common import PatchModel

class EventType(str, Enum):
    GOAL = "gol"
    YELLOW_CARD = "tarjeta_amarilla"
    RED_CARD = "tarjeta_roja"
    SUBSTITUTION = "cambio"
    OWN_GOAL = "autogol"

class EventCreate(BaseModel):
    partido_id: int = Field(..., gt=0)
    jugador_id: int = Field(..., gt=0)
    tipo: EventType
    minuto: int = Field(..., ge=0, le=120)
    descripcion: Optional[str] = Field(None, max_length=255)

    class Config:
        str_strip_whitespace = True
        use_enum_values = True

class EventUpdate(PatchModel):
    tipo: Optional[EventType] = None
    minuto: Optional[int] = Field(None, ge=0, le=120)
    descripcion: Optional[str] = Field(None, max_length=255)

class EventRead(BaseModel):
    id: int
    partido_id: int
    jugador_id: int
    tipo: str
    minuto: int
    descripcion: Optional[str] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True

class EventDetail(EventRead):
    partido_fecha: Optional[datetime] = None
    equipo_local: Optional[str] = None
    equipo_visitante: Optional[str] = None
    jugador_nombre: Optional[str] = None
    nro_camiseta: Optional[int] = None
    equipo_jugador: Optional[str] = None
    torneo_organizador_id: Optional[int] = None

class TopScorer(BaseModel):
    jugador_id: int
    jugador_nombre: str
    nro_camiseta: Optional[int] = None
    equipo_nombre: str
    goles: int
