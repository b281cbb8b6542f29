import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base

EVENT_TYPES = ("gol", "tarjeta_amarilla", "tarjeta_roja", "cambio", "autogol")

class MatchEvent(Base):
    __tablename__ = "eventos_partido"
    __table_args__ = (
        CheckConstraint(
            "tipo IN ('gol', 'tarjeta_amarilla', 'tarjeta_roja', 'cambio', 'autogol')",
            name="ck_eventos_partido_tipo",
        ),
        CheckConstraint("minuto >= 0 AND minuto <= 120", name="ck_eventos_partido_minuto"),
    )

    id = Column(Integer, primary_key=True, index=True)
    partido_id = Column(Integer, ForeignKey("partidos.id", ondelete="CASCADE"), nullable=False, index=True)
    jugador_id = Column(Integer, ForeignKey("jugadores.id", ondelete="CASCADE"), nullable=False, index=True)
    tipo = Column(String(20), nullable=False)
    minuto = Column(Integer, nullable=False)
    descripcion = Column(String(255), nullable=True)
    creado_en = Column(DateTime, default=datetime.datetime.utcnow)

    partido = relationship("Match", back_populates="eventos")
    jugador = relationship("Player", back_populates="eventos")
