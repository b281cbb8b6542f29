import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base

MATCH_STATUSES = ("pendiente", "en_curso", "finalizado", "suspendido", "cancelado")

class Match(Base):
    __tablename__ = "partidos"
    __table_args__ = (
        CheckConstraint("equipo_local_id <> equipo_visitante_id", name="ck_partidos_equipos_distintos"),
        CheckConstraint(
            "estado IN ('pendiente', 'en_curso', 'finalizado', 'suspendido', 'cancelado')",
            name="ck_partidos_estado",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    torneo_id = Column(Integer, ForeignKey("torneos.id", ondelete="CASCADE"), nullable=False, index=True)
    equipo_local_id = Column(Integer, ForeignKey("equipos.id", ondelete="CASCADE"), nullable=False)
    equipo_visitante_id = Column(Integer, ForeignKey("equipos.id", ondelete="CASCADE"), nullable=False)
    fecha = Column(DateTime, nullable=False)
    lugar = Column(String(200), nullable=True)
    marcador_local = Column(Integer, nullable=False, default=0)
    marcador_visitante = Column(Integer, nullable=False, default=0)
    estado = Column(String(20), nullable=False, default="pendiente")
    observaciones = Column(String(500), nullable=True)
    creado_en = Column(DateTime, default=datetime.datetime.utcnow)
    actualizado_en = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    torneo = relationship("Tournament", back_populates="partidos")
    equipo_local = relationship("Team", foreign_keys=[equipo_local_id])
    equipo_visitante = relationship("Team", foreign_keys=[equipo_visitante_id])
    eventos = relationship("MatchEvent", back_populates="partido", cascade="all, delete")
