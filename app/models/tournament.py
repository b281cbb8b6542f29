import datetime

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base

TOURNAMENT_STATUSES = ("planificado", "en_curso", "finalizado", "cancelado")

class Tournament(Base):
    __tablename__ = "torneos"
    __table_args__ = (
        CheckConstraint("fecha_fin >= fecha_inicio", name="ck_torneos_fechas"),
        CheckConstraint(
            "estado IN ('planificado', 'en_curso', 'finalizado', 'cancelado')",
            name="ck_torneos_estado",
        ),
        UniqueConstraint("nombre", "organizador_id", name="uq_torneos_nombre_organizador"),
    )

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False)
    disciplina = Column(String(50), nullable=False)
    temporada = Column(String(50), nullable=True)
    fecha_inicio = Column(Date, nullable=False)
    fecha_fin = Column(Date, nullable=False)
    estado = Column(String(20), nullable=False, default="planificado")
    organizador_id = Column(Integer, ForeignKey("usuarios.id"), nullable=True)
    descripcion = Column(String(500), nullable=True)
    creado_en = Column(DateTime, default=datetime.datetime.utcnow)
    actualizado_en = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    organizador = relationship("User", back_populates="torneos_organizados")
    # Deleting a tournament removes its teams (and their players) and matches
    equipos = relationship("Team", back_populates="torneo", cascade="all, delete")
    partidos = relationship("Match", back_populates="torneo", cascade="all, delete")
