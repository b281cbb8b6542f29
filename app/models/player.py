import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base

class Player(Base):
    __tablename__ = "jugadores"
    __table_args__ = (
        UniqueConstraint("equipo_id", "nro_camiseta", name="uq_jugadores_equipo_camiseta"),
    )

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    nro_camiseta = Column(Integer, nullable=True)
    equipo_id = Column(Integer, ForeignKey("equipos.id", ondelete="CASCADE"), nullable=False, index=True)
    creado_en = Column(DateTime, default=datetime.datetime.utcnow)

    equipo = relationship("Team", back_populates="jugadores")
    eventos = relationship("MatchEvent", back_populates="jugador", cascade="all, delete")
