import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base

class Team(Base):
    __tablename__ = "equipos"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    color = Column(String(30), nullable=True)
    representante = Column(String(150), nullable=True)
    telefono_representante = Column(String(30), nullable=True)
    torneo_id = Column(Integer, ForeignKey("torneos.id", ondelete="CASCADE"), nullable=False, index=True)
    creado_en = Column(DateTime, default=datetime.datetime.utcnow)

    torneo = relationship("Tournament", back_populates="equipos")
    jugadores = relationship("Player", back_populates="equipo", cascade="all, delete")
