from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base

class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(50), unique=True, nullable=False) # admin, organizador, delegado, participante
    descripcion = Column(String(255), nullable=True)

    usuarios = relationship("User", back_populates="rol")
