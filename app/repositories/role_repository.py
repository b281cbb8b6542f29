from typing import Optional

from sqlalchemy.orm import Session

from app.models import Role

DEFAULT_ROLES = [
    ("admin", "Administrador del sistema"),
    ("organizador", "Organiza torneos y gestiona sus partidos"),
    ("delegado", "Registra partidos y eventos"),
    ("participante", "Acceso de solo lectura"),
]

def get(db: Session, role_id: int) -> Optional[Role]:
    return db.query(Role).filter(Role.id == role_id).first()

def get_by_name(db: Session, nombre: str) -> Optional[Role]:
    return db.query(Role).filter(Role.nombre == nombre).first()

def seed_defaults(db: Session) -> int:
    """Insert any missing reference roles; returns how many were added."""
    added = 0
    for nombre, descripcion in DEFAULT_ROLES:
        if get_by_name(db, nombre) is None:
            db.add(Role(nombre=nombre, descripcion=descripcion))
            added += 1
    if added:
        db.commit()
    return added
