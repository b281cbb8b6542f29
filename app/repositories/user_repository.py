from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.core import security
from app.models import User
from app.repositories.base import UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION, commit

CONSTRAINT_MESSAGES = {
    UNIQUE_VIOLATION: "El email ya está registrado",
    FOREIGN_KEY_VIOLATION: "El rol especificado no existe",
}

def list_all(db: Session) -> List[User]:
    return db.query(User).options(joinedload(User.rol)).order_by(User.id).all()

def get(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).options(joinedload(User.rol)).filter(User.id == user_id).first()

def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).options(joinedload(User.rol)).filter(User.email == email).first()

def email_exists(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None

def create(db: Session, data: Dict[str, Any], rounds: Optional[int] = None) -> User:
    data = dict(data)
    password = data.pop("password")
    db_user = User(**data, password_hash=security.get_password_hash(password, rounds), activo=True)
    db.add(db_user)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_user)
    return db_user

def update(db: Session, db_user: User, patch: Dict[str, Any]) -> User:
    for key, value in patch.items():
        setattr(db_user, key, value)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_user)
    return db_user

def update_password(db: Session, db_user: User, password: str, rounds: Optional[int] = None) -> None:
    db_user.password_hash = security.get_password_hash(password, rounds)
    commit(db)

def deactivate(db: Session, db_user: User) -> None:
    db_user.activo = False
    commit(db)
