from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.models import Player, Team
from app.repositories.base import UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION, commit

CONSTRAINT_MESSAGES = {
    UNIQUE_VIOLATION: "Ya existe un jugador con ese número de camiseta en el equipo",
    FOREIGN_KEY_VIOLATION: "El equipo especificado no existe",
}

def _listing_query(db: Session):
    return db.query(
        Player.id,
        Player.nombre,
        Player.apellido,
        Player.nro_camiseta,
        Player.equipo_id,
        Team.nombre.label("equipo_nombre"),
        Team.torneo_id,
        Player.creado_en,
    ).join(Team, Player.equipo_id == Team.id)

def list_all(db: Session) -> List[Dict[str, Any]]:
    query = _listing_query(db).order_by(Team.nombre, Player.nro_camiseta)
    return [dict(row._mapping) for row in query.all()]

def get(db: Session, player_id: int) -> Optional[Player]:
    return db.query(Player).filter(Player.id == player_id).first()

def get_detail(db: Session, player_id: int) -> Optional[Dict[str, Any]]:
    row = _listing_query(db).filter(Player.id == player_id).first()
    return dict(row._mapping) if row else None

def shirt_number_taken(db: Session, team_id: int, nro_camiseta: int, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Player.id).filter(Player.equipo_id == team_id, Player.nro_camiseta == nro_camiseta)
    if exclude_id is not None:
        query = query.filter(Player.id != exclude_id)
    return query.first() is not None

def create(db: Session, data: Dict[str, Any]) -> Player:
    db_player = Player(**data)
    db.add(db_player)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_player)
    return db_player

def update(db: Session, db_player: Player, patch: Dict[str, Any]) -> Player:
    for key, value in patch.items():
        setattr(db_player, key, value)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_player)
    return db_player

def delete(db: Session, db_player: Player) -> None:
    db.delete(db_player)
    commit(db)
