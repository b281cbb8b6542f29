from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Player, Team, Tournament
from app.repositories.base import FOREIGN_KEY_VIOLATION, commit

CONSTRAINT_MESSAGES = {
    FOREIGN_KEY_VIOLATION: "El torneo especificado no existe",
}

def _listing_query(db: Session):
    player_count = (
        db.query(func.count(Player.id))
        .filter(Player.equipo_id == Team.id)
        .correlate(Team)
        .scalar_subquery()
    )
    return db.query(
        Team.id,
        Team.nombre,
        Team.color,
        Team.representante,
        Team.telefono_representante,
        Team.torneo_id,
        Tournament.nombre.label("torneo_nombre"),
        Team.creado_en,
        player_count.label("total_jugadores"),
    ).join(Tournament, Team.torneo_id == Tournament.id)

def list_all(db: Session) -> List[Dict[str, Any]]:
    return [dict(row._mapping) for row in _listing_query(db).order_by(Tournament.id, Team.nombre).all()]

def get(db: Session, team_id: int) -> Optional[Team]:
    return db.query(Team).filter(Team.id == team_id).first()

def get_detail(db: Session, team_id: int) -> Optional[Dict[str, Any]]:
    row = _listing_query(db).filter(Team.id == team_id).first()
    return dict(row._mapping) if row else None

def create(db: Session, data: Dict[str, Any]) -> Team:
    db_team = Team(**data)
    db.add(db_team)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_team)
    return db_team

def update(db: Session, db_team: Team, patch: Dict[str, Any]) -> Team:
    for key, value in patch.items():
        setattr(db_team, key, value)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_team)
    return db_team

def delete(db: Session, db_team: Team) -> None:
    db.delete(db_team)
    commit(db)

def list_players(db: Session, team_id: int) -> List[Player]:
    return (
        db.query(Player)
        .filter(Player.equipo_id == team_id)
        .order_by(Player.nro_camiseta, Player.apellido)
        .all()
    )
