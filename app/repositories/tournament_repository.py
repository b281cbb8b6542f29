from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Match, Player, Team, Tournament, User
from app.repositories.base import UNIQUE_VIOLATION, CHECK_VIOLATION, commit

CONSTRAINT_MESSAGES = {
    UNIQUE_VIOLATION: "Ya existe un torneo con ese nombre para el mismo organizador",
    "ck_torneos_fechas": "La fecha de fin debe ser mayor o igual a la fecha de inicio",
    "fecha_fin >= fecha_inicio": "La fecha de fin debe ser mayor o igual a la fecha de inicio",
    CHECK_VIOLATION: "Estado de torneo inválido",
}

def _team_count(db: Session):
    return (
        db.query(func.count(Team.id))
        .filter(Team.torneo_id == Tournament.id)
        .correlate(Tournament)
        .scalar_subquery()
    )

def _match_count(db: Session):
    return (
        db.query(func.count(Match.id))
        .filter(Match.torneo_id == Tournament.id)
        .correlate(Tournament)
        .scalar_subquery()
    )

def _listing_query(db: Session):
    return db.query(
        Tournament.id,
        Tournament.nombre,
        Tournament.disciplina,
        Tournament.temporada,
        Tournament.fecha_inicio,
        Tournament.fecha_fin,
        Tournament.estado,
        Tournament.descripcion,
        Tournament.organizador_id,
        (User.nombre + " " + User.apellido).label("organizador_nombre"),
        User.email.label("organizador_email"),
        Tournament.creado_en,
        Tournament.actualizado_en,
        _team_count(db).label("total_equipos"),
    ).outerjoin(User, Tournament.organizador_id == User.id)

def _rows(query) -> List[Dict[str, Any]]:
    return [dict(row._mapping) for row in query.all()]

def list_all(db: Session) -> List[Dict[str, Any]]:
    query = _listing_query(db).order_by(Tournament.fecha_inicio.desc(), Tournament.id.desc())
    return _rows(query)

def get(db: Session, tournament_id: int) -> Optional[Tournament]:
    return db.query(Tournament).filter(Tournament.id == tournament_id).first()

def get_detail(db: Session, tournament_id: int) -> Optional[Dict[str, Any]]:
    row = (
        _listing_query(db)
        .add_columns(_match_count(db).label("total_partidos"))
        .filter(Tournament.id == tournament_id)
        .first()
    )
    return dict(row._mapping) if row else None

def create(db: Session, data: Dict[str, Any]) -> Tournament:
    db_tournament = Tournament(**data)
    db.add(db_tournament)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_tournament)
    return db_tournament

def update(db: Session, db_tournament: Tournament, patch: Dict[str, Any]) -> Tournament:
    for key, value in patch.items():
        setattr(db_tournament, key, value)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_tournament)
    return db_tournament

def delete(db: Session, db_tournament: Tournament) -> None:
    # ORM cascades remove teams, players, matches and their events
    db.delete(db_tournament)
    commit(db)

def list_by_organizer(db: Session, organizer_id: int) -> List[Dict[str, Any]]:
    query = (
        _listing_query(db)
        .add_columns(_match_count(db).label("total_partidos"))
        .filter(Tournament.organizador_id == organizer_id)
        .order_by(Tournament.fecha_inicio.desc())
    )
    return _rows(query)

def list_by_status(db: Session, estado: str) -> List[Dict[str, Any]]:
    query = _listing_query(db).filter(Tournament.estado == estado).order_by(Tournament.fecha_inicio.desc())
    return _rows(query)

def list_teams(db: Session, tournament_id: int) -> List[Dict[str, Any]]:
    player_count = (
        db.query(func.count(Player.id))
        .filter(Player.equipo_id == Team.id)
        .correlate(Team)
        .scalar_subquery()
    )
    query = (
        db.query(
            Team.id,
            Team.nombre,
            Team.color,
            Team.representante,
            Team.telefono_representante,
            Team.torneo_id,
            Team.creado_en,
            player_count.label("total_jugadores"),
        )
        .filter(Team.torneo_id == tournament_id)
        .order_by(Team.nombre.asc())
    )
    return _rows(query)
