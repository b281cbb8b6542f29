from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, aliased

from app.models import Match, MatchEvent, Player, Team, Tournament
from app.repositories.base import FOREIGN_KEY_VIOLATION, CHECK_VIOLATION, commit
from app.repositories.match_repository import list_events as list_by_match

CONSTRAINT_MESSAGES = {
    FOREIGN_KEY_VIOLATION: "Partido o jugador especificado no existe",
    "ck_eventos_partido_tipo": "Tipo de evento inválido",
    "ck_eventos_partido_minuto": "El minuto debe estar entre 0 y 120",
    CHECK_VIOLATION: "Datos inválidos (tipo o minuto)",
}

HomeTeam = aliased(Team, name="local")
AwayTeam = aliased(Team, name="visitante")
PlayerTeam = aliased(Team, name="equipo_jugador")

def _detail_query(db: Session):
    return (
        db.query(
            MatchEvent.id,
            MatchEvent.partido_id,
            Match.fecha.label("partido_fecha"),
            HomeTeam.nombre.label("equipo_local"),
            AwayTeam.nombre.label("equipo_visitante"),
            Tournament.organizador_id.label("torneo_organizador_id"),
            MatchEvent.jugador_id,
            (Player.nombre + " " + Player.apellido).label("jugador_nombre"),
            Player.nro_camiseta,
            PlayerTeam.nombre.label("equipo_jugador"),
            MatchEvent.tipo,
            MatchEvent.minuto,
            MatchEvent.descripcion,
            MatchEvent.creado_en,
        )
        .join(Match, MatchEvent.partido_id == Match.id)
        .join(Tournament, Match.torneo_id == Tournament.id)
        .join(HomeTeam, Match.equipo_local_id == HomeTeam.id)
        .join(AwayTeam, Match.equipo_visitante_id == AwayTeam.id)
        .join(Player, MatchEvent.jugador_id == Player.id)
        .join(PlayerTeam, Player.equipo_id == PlayerTeam.id)
    )

def list_all(db: Session) -> List[Dict[str, Any]]:
    query = _detail_query(db).order_by(Match.fecha.desc(), MatchEvent.minuto)
    return [dict(row._mapping) for row in query.all()]

def get(db: Session, event_id: int) -> Optional[MatchEvent]:
    return db.query(MatchEvent).filter(MatchEvent.id == event_id).first()

def get_detail(db: Session, event_id: int) -> Optional[Dict[str, Any]]:
    row = _detail_query(db).filter(MatchEvent.id == event_id).first()
    return dict(row._mapping) if row else None

def player_in_match(db: Session, player_id: int, match_id: int) -> bool:
    count = (
        db.query(func.count(Player.id))
        .join(Match, or_(Player.equipo_id == Match.equipo_local_id, Player.equipo_id == Match.equipo_visitante_id))
        .filter(Player.id == player_id, Match.id == match_id)
        .scalar()
    )
    return count > 0

def create(db: Session, data: Dict[str, Any]) -> MatchEvent:
    db_event = MatchEvent(**data)
    db.add(db_event)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_event)
    return db_event

def update(db: Session, db_event: MatchEvent, patch: Dict[str, Any]) -> MatchEvent:
    for key, value in patch.items():
        setattr(db_event, key, value)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_event)
    return db_event

def delete(db: Session, db_event: MatchEvent) -> None:
    db.delete(db_event)
    commit(db)

def top_scorers(db: Session, match_id: int) -> List[Dict[str, Any]]:
    """Goal events of a match grouped per player, most goals first then by name."""
    full_name = (Player.nombre + " " + Player.apellido).label("jugador_nombre")
    goals = func.count(MatchEvent.id).label("goles")
    query = (
        db.query(
            Player.id.label("jugador_id"),
            full_name,
            Player.nro_camiseta,
            Team.nombre.label("equipo_nombre"),
            goals,
        )
        .select_from(MatchEvent)
        .join(Player, MatchEvent.jugador_id == Player.id)
        .join(Team, Player.equipo_id == Team.id)
        .filter(MatchEvent.partido_id == match_id, MatchEvent.tipo == "gol")
        .group_by(Player.id, Player.nombre, Player.apellido, Player.nro_camiseta, Team.nombre)
        .order_by(goals.desc(), full_name.asc())
    )
    return [dict(row._mapping) for row in query.all()]
