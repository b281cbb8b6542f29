from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session, aliased

from app.models import Match, MatchEvent, Player, Team, Tournament
from app.repositories.base import FOREIGN_KEY_VIOLATION, CHECK_VIOLATION, commit

CONSTRAINT_MESSAGES = {
    FOREIGN_KEY_VIOLATION: "Torneo o equipo especificado no existe",
    "ck_partidos_estado": "Estado de partido inválido",
    "ck_partidos_equipos_distintos": "Un equipo no puede jugar contra sí mismo",
    CHECK_VIOLATION: "Un equipo no puede jugar contra sí mismo",
}

HomeTeam = aliased(Team, name="equipo_local")
AwayTeam = aliased(Team, name="equipo_visitante")

def _event_count(db: Session):
    return (
        db.query(func.count(MatchEvent.id))
        .filter(MatchEvent.partido_id == Match.id)
        .correlate(Match)
        .scalar_subquery()
    )

def _base_columns():
    return [
        Match.id,
        Match.torneo_id,
        Match.equipo_local_id,
        HomeTeam.nombre.label("equipo_local_nombre"),
        HomeTeam.color.label("equipo_local_color"),
        Match.equipo_visitante_id,
        AwayTeam.nombre.label("equipo_visitante_nombre"),
        AwayTeam.color.label("equipo_visitante_color"),
        Match.fecha,
        Match.lugar,
        Match.marcador_local,
        Match.marcador_visitante,
        Match.estado,
        Match.observaciones,
        Match.creado_en,
        Match.actualizado_en,
    ]

def _joined(query):
    return (
        query.join(Tournament, Match.torneo_id == Tournament.id)
        .join(HomeTeam, Match.equipo_local_id == HomeTeam.id)
        .join(AwayTeam, Match.equipo_visitante_id == AwayTeam.id)
    )

def _detail_query(db: Session):
    return _joined(db.query(
        *_base_columns(),
        Tournament.nombre.label("torneo_nombre"),
        Tournament.disciplina.label("torneo_disciplina"),
        Tournament.fecha_inicio.label("torneo_fecha_inicio"),
        Tournament.fecha_fin.label("torneo_fecha_fin"),
        Tournament.organizador_id.label("torneo_organizador_id"),
        _event_count(db).label("total_eventos"),
    ))

def _rows(query) -> List[Dict[str, Any]]:
    return [dict(row._mapping) for row in query.all()]

def list_all(db: Session) -> List[Dict[str, Any]]:
    return _rows(_detail_query(db).order_by(Match.fecha.desc(), Match.id.desc()))

def get(db: Session, match_id: int) -> Optional[Match]:
    return db.query(Match).filter(Match.id == match_id).first()

def get_detail(db: Session, match_id: int) -> Optional[Dict[str, Any]]:
    row = _detail_query(db).filter(Match.id == match_id).first()
    return dict(row._mapping) if row else None

def teams_belong_to_tournament(db: Session, home_team_id: int, away_team_id: int, tournament_id: int) -> bool:
    count = (
        db.query(func.count(Team.id))
        .filter(Team.torneo_id == tournament_id, Team.id.in_([home_team_id, away_team_id]))
        .scalar()
    )
    return count == 2

def create(db: Session, data: Dict[str, Any]) -> Match:
    db_match = Match(**data)
    db.add(db_match)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_match)
    return db_match

def update(db: Session, db_match: Match, patch: Dict[str, Any]) -> Match:
    for key, value in patch.items():
        setattr(db_match, key, value)
    commit(db, CONSTRAINT_MESSAGES)
    db.refresh(db_match)
    return db_match

def delete(db: Session, db_match: Match) -> None:
    db.delete(db_match)
    commit(db)

def list_by_tournament(db: Session, tournament_id: int) -> List[Dict[str, Any]]:
    query = _joined(db.query(*_base_columns())).filter(Match.torneo_id == tournament_id)
    return _rows(query.order_by(Match.fecha, Match.id))

def list_by_team(db: Session, team_id: int) -> List[Dict[str, Any]]:
    side = case((Match.equipo_local_id == team_id, "local"), else_="visitante")
    query = (
        _joined(db.query(
            *_base_columns(),
            Tournament.nombre.label("torneo_nombre"),
            side.label("tipo_participacion"),
        ))
        .filter(or_(Match.equipo_local_id == team_id, Match.equipo_visitante_id == team_id))
        .order_by(Match.fecha.desc())
    )
    return _rows(query)

def list_events(db: Session, match_id: int) -> List[Dict[str, Any]]:
    query = (
        db.query(
            MatchEvent.id,
            MatchEvent.partido_id,
            MatchEvent.jugador_id,
            (Player.nombre + " " + Player.apellido).label("jugador_nombre"),
            Player.nro_camiseta,
            Team.nombre.label("equipo_jugador"),
            MatchEvent.tipo,
            MatchEvent.minuto,
            MatchEvent.descripcion,
            MatchEvent.creado_en,
        )
        .join(Player, MatchEvent.jugador_id == Player.id)
        .join(Team, Player.equipo_id == Team.id)
        .filter(MatchEvent.partido_id == match_id)
        .order_by(MatchEvent.minuto, MatchEvent.id)
    )
    return _rows(query)
