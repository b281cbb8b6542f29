import logging
from datetime import date, datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationError
from app.core.permissions import Capability, authorize
from app.models import Match, Team
from app.repositories import match_repository, team_repository, tournament_repository
from app.schemas import auth_schemas, match_schemas

logger = logging.getLogger(__name__)

OUT_OF_RANGE = "La fecha del partido debe estar dentro del rango del torneo"

def date_within_range(match_date: datetime, start: date, end: date) -> bool:
    """Day-granularity check of ``match_date`` against ``[start, end]``."""
    day = match_date.date() if isinstance(match_date, datetime) else match_date
    return start <= day <= end

def _ensure_in_range(fecha: datetime, start: date, end: date) -> None:
    if not date_within_range(fecha, start, end):
        raise ValidationError(
            OUT_OF_RANGE,
            detail={"fecha_partido": fecha, "torneo_inicio": start, "torneo_fin": end},
        )

def get_match_or_404(db: Session, match_id: int) -> Match:
    match = match_repository.get(db, match_id)
    if not match:
        raise NotFound("Partido no encontrado")
    return match

def list_matches(db: Session) -> List[Dict[str, Any]]:
    return match_repository.list_all(db)

def get_match(db: Session, match_id: int) -> Dict[str, Any]:
    match = match_repository.get_detail(db, match_id)
    if not match:
        raise NotFound("Partido no encontrado")
    return match

def _team_summary(team: Team) -> Dict[str, Any]:
    return {"nombre": team.nombre, "torneo": team.torneo.nombre if team.torneo else None}

def create_match(db: Session, match: match_schemas.MatchCreate) -> Match:
    """Create a fixture after the cross-entity checks; the first failing check wins."""
    tournament = tournament_repository.get(db, match.torneo_id)
    if not tournament:
        raise NotFound("El torneo especificado no existe")

    home = team_repository.get(db, match.equipo_local_id)
    away = team_repository.get(db, match.equipo_visitante_id)
    if not home or not away:
        raise NotFound("Uno o ambos equipos no existen")

    if match.equipo_local_id == match.equipo_visitante_id:
        raise ValidationError(match_schemas.SAME_TEAM)

    if not match_repository.teams_belong_to_tournament(db, home.id, away.id, tournament.id):
        raise ValidationError(
            "Ambos equipos deben pertenecer al torneo especificado",
            detail={
                "equipo_local": _team_summary(home),
                "equipo_visitante": _team_summary(away),
                "torneo_esperado": tournament.nombre,
            },
        )

    _ensure_in_range(match.fecha, tournament.fecha_inicio, tournament.fecha_fin)

    data = match.model_dump()
    data["estado"] = data.get("estado") or match_schemas.MatchStatus.PENDING.value
    db_match = match_repository.create(db, data)
    logger.info("Match %s created in tournament %s", db_match.id, tournament.id)
    return db_match

def update_match(
    db: Session,
    match_id: int,
    match_update: match_schemas.MatchUpdate,
    current_user: auth_schemas.CurrentUser,
) -> Match:
    db_match = get_match_or_404(db, match_id)
    tournament = db_match.torneo
    authorize(current_user, Capability.EDIT_FIXTURE, owner_id=tournament.organizador_id,
              message="No tienes permisos para modificar este partido")

    patch = match_update.to_patch()
    if "fecha" in patch:
        _ensure_in_range(patch["fecha"], tournament.fecha_inicio, tournament.fecha_fin)
    # Any of the five statuses is accepted from any other
    return match_repository.update(db, db_match, patch)

def delete_match(db: Session, match_id: int, current_user: auth_schemas.CurrentUser) -> None:
    db_match = get_match_or_404(db, match_id)
    authorize(current_user, Capability.DELETE_FIXTURE, owner_id=db_match.torneo.organizador_id,
              message="No tienes permisos para eliminar este partido")
    match_repository.delete(db, db_match)
    logger.info("Match %s deleted by user %s", match_id, current_user.id)

def list_by_tournament(db: Session, tournament_id: int):
    tournament = tournament_repository.get(db, tournament_id)
    if not tournament:
        raise NotFound("Torneo no encontrado")
    return tournament, match_repository.list_by_tournament(db, tournament_id)

def list_by_team(db: Session, team_id: int) -> Tuple[Team, List[Dict[str, Any]]]:
    team = team_repository.get(db, team_id)
    if not team:
        raise NotFound("Equipo no encontrado")
    return team, match_repository.list_by_team(db, team_id)

def list_events(db: Session, match_id: int):
    match = get_match(db, match_id)
    return match, match_repository.list_events(db, match_id)
