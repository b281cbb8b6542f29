import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationError
from app.core.permissions import Capability, authorize
from app.models import Tournament
from app.repositories import tournament_repository
from app.schemas import auth_schemas, tournament_schemas

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in tournament_schemas.TournamentStatus]

def _ensure_date_order(fecha_inicio, fecha_fin) -> None:
    if fecha_fin < fecha_inicio:
        raise ValidationError(
            tournament_schemas.END_BEFORE_START,
            detail={"fecha_inicio": fecha_inicio, "fecha_fin": fecha_fin},
        )

def get_tournament_or_404(db: Session, tournament_id: int) -> Tournament:
    tournament = tournament_repository.get(db, tournament_id)
    if not tournament:
        raise NotFound("Torneo no encontrado")
    return tournament

def list_tournaments(db: Session) -> List[Dict[str, Any]]:
    return tournament_repository.list_all(db)

def get_tournament(db: Session, tournament_id: int) -> Dict[str, Any]:
    tournament = tournament_repository.get_detail(db, tournament_id)
    if not tournament:
        raise NotFound("Torneo no encontrado")
    return tournament

def create_tournament(db: Session, tournament: tournament_schemas.TournamentCreate, organizer_id: int) -> Tournament:
    _ensure_date_order(tournament.fecha_inicio, tournament.fecha_fin)
    data = tournament.model_dump()
    data["estado"] = data.get("estado") or tournament_schemas.TournamentStatus.PLANNED.value
    data["organizador_id"] = organizer_id
    db_tournament = tournament_repository.create(db, data)
    logger.info("Tournament %s created by user %s", db_tournament.id, organizer_id)
    return db_tournament

def update_tournament(
    db: Session,
    tournament_id: int,
    tournament_update: tournament_schemas.TournamentUpdate,
    current_user: auth_schemas.CurrentUser,
) -> Tournament:
    db_tournament = get_tournament_or_404(db, tournament_id)
    authorize(current_user, Capability.EDIT_TOURNAMENT, owner_id=db_tournament.organizador_id)

    patch = tournament_update.to_patch()
    if "fecha_inicio" in patch or "fecha_fin" in patch:
        _ensure_date_order(
            patch.get("fecha_inicio", db_tournament.fecha_inicio),
            patch.get("fecha_fin", db_tournament.fecha_fin),
        )
    return tournament_repository.update(db, db_tournament, patch)

def delete_tournament(db: Session, tournament_id: int) -> None:
    db_tournament = get_tournament_or_404(db, tournament_id)
    tournament_repository.delete(db, db_tournament)
    logger.info("Tournament %s deleted", tournament_id)

def list_by_organizer(db: Session, organizer_id: int) -> List[Dict[str, Any]]:
    return tournament_repository.list_by_organizer(db, organizer_id)

def list_by_status(db: Session, estado: str) -> List[Dict[str, Any]]:
    if estado not in VALID_STATUSES:
        raise ValidationError(f"Estado inválido. Debe ser: {', '.join(VALID_STATUSES)}")
    return tournament_repository.list_by_status(db, estado)

def list_teams(db: Session, tournament_id: int):
    tournament = get_tournament_or_404(db, tournament_id)
    return tournament, tournament_repository.list_teams(db, tournament_id)
