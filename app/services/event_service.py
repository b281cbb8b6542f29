import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationError
from app.core.permissions import Capability, authorize
from app.models import MatchEvent
from app.repositories import event_repository, match_repository, player_repository
from app.schemas import auth_schemas, event_schemas

logger = logging.getLogger(__name__)

def get_event_or_404(db: Session, event_id: int) -> MatchEvent:
    event = event_repository.get(db, event_id)
    if not event:
        raise NotFound("Evento no encontrado")
    return event

def list_events(db: Session) -> List[Dict[str, Any]]:
    return event_repository.list_all(db)

def get_event(db: Session, event_id: int) -> Dict[str, Any]:
    event = event_repository.get_detail(db, event_id)
    if not event:
        raise NotFound("Evento no encontrado")
    return event

def create_event(db: Session, event: event_schemas.EventCreate) -> MatchEvent:
    match = match_repository.get_detail(db, event.partido_id)
    if not match:
        raise NotFound("El partido especificado no existe")

    player = player_repository.get_detail(db, event.jugador_id)
    if not player:
        raise NotFound("El jugador especificado no existe")

    if not event_repository.player_in_match(db, event.jugador_id, event.partido_id):
        raise ValidationError(
            "El jugador no pertenece a ninguno de los equipos de este partido",
            detail={
                "jugador": {
                    "nombre": f"{player['nombre']} {player['apellido']}",
                    "equipo": player["equipo_nombre"],
                },
                "partido": {
                    "local": match["equipo_local_nombre"],
                    "visitante": match["equipo_visitante_nombre"],
                },
            },
        )

    db_event = event_repository.create(db, event.model_dump())
    logger.info("Event %s (%s) recorded for match %s", db_event.id, db_event.tipo, db_event.partido_id)
    return db_event

def update_event(
    db: Session,
    event_id: int,
    event_update: event_schemas.EventUpdate,
    current_user: auth_schemas.CurrentUser,
) -> MatchEvent:
    db_event = get_event_or_404(db, event_id)
    authorize(current_user, Capability.EDIT_FIXTURE, owner_id=db_event.partido.torneo.organizador_id,
              message="No tienes permisos para modificar este evento")
    return event_repository.update(db, db_event, event_update.to_patch())

def delete_event(db: Session, event_id: int, current_user: auth_schemas.CurrentUser) -> None:
    db_event = get_event_or_404(db, event_id)
    authorize(current_user, Capability.DELETE_FIXTURE, owner_id=db_event.partido.torneo.organizador_id,
              message="No tienes permisos para eliminar este evento")
    event_repository.delete(db, db_event)
    logger.info("Event %s deleted by user %s", event_id, current_user.id)

def list_by_match(db: Session, match_id: int):
    match = match_repository.get_detail(db, match_id)
    if not match:
        raise NotFound("Partido no encontrado")
    return match, event_repository.list_by_match(db, match_id)

def top_scorers(db: Session, match_id: int):
    match = match_repository.get_detail(db, match_id)
    if not match:
        raise NotFound("Partido no encontrado")
    return match, event_repository.top_scorers(db, match_id)
