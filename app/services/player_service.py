import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import Conflict, NotFound
from app.core.permissions import Capability, authorize
from app.models import Player
from app.repositories import player_repository, team_repository
from app.schemas import auth_schemas, player_schemas

logger = logging.getLogger(__name__)

SHIRT_TAKEN = "Ya existe un jugador con ese número de camiseta en el equipo"

def get_player_or_404(db: Session, player_id: int) -> Player:
    player = player_repository.get(db, player_id)
    if not player:
        raise NotFound("Jugador no encontrado")
    return player

def list_players(db: Session) -> List[Dict[str, Any]]:
    return player_repository.list_all(db)

def get_player(db: Session, player_id: int) -> Dict[str, Any]:
    player = player_repository.get_detail(db, player_id)
    if not player:
        raise NotFound("Jugador no encontrado")
    return player

def create_player(db: Session, player: player_schemas.PlayerCreate, current_user: auth_schemas.CurrentUser) -> Player:
    team = team_repository.get(db, player.equipo_id)
    if not team:
        raise NotFound("El equipo especificado no existe")
    authorize(current_user, Capability.EDIT_FIXTURE, owner_id=team.torneo.organizador_id,
              message="No tienes permisos para agregar jugadores a este equipo")
    if player.nro_camiseta is not None and player_repository.shirt_number_taken(db, team.id, player.nro_camiseta):
        raise Conflict(SHIRT_TAKEN)
    db_player = player_repository.create(db, player.model_dump())
    logger.info("Player %s added to team %s", db_player.id, team.id)
    return db_player

def update_player(
    db: Session,
    player_id: int,
    player_update: player_schemas.PlayerUpdate,
    current_user: auth_schemas.CurrentUser,
) -> Player:
    db_player = get_player_or_404(db, player_id)
    authorize(current_user, Capability.EDIT_FIXTURE, owner_id=db_player.equipo.torneo.organizador_id,
              message="No tienes permisos para modificar este jugador")
    patch = player_update.to_patch()
    if "nro_camiseta" in patch and player_repository.shirt_number_taken(
        db, db_player.equipo_id, patch["nro_camiseta"], exclude_id=player_id
    ):
        raise Conflict(SHIRT_TAKEN)
    return player_repository.update(db, db_player, patch)

def delete_player(db: Session, player_id: int, current_user: auth_schemas.CurrentUser) -> None:
    db_player = get_player_or_404(db, player_id)
    authorize(current_user, Capability.DELETE_FIXTURE, owner_id=db_player.equipo.torneo.organizador_id,
              message="No tienes permisos para eliminar este jugador")
    player_repository.delete(db, db_player)
    logger.info("Player %s deleted by user %s", player_id, current_user.id)
