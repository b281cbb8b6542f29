import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound
from app.core.permissions import Capability, authorize
from app.models import Team
from app.repositories import team_repository, tournament_repository
from app.schemas import auth_schemas, team_schemas

logger = logging.getLogger(__name__)

def get_team_or_404(db: Session, team_id: int) -> Team:
    team = team_repository.get(db, team_id)
    if not team:
        raise NotFound("Equipo no encontrado")
    return team

def list_teams(db: Session) -> List[Dict[str, Any]]:
    return team_repository.list_all(db)

def get_team(db: Session, team_id: int) -> Dict[str, Any]:
    team = team_repository.get_detail(db, team_id)
    if not team:
        raise NotFound("Equipo no encontrado")
    return team

def create_team(db: Session, team: team_schemas.TeamCreate, current_user: auth_schemas.CurrentUser) -> Team:
    tournament = tournament_repository.get(db, team.torneo_id)
    if not tournament:
        raise NotFound("El torneo especificado no existe")
    authorize(current_user, Capability.EDIT_FIXTURE, owner_id=tournament.organizador_id,
              message="No tienes permisos para agregar equipos a este torneo")
    db_team = team_repository.create(db, team.model_dump())
    logger.info("Team %s created in tournament %s", db_team.id, tournament.id)
    return db_team

def update_team(
    db: Session,
    team_id: int,
    team_update: team_schemas.TeamUpdate,
    current_user: auth_schemas.CurrentUser,
) -> Team:
    db_team = get_team_or_404(db, team_id)
    authorize(current_user, Capability.EDIT_FIXTURE, owner_id=db_team.torneo.organizador_id,
              message="No tienes permisos para modificar este equipo")
    return team_repository.update(db, db_team, team_update.to_patch())

def delete_team(db: Session, team_id: int, current_user: auth_schemas.CurrentUser) -> None:
    db_team = get_team_or_404(db, team_id)
    authorize(current_user, Capability.DELETE_FIXTURE, owner_id=db_team.torneo.organizador_id,
              message="No tienes permisos para eliminar este equipo")
    team_repository.delete(db, db_team)
    logger.info("Team %s deleted by user %s", team_id, current_user.id)

def list_players(db: Session, team_id: int):
    team = get_team_or_404(db, team_id)
    return team, team_repository.list_players(db, team_id)
