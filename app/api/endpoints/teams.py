from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.api.responses import success
from app.core.permissions import Capability
from app.services import auth_service, team_service
from app.schemas import auth_schemas, player_schemas, team_schemas

router = APIRouter()

fixture_staff = auth_service.require(Capability.MANAGE_FIXTURES)

@router.get("")
def list_teams_endpoint(db: Session = Depends(get_db)):
    teams = [team_schemas.TeamRead.model_validate(t) for t in team_service.list_teams(db)]
    return success("Equipos obtenidos exitosamente", data=teams, total=len(teams))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_team_endpoint(
    team_in: team_schemas.TeamCreate,
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    team = team_service.create_team(db, team_in, current_user)
    return success(
        "Equipo creado exitosamente",
        data=team_schemas.TeamRead.model_validate(team_service.get_team(db, team.id)),
    )

@router.get("/{team_id}")
def get_team_endpoint(
    team_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    team = team_service.get_team(db, team_id)
    return success("Equipo encontrado", data=team_schemas.TeamRead.model_validate(team))

@router.put("/{team_id}")
def update_team_endpoint(
    team_in: team_schemas.TeamUpdate,
    team_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    team = team_service.update_team(db, team_id, team_in, current_user)
    return success(
        "Equipo actualizado exitosamente",
        data=team_schemas.TeamRead.model_validate(team_service.get_team(db, team.id)),
    )

@router.delete("/{team_id}")
def delete_team_endpoint(
    team_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    team_service.delete_team(db, team_id, current_user)
    return success("Equipo eliminado exitosamente")

@router.get("/{team_id}/jugadores")
def list_team_players_endpoint(
    team_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    team, players = team_service.list_players(db, team_id)
    players = [player_schemas.PlayerRead.model_validate(p) for p in players]
    return success(
        "Jugadores del equipo obtenidos exitosamente",
        data=players,
        total=len(players),
        equipo={"id": team.id, "nombre": team.nombre},
    )
