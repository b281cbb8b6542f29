from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.api.responses import success
from app.core.permissions import Capability
from app.services import auth_service, tournament_service
from app.schemas import auth_schemas, team_schemas, tournament_schemas

router = APIRouter()

def _read(row) -> tournament_schemas.TournamentRead:
    return tournament_schemas.TournamentRead.model_validate(row)

@router.get("")
def list_tournaments_endpoint(db: Session = Depends(get_db)):
    tournaments = [_read(t) for t in tournament_service.list_tournaments(db)]
    return success("Torneos obtenidos exitosamente", data=tournaments, total=len(tournaments))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_tournament_endpoint(
    tournament_in: tournament_schemas.TournamentCreate,
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(auth_service.require(Capability.CREATE_TOURNAMENT)),
):
    tournament = tournament_service.create_tournament(db, tournament_in, organizer_id=current_user.id)
    return success("Torneo creado exitosamente", data=_read(tournament_service.get_tournament(db, tournament.id)))

@router.get("/obtener/mis-torneos")
def my_tournaments_endpoint(
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(auth_service.get_current_user),
):
    tournaments = [_read(t) for t in tournament_service.list_by_organizer(db, current_user.id)]
    return success("Tus torneos obtenidos exitosamente", data=tournaments, total=len(tournaments))

@router.get("/estado/{estado}")
def tournaments_by_status_endpoint(estado: str, db: Session = Depends(get_db)):
    tournaments = [_read(t) for t in tournament_service.list_by_status(db, estado)]
    return success(
        f"Torneos con estado '{estado}' obtenidos exitosamente",
        data=tournaments,
        total=len(tournaments),
    )

@router.get("/{tournament_id}")
def get_tournament_endpoint(
    tournament_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    tournament = tournament_service.get_tournament(db, tournament_id)
    return success("Torneo encontrado", data=_read(tournament))

@router.put("/{tournament_id}")
def update_tournament_endpoint(
    tournament_in: tournament_schemas.TournamentUpdate,
    tournament_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(auth_service.require(Capability.CREATE_TOURNAMENT)),
):
    tournament = tournament_service.update_tournament(db, tournament_id, tournament_in, current_user)
    return success("Torneo actualizado exitosamente", data=_read(tournament_service.get_tournament(db, tournament.id)))

@router.delete("/{tournament_id}")
def delete_tournament_endpoint(
    tournament_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(auth_service.require(Capability.DELETE_TOURNAMENT)),
):
    tournament_service.delete_tournament(db, tournament_id)
    return success("Torneo eliminado exitosamente")

@router.get("/{tournament_id}/equipos")
def list_tournament_teams_endpoint(
    tournament_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    tournament, teams = tournament_service.list_teams(db, tournament_id)
    teams = [team_schemas.TeamRead.model_validate(t) for t in teams]
    return success(
        "Equipos del torneo obtenidos exitosamente",
        data=teams,
        total=len(teams),
        torneo={"id": tournament.id, "nombre": tournament.nombre, "disciplina": tournament.disciplina},
    )
