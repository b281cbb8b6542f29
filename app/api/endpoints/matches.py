from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.api.responses import success
from app.core.permissions import Capability
from app.services import auth_service, match_service
from app.schemas import auth_schemas, event_schemas, match_schemas

router = APIRouter()

fixture_staff = auth_service.require(Capability.MANAGE_FIXTURES)

def _detail(row) -> match_schemas.MatchDetail:
    return match_schemas.MatchDetail.model_validate(row)

@router.get("")
def list_matches_endpoint(db: Session = Depends(get_db)):
    matches = [_detail(m) for m in match_service.list_matches(db)]
    return success("Partidos obtenidos exitosamente", data=matches, total=len(matches))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_match_endpoint(
    match_in: match_schemas.MatchCreate,
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    match = match_service.create_match(db, match_in)
    return success("Partido creado exitosamente", data=_detail(match_service.get_match(db, match.id)))

@router.get("/torneo/{tournament_id}")
def list_tournament_matches_endpoint(
    tournament_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    tournament, matches = match_service.list_by_tournament(db, tournament_id)
    matches = [_detail(m) for m in matches]
    return success(
        "Partidos del torneo obtenidos exitosamente",
        data=matches,
        total=len(matches),
        torneo={"id": tournament.id, "nombre": tournament.nombre, "disciplina": tournament.disciplina},
    )

@router.get("/equipo/{team_id}")
def list_team_matches_endpoint(
    team_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    team, matches = match_service.list_by_team(db, team_id)
    matches = [match_schemas.TeamMatchRead.model_validate(m) for m in matches]
    return success(
        "Partidos del equipo obtenidos exitosamente",
        data=matches,
        total=len(matches),
        equipo={"id": team.id, "nombre": team.nombre, "color": team.color},
    )

@router.get("/{match_id}")
def get_match_endpoint(
    match_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    match = match_service.get_match(db, match_id)
    return success("Partido encontrado", data=_detail(match))

@router.put("/{match_id}")
def update_match_endpoint(
    match_in: match_schemas.MatchUpdate,
    match_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    match = match_service.update_match(db, match_id, match_in, current_user)
    return success("Partido actualizado exitosamente", data=_detail(match_service.get_match(db, match.id)))

@router.delete("/{match_id}")
def delete_match_endpoint(
    match_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    match_service.delete_match(db, match_id, current_user)
    return success("Partido eliminado exitosamente")

@router.get("/{match_id}/eventos")
def list_match_events_endpoint(
    match_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    match, events = match_service.list_events(db, match_id)
    events = [event_schemas.EventDetail.model_validate(e) for e in events]
    return success(
        "Eventos del partido obtenidos exitosamente",
        data=events,
        total=len(events),
        partido={
            "id": match["id"],
            "local": match["equipo_local_nombre"],
            "visitante": match["equipo_visitante_nombre"],
            "marcador": f"{match['marcador_local']} - {match['marcador_visitante']}",
        },
    )
