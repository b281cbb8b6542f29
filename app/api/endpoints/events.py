from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.api.responses import success
from app.core.permissions import Capability
from app.services import auth_service, event_service
from app.schemas import auth_schemas, event_schemas

router = APIRouter()

fixture_staff = auth_service.require(Capability.MANAGE_FIXTURES)

def _match_block(match) -> dict:
    return {
        "id": match["id"],
        "local": match["equipo_local_nombre"],
        "visitante": match["equipo_visitante_nombre"],
        "marcador": f"{match['marcador_local']} - {match['marcador_visitante']}",
    }

@router.get("")
def list_events_endpoint(db: Session = Depends(get_db)):
    events = [event_schemas.EventDetail.model_validate(e) for e in event_service.list_events(db)]
    return success("Eventos obtenidos exitosamente", data=events, total=len(events))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_event_endpoint(
    event_in: event_schemas.EventCreate,
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    event = event_service.create_event(db, event_in)
    return success(
        "Evento registrado exitosamente",
        data=event_schemas.EventDetail.model_validate(event_service.get_event(db, event.id)),
    )

@router.get("/partido/{match_id}")
def list_match_events_endpoint(
    match_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    match, events = event_service.list_by_match(db, match_id)
    events = [event_schemas.EventDetail.model_validate(e) for e in events]
    return success(
        "Eventos del partido obtenidos exitosamente",
        data=events,
        total=len(events),
        partido=_match_block(match),
    )

@router.get("/partido/{match_id}/goleadores")
def match_top_scorers_endpoint(
    match_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    match, scorers = event_service.top_scorers(db, match_id)
    scorers = [event_schemas.TopScorer.model_validate(s) for s in scorers]
    return success(
        "Goleadores del partido obtenidos exitosamente",
        data=scorers,
        total=len(scorers),
        partido=_match_block(match),
    )

@router.get("/{event_id}")
def get_event_endpoint(
    event_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    event = event_service.get_event(db, event_id)
    return success("Evento encontrado", data=event_schemas.EventDetail.model_validate(event))

@router.put("/{event_id}")
def update_event_endpoint(
    event_in: event_schemas.EventUpdate,
    event_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    event = event_service.update_event(db, event_id, event_in, current_user)
    return success(
        "Evento actualizado exitosamente",
        data=event_schemas.EventDetail.model_validate(event_service.get_event(db, event.id)),
    )

@router.delete("/{event_id}")
def delete_event_endpoint(
    event_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    event_service.delete_event(db, event_id, current_user)
    return success("Evento eliminado exitosamente")
