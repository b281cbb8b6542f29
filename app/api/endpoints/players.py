from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.api.responses import success
from app.core.permissions import Capability
from app.services import auth_service, player_service
from app.schemas import auth_schemas, player_schemas

router = APIRouter()

fixture_staff = auth_service.require(Capability.MANAGE_FIXTURES)

def _read(row) -> player_schemas.PlayerRead:
    return player_schemas.PlayerRead.model_validate(row)

@router.get("")
def list_players_endpoint(db: Session = Depends(get_db)):
    players = [_read(p) for p in player_service.list_players(db)]
    return success("Jugadores obtenidos exitosamente", data=players, total=len(players))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_player_endpoint(
    player_in: player_schemas.PlayerCreate,
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    player = player_service.create_player(db, player_in, current_user)
    return success("Jugador creado exitosamente", data=_read(player_service.get_player(db, player.id)))

@router.get("/{player_id}")
def get_player_endpoint(
    player_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    player = player_service.get_player(db, player_id)
    return success("Jugador encontrado", data=_read(player))

@router.put("/{player_id}")
def update_player_endpoint(
    player_in: player_schemas.PlayerUpdate,
    player_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    player = player_service.update_player(db, player_id, player_in, current_user)
    return success("Jugador actualizado exitosamente", data=_read(player_service.get_player(db, player.id)))

@router.delete("/{player_id}")
def delete_player_endpoint(
    player_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: auth_schemas.CurrentUser = Depends(fixture_staff),
):
    player_service.delete_player(db, player_id, current_user)
    return success("Jugador eliminado exitosamente")
