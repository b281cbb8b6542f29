import pytest
from pydantic import ValidationError as SchemaValidationError

from app.core.exceptions import Forbidden, NotFound, ValidationError
from app.schemas.event_schemas import EventCreate, EventUpdate
from app.services import event_service
from tests.factories import identity, make_event, make_player, make_team


class TestCreateEvent:

    def test_record_goal(self, db, fixture_data):
        event = event_service.create_event(db, EventCreate(
            partido_id=fixture_data["match"].id,
            jugador_id=fixture_data["home_player"].id,
            tipo="gol",
            minuto=23,
        ))
        detail = event_service.get_event(db, event.id)
        assert detail["tipo"] == "gol"
        assert detail["jugador_nombre"] == "Juan Pérez"
        assert detail["equipo_jugador"] == "Halcones"
        assert detail["equipo_local"] == "Halcones"

    @pytest.mark.parametrize("minuto", [0, 120])
    def test_minute_bounds_are_inclusive(self, minuto):
        assert EventCreate(partido_id=1, jugador_id=1, tipo="cambio", minuto=minuto).minuto == minuto

    @pytest.mark.parametrize("minuto", [-1, 121])
    def test_minute_out_of_bounds(self, minuto):
        with pytest.raises(SchemaValidationError):
            EventCreate(partido_id=1, jugador_id=1, tipo="gol", minuto=minuto)

    def test_unknown_event_type(self):
        with pytest.raises(SchemaValidationError):
            EventCreate(partido_id=1, jugador_id=1, tipo="penal", minuto=3)

    def test_unknown_match(self, db, fixture_data):
        with pytest.raises(NotFound) as excinfo:
            event_service.create_event(db, EventCreate(
                partido_id=999, jugador_id=fixture_data["home_player"].id, tipo="gol", minuto=1,
            ))
        assert excinfo.value.message == "El partido especificado no existe"

    def test_unknown_player(self, db, fixture_data):
        with pytest.raises(NotFound) as excinfo:
            event_service.create_event(db, EventCreate(
                partido_id=fixture_data["match"].id, jugador_id=999, tipo="gol", minuto=1,
            ))
        assert excinfo.value.message == "El jugador especificado no existe"

    def test_player_outside_match(self, db, fixture_data):
        bench = make_team(db, fixture_data["tournament"], "Pumas")
        outsider = make_player(db, bench, "Pedro", "Ruiz", 7)
        with pytest.raises(ValidationError) as excinfo:
            event_service.create_event(db, EventCreate(
                partido_id=fixture_data["match"].id, jugador_id=outsider.id, tipo="gol", minuto=40,
            ))
        assert excinfo.value.detail == {
            "jugador": {"nombre": "Pedro Ruiz", "equipo": "Pumas"},
            "partido": {"local": "Halcones", "visitante": "Tigres"},
        }


class TestUpdateAndDeleteEvent:

    def test_delegate_edits_event(self, db, delegate, fixture_data):
        event = make_event(db, fixture_data["match"], fixture_data["home_player"], minuto=10)
        updated = event_service.update_event(db, event.id, EventUpdate(minuto=12), identity(delegate))
        assert updated.minuto == 12
        assert updated.tipo == "gol"

    def test_other_organizer_cannot_edit(self, db, other_organizer, fixture_data):
        event = make_event(db, fixture_data["match"], fixture_data["home_player"])
        with pytest.raises(Forbidden):
            event_service.update_event(db, event.id, EventUpdate(minuto=12), identity(other_organizer))

    def test_delegate_cannot_delete(self, db, delegate, fixture_data):
        event = make_event(db, fixture_data["match"], fixture_data["home_player"])
        with pytest.raises(Forbidden):
            event_service.delete_event(db, event.id, identity(delegate))

    def test_admin_deletes_event(self, db, admin, fixture_data):
        event = make_event(db, fixture_data["match"], fixture_data["home_player"])
        event_service.delete_event(db, event.id, identity(admin))
        with pytest.raises(NotFound):
            event_service.get_event(db, event.id)


class TestMatchEventListings:

    def test_events_ordered_by_minute(self, db, fixture_data):
        match = fixture_data["match"]
        make_event(db, match, fixture_data["home_player"], minuto=70)
        make_event(db, match, fixture_data["away_player"], tipo="tarjeta_roja", minuto=15)
        _, rows = event_service.list_by_match(db, match.id)
        assert [r["minuto"] for r in rows] == [15, 70]

    def test_top_scorers_of_unknown_match(self, db):
        with pytest.raises(NotFound):
            event_service.top_scorers(db, 321)

    def test_top_scorers_count_only_goals(self, db, fixture_data):
        match = fixture_data["match"]
        make_event(db, match, fixture_data["home_player"], minuto=5)
        make_event(db, match, fixture_data["home_player"], tipo="autogol", minuto=20)
        make_event(db, match, fixture_data["away_player"], tipo="tarjeta_amarilla", minuto=25)
        _, rows = event_service.top_scorers(db, match.id)
        assert rows == [{
            "jugador_id": fixture_data["home_player"].id,
            "jugador_nombre": "Juan Pérez",
            "nro_camiseta": 9,
            "equipo_nombre": "Halcones",
            "goles": 1,
        }]
