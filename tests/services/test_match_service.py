from datetime import date, datetime

import pytest

from app.core.exceptions import Forbidden, NotFound, ValidationError
from app.schemas.match_schemas import MatchCreate, MatchUpdate
from app.services import match_service
from tests.factories import identity, make_event, make_team, make_tournament


def _payload(data, **overrides):
    values = {
        "torneo_id": data["tournament"].id,
        "equipo_local_id": data["home"].id,
        "equipo_visitante_id": data["away"].id,
        "fecha": datetime(2025, 5, 10, 16, 0),
        "lugar": "Estadio Municipal",
    }
    values.update(overrides)
    return MatchCreate(**values)


class TestDateWithinRange:

    @pytest.mark.parametrize("match_date, expected", [
        (datetime(2025, 3, 1, 0, 0), True),
        (datetime(2025, 6, 30, 23, 59), True),
        (datetime(2025, 2, 28, 23, 59), False),
        (datetime(2025, 7, 1, 0, 0), False),
    ])
    def test_bounds_are_inclusive_by_day(self, match_date, expected):
        assert match_service.date_within_range(match_date, date(2025, 3, 1), date(2025, 6, 30)) is expected


class TestCreateMatch:

    def test_create_match_defaults_to_pending(self, db, fixture_data):
        match = match_service.create_match(db, _payload(fixture_data))
        assert match.estado == "pendiente"
        assert match.marcador_local == 0
        assert match.marcador_visitante == 0

    def test_unknown_tournament(self, db, fixture_data):
        with pytest.raises(NotFound) as excinfo:
            match_service.create_match(db, _payload(fixture_data, torneo_id=999))
        assert excinfo.value.message == "El torneo especificado no existe"

    def test_unknown_team(self, db, fixture_data):
        with pytest.raises(NotFound) as excinfo:
            match_service.create_match(db, _payload(fixture_data, equipo_visitante_id=999))
        assert excinfo.value.message == "Uno o ambos equipos no existen"

    def test_team_from_other_tournament(self, db, organizer, fixture_data):
        other = make_tournament(db, organizer, nombre="Liga Clausura")
        stranger = make_team(db, other, "Leones")
        with pytest.raises(ValidationError) as excinfo:
            match_service.create_match(db, _payload(fixture_data, equipo_visitante_id=stranger.id))
        detail = excinfo.value.detail
        assert detail["equipo_local"] == {"nombre": "Halcones", "torneo": "Liga Apertura"}
        assert detail["equipo_visitante"] == {"nombre": "Leones", "torneo": "Liga Clausura"}
        assert detail["torneo_esperado"] == "Liga Apertura"

    def test_date_outside_tournament(self, db, fixture_data):
        with pytest.raises(ValidationError) as excinfo:
            match_service.create_match(db, _payload(fixture_data, fecha=datetime(2025, 7, 1, 10, 0)))
        assert excinfo.value.message == match_service.OUT_OF_RANGE
        assert excinfo.value.detail["torneo_fin"] == date(2025, 6, 30)

    def test_first_failing_check_wins(self, db, organizer, fixture_data):
        other = make_tournament(db, organizer, nombre="Liga Clausura")
        stranger = make_team(db, other, "Leones")
        # Both the membership and the date checks fail; membership is reported
        with pytest.raises(ValidationError) as excinfo:
            match_service.create_match(
                db,
                _payload(fixture_data, equipo_visitante_id=stranger.id, fecha=datetime(2030, 1, 1)),
            )
        assert "torneo_esperado" in excinfo.value.detail


class TestUpdateAndDeleteMatch:

    def test_owner_records_score(self, db, organizer, fixture_data):
        match = fixture_data["match"]
        updated = match_service.update_match(
            db, match.id, MatchUpdate(marcador_local=2, marcador_visitante=1, estado="finalizado"),
            identity(organizer),
        )
        assert (updated.marcador_local, updated.marcador_visitante) == (2, 1)
        assert updated.estado == "finalizado"

    def test_delegate_can_edit_any_match(self, db, delegate, fixture_data):
        updated = match_service.update_match(
            db, fixture_data["match"].id, MatchUpdate(lugar="Cancha 2"), identity(delegate)
        )
        assert updated.lugar == "Cancha 2"

    def test_status_may_move_backwards(self, db, organizer, fixture_data):
        match_id = fixture_data["match"].id
        match_service.update_match(db, match_id, MatchUpdate(estado="finalizado"), identity(organizer))
        updated = match_service.update_match(db, match_id, MatchUpdate(estado="pendiente"), identity(organizer))
        assert updated.estado == "pendiente"

    def test_other_organizer_cannot_edit(self, db, other_organizer, fixture_data):
        with pytest.raises(Forbidden):
            match_service.update_match(
                db, fixture_data["match"].id, MatchUpdate(lugar="Cancha 2"), identity(other_organizer)
            )

    def test_moving_date_outside_tournament(self, db, organizer, fixture_data):
        with pytest.raises(ValidationError):
            match_service.update_match(
                db, fixture_data["match"].id, MatchUpdate(fecha=datetime(2026, 1, 1)), identity(organizer)
            )

    def test_delegate_cannot_delete(self, db, delegate, fixture_data):
        with pytest.raises(Forbidden):
            match_service.delete_match(db, fixture_data["match"].id, identity(delegate))

    def test_owner_deletes_match_and_events(self, db, organizer, fixture_data):
        match = fixture_data["match"]
        make_event(db, match, fixture_data["home_player"])
        match_service.delete_match(db, match.id, identity(organizer))
        with pytest.raises(NotFound):
            match_service.get_match(db, match.id)


class TestMatchListings:

    def test_list_by_team_marks_side(self, db, fixture_data):
        team, rows = match_service.list_by_team(db, fixture_data["away"].id)
        assert team.nombre == "Tigres"
        assert [r["tipo_participacion"] for r in rows] == ["visitante"]
        assert rows[0]["torneo_nombre"] == "Liga Apertura"

    def test_list_by_tournament(self, db, fixture_data):
        tournament, rows = match_service.list_by_tournament(db, fixture_data["tournament"].id)
        assert tournament.id == fixture_data["tournament"].id
        assert rows[0]["equipo_local_nombre"] == "Halcones"
        assert rows[0]["equipo_visitante_nombre"] == "Tigres"

    def test_get_match_counts_events(self, db, fixture_data):
        make_event(db, fixture_data["match"], fixture_data["home_player"], minuto=5)
        make_event(db, fixture_data["match"], fixture_data["away_player"], tipo="tarjeta_amarilla", minuto=30)
        detail = match_service.get_match(db, fixture_data["match"].id)
        assert detail["total_eventos"] == 2
        assert detail["torneo_organizador_id"] == fixture_data["tournament"].organizador_id

    def test_list_events_of_unknown_match(self, db):
        with pytest.raises(NotFound):
            match_service.list_events(db, 404)
