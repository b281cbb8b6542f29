from app.repositories import event_repository
from tests.factories import make_event, make_match, make_player


class TestTopScorers:

    def test_ordered_by_goals_then_name(self, db, fixture_data):
        match = fixture_data["match"]
        home, away = fixture_data["home"], fixture_data["away"]
        zarate = make_player(db, home, "Ana", "Zárate", 11)
        alvarez = make_player(db, away, "Bruno", "Álvarez", 8)

        for minuto in (3, 50):
            make_event(db, match, zarate, minuto=minuto)
        make_event(db, match, fixture_data["home_player"], minuto=12)
        make_event(db, match, fixture_data["away_player"], minuto=60)
        make_event(db, match, alvarez, tipo="tarjeta_roja", minuto=70)

        rows = event_repository.top_scorers(db, match.id)

        assert [(r["jugador_nombre"], r["goles"]) for r in rows] == [
            ("Ana Zárate", 2),
            ("Juan Pérez", 1),
            ("Luis Gómez", 1),
        ]

    def test_match_without_goals(self, db, fixture_data):
        assert event_repository.top_scorers(db, fixture_data["match"].id) == []

    def test_goals_of_other_matches_are_ignored(self, db, fixture_data):
        match = fixture_data["match"]
        rematch = make_match(db, fixture_data["tournament"], fixture_data["away"], fixture_data["home"])
        make_event(db, rematch, fixture_data["home_player"], minuto=1)
        make_event(db, match, fixture_data["away_player"], minuto=2)

        rows = event_repository.top_scorers(db, match.id)
        assert [r["jugador_nombre"] for r in rows] == ["Luis Gómez"]
