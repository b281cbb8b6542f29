import os

# Settings are read at import time, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from app.core.database import Database
from app.main import create_app
from app.repositories import role_repository
from tests.factories import make_match, make_player, make_team, make_tournament, make_user


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    session = database.session()
    role_repository.seed_defaults(session)
    session.close()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin(db):
    return make_user(db, "admin", "admin@torneos.com")


@pytest.fixture
def organizer(db):
    return make_user(db, "organizador", "organizador@torneos.com")


@pytest.fixture
def other_organizer(db):
    return make_user(db, "organizador", "otro.organizador@torneos.com")


@pytest.fixture
def delegate(db):
    return make_user(db, "delegado", "delegado@torneos.com")


@pytest.fixture
def participant(db):
    return make_user(db, "participante", "participante@torneos.com")


@pytest.fixture
def fixture_data(db, organizer):
    """A tournament with two teams, one player each and a scheduled match."""
    tournament = make_tournament(db, organizer)
    home = make_team(db, tournament, "Halcones")
    away = make_team(db, tournament, "Tigres")
    home_player = make_player(db, home, "Juan", "Pérez", 9)
    away_player = make_player(db, away, "Luis", "Gómez", 10)
    match = make_match(db, tournament, home, away)
    return {
        "tournament": tournament,
        "home": home,
        "away": away,
        "home_player": home_player,
        "away_player": away_player,
        "match": match,
    }
