import asyncio
import time
from unittest.mock import patch

import httpx
import pytest

from app.core import security
from app.core.database import Database
from app.main import create_app
from app.repositories import role_repository
from tests.factories import PASSWORD, make_user

VERIFY_DELAY = 0.3
EMAILS = [f"delegado{i}@torneos.com" for i in range(4)]

real_verify_password = security.verify_password


def _slow_verify_password(plain_password, hashed_password):
    time.sleep(VERIFY_DELAY)
    return real_verify_password(plain_password, hashed_password)


@pytest.fixture
def file_database(tmp_path):
    # A file database gives every worker thread its own connection
    database = Database(f"sqlite:///{tmp_path / 'torneos.db'}")
    database.create_all()
    session = database.session()
    role_repository.seed_defaults(session)
    for email in EMAILS:
        make_user(session, "delegado", email)
    session.close()
    yield database
    database.dispose()


async def _login_all(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        started = time.perf_counter()
        responses = await asyncio.gather(*[
            client.post("/auth/login", json={"email": email, "password": PASSWORD}) for email in EMAILS
        ])
        return responses, time.perf_counter() - started


class TestConcurrentRequests:

    def test_logins_run_in_parallel(self, file_database):
        app = create_app(database=file_database)
        with patch("app.core.security.verify_password", side_effect=_slow_verify_password):
            responses, elapsed = asyncio.run(_login_all(app))

        assert [r.status_code for r in responses] == [200] * len(EMAILS)
        # One after another would take at least len(EMAILS) * VERIFY_DELAY
        assert elapsed < VERIFY_DELAY * len(EMAILS) * 0.75
