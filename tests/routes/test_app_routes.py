from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


class TestAppRoutes:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_health_when_database_is_down(self, client, app):
        with patch.object(app.state.db, "ping", return_value=False):
            response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["success"] is False

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/no-existe")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_database_error_echoes_text(self, app):
        with TestClient(app, raise_server_exceptions=False) as client:
            with patch("app.services.tournament_service.list_tournaments",
                       side_effect=OperationalError("SELECT 1", {}, Exception("conexión perdida"))):
                response = client.get("/torneos")
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Error en la base de datos"
        assert "conexión perdida" in body["error"]

    def test_unexpected_error_echoes_text(self, app):
        with TestClient(app, raise_server_exceptions=False) as client:
            with patch("app.services.tournament_service.list_tournaments", side_effect=RuntimeError("fallo raro")):
                response = client.get("/torneos")
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Error interno del servidor",
            "error": "fallo raro",
        }
