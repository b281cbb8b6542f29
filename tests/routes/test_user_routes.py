from tests.factories import auth_header


class TestUserRoutes:

    def _new_user(self, client, admin, **overrides):
        payload = {
            "nombre": "Carla",
            "apellido": "Díaz",
            "email": "carla@torneos.com",
            "password": "password1",
            "rol_id": 3,
        }
        payload.update(overrides)
        return client.post("/usuarios", json=payload, headers=auth_header(admin))

    def test_admin_creates_user(self, client, admin):
        response = self._new_user(client, admin)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["rol"]["nombre"] == "delegado"
        assert data["activo"] is True

    def test_duplicate_email(self, client, admin):
        self._new_user(client, admin)
        response = self._new_user(client, admin)
        assert response.status_code == 409

    def test_unknown_role(self, client, admin):
        response = self._new_user(client, admin, rol_id=77)
        assert response.status_code == 400

    def test_non_admin_is_forbidden(self, client, organizer):
        response = client.get("/usuarios", headers=auth_header(organizer))
        assert response.status_code == 403

    def test_list_users(self, client, admin, delegate):
        body = client.get("/usuarios", headers=auth_header(admin)).json()
        assert body["total"] == 2
        assert all("password_hash" not in u for u in body["data"])

    def test_reset_password(self, client, admin, delegate):
        response = client.put(
            f"/usuarios/{delegate.id}/password", json={"password": "nuevaclave1"}, headers=auth_header(admin)
        )
        assert response.status_code == 200
        login = client.post("/auth/login", json={"email": delegate.email, "password": "nuevaclave1"})
        assert login.status_code == 200

    def test_admin_cannot_delete_self(self, client, admin):
        response = client.delete(f"/usuarios/{admin.id}", headers=auth_header(admin))
        assert response.status_code == 400
        assert response.json()["message"] == "No puedes eliminar tu propia cuenta"

    def test_deactivated_user_token_is_rejected(self, client, admin, delegate):
        headers = auth_header(delegate)
        client.delete(f"/usuarios/{delegate.id}", headers=auth_header(admin))
        assert client.get("/auth/perfil", headers=headers).status_code == 401
