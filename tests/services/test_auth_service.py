from datetime import timedelta

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.core import security
from app.core.exceptions import AccountInactive, InvalidCredentials, Unauthorized
from app.schemas.auth_schemas import ChangePasswordRequest
from app.services import auth_service
from tests.factories import PASSWORD, make_user


class TestLogin:

    def test_login_success(self, db, organizer):
        token, user = auth_service.login(db, organizer.email, PASSWORD)
        assert user.id == organizer.id
        payload = security.decode_access_token(token)
        assert payload["sub"] == str(organizer.id)
        assert payload["rol_nombre"] == "organizador"

    def test_unknown_email_and_wrong_password_look_alike(self, db, organizer):
        with pytest.raises(InvalidCredentials) as unknown:
            auth_service.login(db, "nadie@torneos.com", PASSWORD)
        with pytest.raises(InvalidCredentials) as wrong:
            auth_service.login(db, organizer.email, "incorrecta")
        assert unknown.value.message == wrong.value.message

    def test_inactive_account(self, db):
        user = make_user(db, "delegado", "inactivo@torneos.com", activo=False)
        with pytest.raises(AccountInactive):
            auth_service.login(db, user.email, PASSWORD)


class TestVerifyToken:

    def test_missing_token(self, db):
        with pytest.raises(Unauthorized):
            auth_service.verify_token(db, None)

    def test_garbage_token(self, db):
        with pytest.raises(Unauthorized):
            auth_service.verify_token(db, "no-es-un-jwt")

    def test_expired_token(self, db, organizer):
        token = security.create_access_token({"sub": str(organizer.id)}, expires_delta=timedelta(minutes=-1))
        with pytest.raises(Unauthorized):
            auth_service.verify_token(db, token)

    def test_token_without_numeric_subject(self, db):
        token = security.create_access_token({"sub": "abc"})
        with pytest.raises(Unauthorized):
            auth_service.verify_token(db, token)

    def test_token_of_deactivated_user(self, db, delegate):
        token = auth_service.create_token_for(delegate)
        delegate.activo = False
        db.commit()
        with pytest.raises(Unauthorized):
            auth_service.verify_token(db, token)

    def test_identity_reflects_stored_role(self, db, delegate):
        current = auth_service.verify_token(db, auth_service.create_token_for(delegate))
        assert current.id == delegate.id
        assert current.rol_nombre == "delegado"


class TestChangePassword:

    def test_change_password(self, db, organizer):
        auth_service.change_password(db, organizer.id, PASSWORD, "NuevaClave9$")
        token, _ = auth_service.login(db, organizer.email, "NuevaClave9$")
        assert token

    def test_wrong_current_password(self, db, organizer):
        with pytest.raises(InvalidCredentials):
            auth_service.change_password(db, organizer.id, "incorrecta", "NuevaClave9$")

    @pytest.mark.parametrize("weak", ["corta1$", "sinmayuscula1$", "SINMINUSCULA1$", "SinNumeros$$", "SinSimbolo123"])
    def test_policy_rejects_weak_passwords(self, weak):
        with pytest.raises(SchemaValidationError):
            ChangePasswordRequest(passwordActual=PASSWORD, passwordNuevo=weak)

    def test_new_password_capped_at_bcrypt_limit(self):
        accepted = ChangePasswordRequest(passwordActual=PASSWORD, passwordNuevo="Aa1$" + "x" * 68)
        assert len(accepted.password_nuevo) == 72
        with pytest.raises(SchemaValidationError):
            ChangePasswordRequest(passwordActual=PASSWORD, passwordNuevo="Aa1$" + "x" * 69)

    def test_new_password_must_differ(self):
        with pytest.raises(SchemaValidationError):
            ChangePasswordRequest(passwordActual=PASSWORD, passwordNuevo=PASSWORD)

    def test_policy_lists_every_broken_rule(self):
        assert security.check_password_policy("abc") == [
            "al menos 8 caracteres",
            "al menos una letra mayúscula",
            "al menos un número",
            "al menos un símbolo",
        ]
