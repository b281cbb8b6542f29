import pytest

from app.core import security
from app.core.exceptions import Conflict, NotFound, ValidationError
from app.repositories import role_repository
from app.schemas.user_schemas import UserCreate, UserUpdate
from app.services import user_service
from tests.factories import identity


def _new_user(db, email="nuevo@torneos.com", role="delegado"):
    return UserCreate(
        nombre="Nuevo",
        apellido="Usuario",
        email=email,
        password="password1",
        rol_id=role_repository.get_by_name(db, role).id,
    )


class TestUserService:

    def test_create_user_hashes_password(self, db):
        user = user_service.create_user(db, _new_user(db))
        assert user.activo is True
        assert user.password_hash != "password1"
        assert security.verify_password("password1", user.password_hash)
        assert user.rol.nombre == "delegado"

    def test_create_user_duplicate_email(self, db, admin):
        with pytest.raises(Conflict):
            user_service.create_user(db, _new_user(db, email=admin.email))

    def test_create_user_unknown_role(self, db):
        data = _new_user(db)
        data.rol_id = 99
        with pytest.raises(ValidationError):
            user_service.create_user(db, data)

    def test_update_user_fields(self, db, admin, delegate):
        updated = user_service.update_user(db, delegate.id, UserUpdate(telefono="555-1234"), identity(admin))
        assert updated.telefono == "555-1234"
        assert updated.email == delegate.email

    def test_update_email_taken_by_other_user(self, db, admin, delegate):
        with pytest.raises(Conflict):
            user_service.update_user(db, delegate.id, UserUpdate(email=admin.email), identity(admin))

    def test_update_keeping_own_email(self, db, admin, delegate):
        updated = user_service.update_user(db, delegate.id, UserUpdate(email=delegate.email), identity(admin))
        assert updated.email == delegate.email

    def test_cannot_deactivate_self(self, db, admin):
        with pytest.raises(ValidationError):
            user_service.update_user(db, admin.id, UserUpdate(activo=False), identity(admin))

    def test_delete_is_soft(self, db, admin, delegate):
        user_service.delete_user(db, delegate.id, identity(admin))
        user = user_service.get_user(db, delegate.id)
        assert user.activo is False

    def test_cannot_delete_self(self, db, admin):
        with pytest.raises(ValidationError):
            user_service.delete_user(db, admin.id, identity(admin))

    def test_reset_password(self, db, delegate):
        user_service.update_password(db, delegate.id, "otraclave99")
        assert security.verify_password("otraclave99", user_service.get_user(db, delegate.id).password_hash)

    def test_get_unknown_user(self, db):
        with pytest.raises(NotFound):
            user_service.get_user(db, 1234)
