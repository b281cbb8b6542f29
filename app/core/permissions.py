"""Role and ownership rules for mutations.

Every check goes through :func:`is_allowed`, which takes the authenticated
identity, the capability being exercised and, for resource-scoped
capabilities, the id of the user who organizes the owning tournament.
"""
import logging
from enum import Enum
from typing import Optional

from app.core.exceptions import Forbidden

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    ORGANIZER = "organizador"
    DELEGATE = "delegado"
    PARTICIPANT = "participante"


class Capability(str, Enum):
    MANAGE_USERS = "manage_users"
    CREATE_TOURNAMENT = "create_tournament"
    EDIT_TOURNAMENT = "edit_tournament"
    DELETE_TOURNAMENT = "delete_tournament"
    MANAGE_FIXTURES = "manage_fixtures"
    EDIT_FIXTURE = "edit_fixture"
    DELETE_FIXTURE = "delete_fixture"


# Roles that hold a capability regardless of who owns the resource
ROLE_GRANTS = {
    Capability.MANAGE_USERS: {Role.ADMIN},
    Capability.CREATE_TOURNAMENT: {Role.ADMIN, Role.ORGANIZER},
    Capability.EDIT_TOURNAMENT: {Role.ADMIN},
    Capability.DELETE_TOURNAMENT: {Role.ADMIN},
    Capability.MANAGE_FIXTURES: {Role.ADMIN, Role.ORGANIZER, Role.DELEGATE},
    Capability.EDIT_FIXTURE: {Role.ADMIN, Role.DELEGATE},
    Capability.DELETE_FIXTURE: {Role.ADMIN},
}

# Capabilities also granted to the organizer of the owning tournament
OWNER_GRANTS = {
    Capability.EDIT_TOURNAMENT,
    Capability.EDIT_FIXTURE,
    Capability.DELETE_FIXTURE,
}

DENIED_MESSAGES = {
    Capability.MANAGE_USERS: "Solo los administradores pueden gestionar usuarios",
    Capability.CREATE_TOURNAMENT: "Solo administradores u organizadores pueden crear torneos",
    Capability.EDIT_TOURNAMENT: "No tienes permisos para modificar este torneo",
    Capability.DELETE_TOURNAMENT: "Solo los administradores pueden eliminar torneos",
    Capability.MANAGE_FIXTURES: "Se requiere rol de administrador, organizador o delegado",
    Capability.EDIT_FIXTURE: "No tienes permisos para modificar este recurso",
    Capability.DELETE_FIXTURE: "No tienes permisos para eliminar este recurso",
}


def _role_of(identity) -> Optional[Role]:
    try:
        return Role(identity.rol_nombre)
    except ValueError:
        return None


def is_admin(identity) -> bool:
    return _role_of(identity) == Role.ADMIN


def is_allowed(identity, capability: Capability, owner_id: Optional[int] = None) -> bool:
    role = _role_of(identity)
    if role in ROLE_GRANTS[capability]:
        return True
    if capability in OWNER_GRANTS and owner_id is not None:
        return identity.id == owner_id
    return False


def authorize(identity, capability: Capability, owner_id: Optional[int] = None, message: Optional[str] = None) -> None:
    if not is_allowed(identity, capability, owner_id):
        logger.warning(
            "User %s (%s) denied %s (owner=%s)",
            identity.id, identity.rol_nombre, capability.value, owner_id,
        )
        raise Forbidden(message or DENIED_MESSAGES[capability])
