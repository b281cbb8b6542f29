#!/usr/bin/env python3
"""
Database management script for deployment.
Creates the tables, seeds the reference roles and, when SEED_ADMIN_EMAIL and
SEED_ADMIN_PASSWORD are set, a bootstrap administrator.
"""
import logging
import sys

from app.core.config import settings
from app.core.database import Database
from app.core.logging_config import configure_logging
from app.repositories import role_repository, user_repository

logger = logging.getLogger("app.manage_db")


def seed_admin(db, email: str, password: str) -> bool:
    if user_repository.email_exists(db, email):
        logger.info("Admin %s already exists, skipping", email)
        return False
    role = role_repository.get_by_name(db, "admin")
    user_repository.create(db, {
        "nombre": "Admin",
        "apellido": "Sistema",
        "email": email,
        "telefono": None,
        "password": password,
        "rol_id": role.id,
    }, rounds=settings.BCRYPT_ROUNDS)
    logger.info("Created admin %s", email)
    return True


def deploy(database: Database = None) -> None:
    """Run deployment tasks."""
    database = database or Database.from_settings(settings)
    database.create_all()
    session = database.session()
    try:
        added = role_repository.seed_defaults(session)
        logger.info("Tables ready, %s roles seeded", added)
        if settings.SEED_ADMIN_EMAIL and settings.SEED_ADMIN_PASSWORD:
            seed_admin(session, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD)
    finally:
        session.close()


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    try:
        deploy()
    except Exception as e:
        logger.error("Error preparing database: %s", e)
        sys.exit(1)
