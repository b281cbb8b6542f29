from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from app.core.config import Settings

def get_db(request: Request) -> Iterator[Session]:
    # One pooled connection per request, always returned to the pool
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()

def get_settings(request: Request) -> Settings:
    return request.app.state.settings
