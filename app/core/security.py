import re
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import List, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import Unauthorized

SECRET_KEY = settings.JWT_SECRET
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.JWT_EXPIRES_MINUTES

PASSWORD_MIN_LENGTH = 8
# bcrypt ignores anything past 72 bytes
PASSWORD_MAX_LENGTH = 72
PASSWORD_RULES = [
    (re.compile(r"[A-Z]"), "al menos una letra mayúscula"),
    (re.compile(r"[a-z]"), "al menos una letra minúscula"),
    (re.compile(r"\d"), "al menos un número"),
    (re.compile(r"[^A-Za-z0-9]"), "al menos un símbolo"),
]


@lru_cache(maxsize=None)
def password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


pwd_context = password_context(settings.BCRYPT_ROUNDS)


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, secret_key or SECRET_KEY, algorithm=algorithm or ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str, secret_key: Optional[str] = None, algorithm: Optional[str] = None) -> dict:
    try:
        payload = jwt.decode(token, secret_key or SECRET_KEY, algorithms=[algorithm or ALGORITHM])
    except JWTError:
        raise Unauthorized("Token inválido o expirado")
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise Unauthorized("Token inválido o expirado")
    return payload


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    context = password_context(rounds) if rounds else pwd_context
    return context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # The cost is read from the hash itself, so any context verifies it
    return pwd_context.verify(plain_password, hashed_password)


def check_password_policy(password: str) -> List[str]:
    """Return the rules ``password`` breaks; empty when it is acceptable."""
    problems = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"al menos {PASSWORD_MIN_LENGTH} caracteres")
    for pattern, rule in PASSWORD_RULES:
        if not pattern.search(password):
            problems.append(rule)
    return problems
