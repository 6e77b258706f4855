import hashlib
from datetime import datetime, timedelta, timezone
from typing import NamedTuple
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from jobboard.config import settings


class AccessClaims(NamedTuple):
    user_id: str
    role: str


def _bcrypt_input(password: str) -> bytes:
    # bcrypt ignores bytes past 72; hashing first keeps the whole password significant.
    return hashlib.sha256(password.encode("utf-8")).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """False for a wrong password and for a stored value that is not a bcrypt hash."""
    try:
        return bcrypt.checkpw(_bcrypt_input(plain), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: str, role: str, expires_minutes: int | None = None) -> str:
    """Signed bearer token naming the account and the role it signed in as."""
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> AccessClaims | None:
    """Claims of a valid, unexpired token that names both a user and a role."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    user_id, role = payload.get("sub"), payload.get("role")
    if not user_id or not role:
        return None
    return AccessClaims(user_id, role)


def generate_id() -> str:
    return str(uuid4())
