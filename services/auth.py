from __future__ import annotations

import base64
import hashlib
import hmac
import os
from datetime import datetime, timedelta, timezone

import jwt

from config import settings

_ALGO = "HS256"

# Password hashing (stdlib pbkdf2_hmac).
_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64(salt)}${_b64(dk)}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iterations, salt, expected = password_hash.split("$", 3)
        if not scheme.startswith("pbkdf2_"):
            return False
        actual = hashlib.pbkdf2_hmac(
            scheme.split("_", 1)[1], password.encode("utf-8"), _unb64(salt), int(iterations)
        )
        return hmac.compare_digest(actual, _unb64(expected))
    except ValueError:  # malformed hash (incl. binascii.Error)
        return False


def create_token(user_id: int, email: str, ttl_days: int | None = None) -> str:
    exp = datetime.now(timezone.utc) + timedelta(days=ttl_days or settings.jwt_ttl_days)
    payload = {"sub": str(user_id), "email": email, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> tuple[int, str]:
    """Return ``(user_id, email)``; raises ``jwt.PyJWTError`` when invalid/expired."""
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    return int(payload["sub"]), payload.get("email", "")
