# freshcart/session.py
"""
Per-operation credential resolution.

Nothing here keeps a module-level token: every SDK call asks
``resolve_session()`` for the current user and silently skips its work when
there is none (no token, unreadable token, expired token).
"""
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserSession:
    user_id: str
    token: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class TokenStore:
    """The console's equivalent of the browser's ``token`` cookie."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or get_settings().token_file).expanduser()

    def load(self) -> Optional[str]:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")

    def clear(self):
        if self.path.exists():
            self.path.unlink()


def decode_claims(token: str) -> Optional[Dict[str, Any]]:
    # The client never holds the signing key: claims are read, not verified.
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None


def is_expired(claims: Dict[str, Any], now: Optional[float] = None) -> bool:
    exp = claims.get("exp")
    if exp is None:
        return False
    now = time.time() if now is None else now
    try:
        return float(exp) < now
    except (TypeError, ValueError):
        return True


def resolve_session(token: Optional[str] = None, settings: Optional[Settings] = None) -> Optional[UserSession]:
    if token is None:
        settings = settings or get_settings()
        token = settings.token or TokenStore(settings.token_file).load()
    if not token:
        logger.debug("no token available")
        return None

    claims = decode_claims(token)
    if claims is None:
        logger.debug("token could not be decoded")
        return None
    if is_expired(claims):
        logger.debug("token expired")
        return None

    user_id = claims.get("id")
    if not user_id:
        return None
    return UserSession(user_id=str(user_id), token=token, role=claims.get("userType") or claims.get("role"))
