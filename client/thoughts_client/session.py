"""
Client session state.

A :class:`Session` holds the current token explicitly and is handed to the
API client; nothing about the login state is global. The token can be
persisted through a :class:`TokenStore`, a small JSON file keyed by
``id_token``. A missing value means logged out.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

TOKEN_KEY = "id_token"
DEFAULT_STORE_PATH = Path.home() / ".deep-thoughts" / "session.json"


class TokenStore:
    """Persist one token in a JSON file under :data:`TOKEN_KEY`."""

    def __init__(self, path=DEFAULT_STORE_PATH):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        try:
            return json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable token store {self.path}: {exc}")
            return {}

    def load(self) -> Optional[str]:
        return self._read().get(TOKEN_KEY) or None

    def save(self, token: str) -> None:
        data = self._read()
        data[TOKEN_KEY] = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data))

    def clear(self) -> None:
        data = self._read()
        if data.pop(TOKEN_KEY, None) is None:
            return
        self.path.write_text(json.dumps(data))


class Session:
    """
    The login state of one client.

    Created empty or restored from a store; :meth:`begin` is called after a
    successful login/signup and :meth:`end` on logout. An expired token
    ends the session the next time :attr:`logged_in` is checked.
    """

    def __init__(self, token: Optional[str] = None, store: Optional[TokenStore] = None):
        self._token = token
        self.store = store

    @classmethod
    def restore(cls, store: TokenStore) -> "Session":
        return cls(token=store.load(), store=store)

    @property
    def token(self) -> Optional[str]:
        return self._token

    def begin(self, token: str) -> None:
        self._token = token
        if self.store is not None:
            self.store.save(token)

    def end(self) -> None:
        self._token = None
        if self.store is not None:
            self.store.clear()

    def claims(self) -> Optional[Dict[str, Any]]:
        """Token claims, read without signature verification; None if unreadable."""
        if not self._token:
            return None
        try:
            return jwt.get_unverified_claims(self._token)
        except JWTError:
            return None

    def is_expired(self) -> bool:
        claims = self.claims()
        if claims is None:
            return True
        exp = claims.get("exp")
        return exp is None or exp < time.time()

    @property
    def logged_in(self) -> bool:
        if not self._token:
            return False
        if self.is_expired():
            logger.info("Session token expired, logging out")
            self.end()
            return False
        return True

    @property
    def username(self) -> Optional[str]:
        claims = self.claims()
        return claims.get("username") if claims else None
