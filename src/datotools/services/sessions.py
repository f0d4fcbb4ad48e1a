"""Session Manager: reusable authenticated Content Backend handles.

Sessions are keyed by the exact ``(token, environment)`` pair. Omitting the
environment targets the project's primary environment, which is a distinct
key from any named environment, including one that happens to be primary.
The cache is process-scoped and has no teardown API.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from datotools.config.logging import token_fingerprint
from datotools.domain.errors import SessionConstructionError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str, str | None], Any]
SessionKey = tuple[str, str | None]


def check_token(token: Any) -> str:
    """Reject tokens that can never form a valid Authorization header."""
    if not isinstance(token, str) or not token.strip():
        raise SessionConstructionError("API token must be a non-empty string")
    if token != token.strip() or not token.isprintable() or any(c.isspace() for c in token):
        raise SessionConstructionError("API token contains whitespace or control characters")
    return token


class SessionManager:
    """Get-or-create cache of sessions.

    Construction of a missing key happens under a lock, so concurrent
    callers racing on the same key always receive the one stored handle.
    Credential rejection is not detected here; it surfaces on first use.
    """

    def __init__(self, factory: SessionFactory) -> None:
        self._factory = factory
        self._sessions: dict[SessionKey, Any] = {}
        self._lock = threading.Lock()

    def get_session(self, token: str, environment: str | None = None) -> Any:
        key: SessionKey = (check_token(token), environment or None)
        session = self._sessions.get(key)
        if session is not None:
            return session
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                try:
                    session = self._factory(token, key[1])
                except SessionConstructionError:
                    raise
                except Exception as exc:
                    raise SessionConstructionError(
                        f"Could not construct a DatoCMS session: {exc}"
                    ) from exc
                self._sessions[key] = session
                logger.debug(
                    "Session created for token %s (environment=%s)",
                    token_fingerprint(token),
                    key[1] or "<primary>",
                )
        return session

    def __len__(self) -> int:
        return len(self._sessions)
