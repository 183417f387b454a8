"""Session-scoped collaborators consumed by the directive engine.

One-shot Stores:
    ``@message('name')`` and ``@errors('field')`` read from stores whose read
    also removes the entry. Both stores below do the get-and-clear under a
    lock, so two renders sharing one session's store can never both see the
    same entry.

    - `FlashStore`: named flash messages (``@message``)
    - `ErrorBag`: validation errors keyed by field (``@errors``)

CSRF:
    ``@csrf()`` asks a provider for the current token:

    - `StaticCsrfToken`: a fixed token (tests, token minted by middleware)
    - `RotatingCsrfToken`: mints a token and rotates it after ``ttl`` seconds

Framework Integration:
    A web framework creates one set of stores per session and passes them to
    the Environment (or to ``Environment.view``):

        flash = FlashStore()
        flash.flash("success", "Profile saved")
        env = Environment(loader=loader, flash=flash, csrf=session_csrf)
        html = str(env.render("pages/profile"))

"""

from __future__ import annotations

import hmac
import logging
import secrets
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Protocol

logger = logging.getLogger(__name__)


class OneShotStore(Protocol):
    """Key-value store whose ``consume`` removes the entry it returns."""

    def peek(self, key: str) -> str | None: ...

    def consume(self, key: str) -> str | None: ...


class CsrfTokenProvider(Protocol):
    """Source of the current request's CSRF token."""

    def current(self) -> str: ...


class FlashStore:
    """Named one-shot flash messages.

    Example:
        >>> store = FlashStore()
        >>> store.flash("success", "Saved!")
        >>> store.consume("success")
        'Saved!'
        >>> store.consume("success") is None
        True
    """

    __slots__ = ("_lock", "_messages")

    def __init__(self, messages: Mapping[str, str] | None = None):
        self._messages: dict[str, str] = dict(messages or {})
        self._lock = threading.Lock()

    def flash(self, name: str, message: str) -> None:
        """Store ``message`` under ``name``, replacing any unread message."""
        with self._lock:
            self._messages[name] = message

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._messages

    def peek(self, name: str) -> str | None:
        with self._lock:
            return self._messages.get(name)

    def consume(self, name: str) -> str | None:
        """Return and remove the message named ``name`` (atomic)."""
        with self._lock:
            message = self._messages.pop(name, None)
        if message is not None:
            logger.debug("Consumed flash message '%s'", name)
        return message

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()


class ErrorBag:
    """Validation errors keyed by field, each field holding a message list.

    Only the first message of a field is ever displayed. Consuming a field
    removes all of its messages, so a field's error appears at most once
    per render pass.

    Example:
        >>> errors = ErrorBag({"email": ["The field email is required."]})
        >>> errors.consume("email")
        'The field email is required.'
        >>> errors.has("email")
        False
    """

    __slots__ = ("_errors", "_lock")

    def __init__(self, errors: Mapping[str, Iterable[str]] | None = None):
        self._errors: dict[str, list[str]] = {}
        self._lock = threading.Lock()
        if errors:
            self.put(errors)

    def add(self, field: str, message: str) -> None:
        """Append ``message`` to the messages of ``field``."""
        with self._lock:
            self._errors.setdefault(field, []).append(message)

    def put(self, errors: Mapping[str, Iterable[str]]) -> None:
        """Replace stored errors with ``errors`` (validator output)."""
        fresh = {field: list(messages) for field, messages in errors.items() if messages}
        with self._lock:
            self._errors = fresh

    def has(self, field: str) -> bool:
        with self._lock:
            return bool(self._errors.get(field))

    def fields(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def peek(self, field: str) -> str | None:
        """First message for ``field`` without consuming it."""
        with self._lock:
            messages = self._errors.get(field)
            return messages[0] if messages else None

    def consume(self, field: str) -> str | None:
        """Return the first message for ``field`` and forget the field (atomic)."""
        with self._lock:
            messages = self._errors.pop(field, None)
        if not messages:
            return None
        logger.debug("Consumed validation error for field '%s'", field)
        return messages[0]

    def forget(self) -> None:
        """Drop every stored error."""
        with self._lock:
            self._errors.clear()


class StaticCsrfToken:
    """CSRF provider returning a fixed token."""

    __slots__ = ("_token",)

    def __init__(self, token: str):
        self._token = token

    def current(self) -> str:
        return self._token

    def validate(self, token: str) -> bool:
        return hmac.compare_digest(self._token, token)


class RotatingCsrfToken:
    """CSRF provider that mints a token and rotates it once it is stale.

    A token older than ``ttl`` seconds (600 by default) is replaced on the
    next ``current()`` call. ``validate`` compares in constant time.

    Example:
        >>> csrf = RotatingCsrfToken(ttl=600)
        >>> token = csrf.current()
        >>> csrf.validate(token)
        True
    """

    __slots__ = ("_clock", "_issued_at", "_lock", "_token", "ttl")

    def __init__(self, ttl: float = 600.0, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._token = self._generate()
        self._issued_at = clock()

    @staticmethod
    def _generate() -> str:
        return secrets.token_hex(16)

    def current(self) -> str:
        with self._lock:
            now = self._clock()
            if now - self._issued_at > self.ttl:
                self._token = self._generate()
                self._issued_at = now
                logger.debug("Rotated CSRF token")
            return self._token

    def validate(self, token: str) -> bool:
        with self._lock:
            return hmac.compare_digest(self._token, token)
