"""
data_adapter_auth.session — In-memory session service.

A non-persistent SessionService for hosts that do not bring their own, and for
tests.  Authorizer strategies are registered by the host; none ship here.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger

from data_adapter_auth.exceptions import UnknownAuthorizer
from data_adapter_auth.models import AuthorizeCallback

logger = Logger(service="data-adapter-auth")

SessionData = dict[str, Any]
Authorizer = Callable[[SessionData, AuthorizeCallback], None]


class InMemorySession:
    """
    Session service holding authenticated data in process memory.

    authorize() only runs the named authorizer while authenticated, so an
    unauthenticated session delivers no credentials at all.

    Example:
        session = InMemorySession()
        session.register_authorizer("authorizer:token", bearer_authorizer)
        session.authenticate({"token": "abc"})
    """

    def __init__(self) -> None:
        self._data: SessionData = {}
        self._is_authenticated = False
        self._authorizers: dict[str, Authorizer] = {}
        self._invalidated_listeners: list[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return self._is_authenticated

    @property
    def data(self) -> SessionData:
        """A copy of the authenticated session data."""
        return dict(self._data)

    def register_authorizer(self, name: str, authorizer: Authorizer) -> None:
        if not name:
            raise ValueError("authorizer name must be non-empty")
        self._authorizers[name] = authorizer

    def on_invalidated(self, listener: Callable[[], None]) -> None:
        """Register a listener called after every invalidation."""
        self._invalidated_listeners.append(listener)

    def authenticate(self, data: SessionData) -> None:
        self._data = dict(data)
        self._is_authenticated = True
        logger.info("Session authenticated")

    def authorize(self, authorizer: str, callback: AuthorizeCallback) -> None:
        """Run the named authorizer against the session data.

        Raises UnknownAuthorizer for an unregistered name, even when the
        session is not authenticated.
        """
        strategy = self._authorizers.get(authorizer)
        if strategy is None:
            raise UnknownAuthorizer(authorizer=authorizer)
        if not self._is_authenticated:
            logger.debug("Skipping authorization for unauthenticated session", authorizer=authorizer)
            return
        strategy(dict(self._data), callback)

    def invalidate(self) -> None:
        self._data = {}
        self._is_authenticated = False
        logger.info("Session invalidated")
        for listener in list(self._invalidated_listeners):
            listener()
