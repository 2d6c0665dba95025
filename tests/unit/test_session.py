"""
tests/unit/test_session.py — InMemorySession behaviour.

Validates:
- authorize() runs the registered authorizer only while authenticated
- unknown authorizer names raise UnknownAuthorizer
- invalidate() clears state and notifies listeners
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from data_adapter_auth import InMemorySession, SessionService, UnknownAuthorizer

AUTHORIZER = "authorizer:token"


def bearer_authorizer(data: dict, callback) -> None:
    token = data.get("token")
    if token:
        callback("Authorization", f"Bearer {token}")


@pytest.fixture
def session() -> InMemorySession:
    session = InMemorySession()
    session.register_authorizer(AUTHORIZER, bearer_authorizer)
    return session


class TestUnknownAuthorizer:
    def test_attributes(self) -> None:
        exc = UnknownAuthorizer(authorizer="authorizer:missing")
        assert exc.authorizer == "authorizer:missing"
        assert "authorizer:missing" in str(exc)

    def test_is_lookup_error(self) -> None:
        assert isinstance(UnknownAuthorizer(authorizer="x"), LookupError)


class TestInMemorySession:
    def test_satisfies_session_protocol(self, session: InMemorySession) -> None:
        assert isinstance(session, SessionService)

    def test_starts_unauthenticated(self, session: InMemorySession) -> None:
        assert session.is_authenticated is False
        assert session.data == {}

    def test_authenticate_stores_copy_of_data(self, session: InMemorySession) -> None:
        data = {"token": "abc"}
        session.authenticate(data)
        data["token"] = "changed"
        assert session.is_authenticated is True
        assert session.data == {"token": "abc"}

    def test_authorize_delivers_credentials_when_authenticated(
        self, session: InMemorySession
    ) -> None:
        session.authenticate({"token": "abc"})
        callback = MagicMock()
        session.authorize(AUTHORIZER, callback)
        callback.assert_called_once_with("Authorization", "Bearer abc")

    def test_authorize_is_silent_when_not_authenticated(self, session: InMemorySession) -> None:
        callback = MagicMock()
        session.authorize(AUTHORIZER, callback)
        callback.assert_not_called()

    def test_authorize_unknown_authorizer_raises(self, session: InMemorySession) -> None:
        session.authenticate({"token": "abc"})
        with pytest.raises(UnknownAuthorizer):
            session.authorize("authorizer:missing", MagicMock())

    def test_authorizer_cannot_mutate_session_data(self, session: InMemorySession) -> None:
        session.register_authorizer("authorizer:greedy", lambda data, cb: data.clear())
        session.authenticate({"token": "abc"})
        session.authorize("authorizer:greedy", MagicMock())
        assert session.data == {"token": "abc"}

    def test_register_rejects_empty_name(self, session: InMemorySession) -> None:
        with pytest.raises(ValueError):
            session.register_authorizer("", bearer_authorizer)

    def test_invalidate_clears_state(self, session: InMemorySession) -> None:
        session.authenticate({"token": "abc"})
        session.invalidate()
        assert session.is_authenticated is False
        assert session.data == {}

    def test_invalidate_notifies_listeners(self, session: InMemorySession) -> None:
        listener = MagicMock()
        session.on_invalidated(listener)
        session.authenticate({"token": "abc"})
        session.invalidate()
        listener.assert_called_once_with()
