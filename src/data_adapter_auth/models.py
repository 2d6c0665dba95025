"""
data_adapter_auth.models — Collaborator contracts and hook containers.

The interceptor never owns a session, a transport or an authorizer; it talks
to them through the protocols below.  BaseHooks holds whatever the host adapter
already implemented so the interceptor can delegate to it explicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
UNAUTHORIZED_STATUS: int = 401

# Key under which the pre-send callback lives in a request-options bag.
BEFORE_SEND_KEY: str = "before_send"

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
AuthorizeCallback = Callable[[str, str], None]
RequestOptions = dict[str, Any]
Headers = dict[str, str]

AjaxOptionsHook = Callable[..., RequestOptions]
HeadersHook = Callable[[], Headers]
ResponseHook = Callable[..., Any]


# ---------------------------------------------------------------------------
# Protocols — what the interceptor needs from its collaborators
# ---------------------------------------------------------------------------


@runtime_checkable
class SessionService(Protocol):
    """
    Session service owning authentication state.

    authorize() may call ``callback(key, value)`` zero or more times, either
    inline or after it returns.  The interceptor only reads is_authenticated.
    """

    @property
    def is_authenticated(self) -> bool: ...

    def authorize(self, authorizer: str, callback: AuthorizeCallback) -> None: ...

    def invalidate(self) -> None: ...


@runtime_checkable
class RequestHandle(Protocol):
    """Low-level request handle passed to a before_send callback."""

    def set_request_header(self, name: str, value: str) -> None: ...


# ---------------------------------------------------------------------------
# BaseHooks — the host adapter's own implementations, any of which may be absent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BaseHooks:
    """Pre-existing hook implementations the interceptor wraps.

    None means the host does not implement that hook; the interceptor then
    falls back to an empty options bag, an empty header map, or a None
    response result.
    """

    ajax_options: AjaxOptionsHook | None = None
    headers_for_request: HeadersHook | None = None
    handle_response: ResponseHook | None = None

    @classmethod
    def from_adapter(cls, adapter: object) -> BaseHooks:
        """Capture an adapter's current hook methods, once, at attach time."""

        def _hook(name: str) -> Callable[..., Any] | None:
            hook = getattr(adapter, name, None)
            return hook if callable(hook) else None

        return cls(
            ajax_options=_hook("ajax_options"),
            headers_for_request=_hook("headers_for_request"),
            handle_response=_hook("handle_response"),
        )
