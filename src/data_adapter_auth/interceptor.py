"""
data_adapter_auth.interceptor — AuthorizationInterceptor.

Wraps a host adapter's request and response hooks:
  - ajax_options: adds a before_send callback that authorizes the request and
    writes the credentials onto the low-level request handle.
  - headers_for_request: merges authorization headers into the base headers.
  - handle_response: invalidates an authenticated session on HTTP 401, then
    returns the base handler's result unchanged.

Base hooks are always called, never replaced.  Ordering:
  before_send          base first, then authorize
  headers_for_request  base first, then merge
  handle_response      invalidation check first, base last (its value is returned)

Headers the session delivers after the request has already been dispatched are
lost; the low-level path applies only what arrives before send.
"""

from __future__ import annotations

import os
from typing import Any

from aws_lambda_powertools import Logger

from data_adapter_auth.config import AUTHORIZER_ENV
from data_adapter_auth.exceptions import AuthorizerNotConfigured, InterceptorAlreadyAttached
from data_adapter_auth.models import (
    BEFORE_SEND_KEY,
    UNAUTHORIZED_STATUS,
    AuthorizeCallback,
    BaseHooks,
    Headers,
    RequestHandle,
    RequestOptions,
    SessionService,
)

logger = Logger(service="data-adapter-auth")

# Adapter attribute marking that an interceptor has been attached.
ATTACHED_ATTR = "auth_interceptor"


class AuthorizationInterceptor:
    """
    Injects session credentials into outgoing requests for one adapter.

    The session is injected, never looked up globally.  ``authorizer`` is a
    public attribute so hosts can reconfigure it; when omitted it defaults to
    DATA_ADAPTER_AUTHORIZER.  Its presence is asserted each time an
    authorization hook runs, not at construction.

    Example:
        interceptor = AuthorizationInterceptor(session, "authorizer:token")
        options = interceptor.wrap_request_options({"timeout": 5})
        headers = interceptor.headers_for_request()
    """

    def __init__(
        self,
        session: SessionService,
        authorizer: str | None = None,
        *,
        base_hooks: BaseHooks | None = None,
    ) -> None:
        self.session = session
        self.authorizer = authorizer if authorizer is not None else os.environ.get(AUTHORIZER_ENV)
        self._base = base_hooks or BaseHooks()

    @classmethod
    def attach(
        cls,
        adapter: Any,
        *,
        session: SessionService,
        authorizer: str | None = None,
    ) -> AuthorizationInterceptor:
        """Wrap an adapter instance's hooks in place and return the interceptor.

        The adapter's current ajax_options, headers_for_request and
        handle_response (whichever exist) become the base hooks.  Only one
        authorization path is installed, so the session authorizes once per
        request: headers_for_request, unless the adapter has ajax_options but
        no headers hook, in which case ajax_options is wrapped instead.
        Raises InterceptorAlreadyAttached rather than wrapping twice.
        """
        if getattr(adapter, ATTACHED_ATTR, None) is not None:
            raise InterceptorAlreadyAttached(adapter=adapter)

        base_hooks = BaseHooks.from_adapter(adapter)
        interceptor = cls(session, authorizer, base_hooks=base_hooks)
        if base_hooks.headers_for_request is None and base_hooks.ajax_options is not None:
            adapter.ajax_options = interceptor.ajax_options
            path = "ajax_options"
        else:
            adapter.headers_for_request = interceptor.headers_for_request
            path = "headers_for_request"
        adapter.handle_response = interceptor.handle_response
        setattr(adapter, ATTACHED_ATTR, interceptor)
        logger.debug(
            "Attached authorization interceptor",
            adapter=type(adapter).__name__,
            authorizer=interceptor.authorizer,
            path=path,
        )
        return interceptor

    @property
    def base_hooks(self) -> BaseHooks:
        return self._base

    # ------------------------------------------------------------------
    # Core action
    # ------------------------------------------------------------------

    def _require_authorizer(self, hook: str) -> str:
        """Return the configured authorizer or raise AuthorizerNotConfigured."""
        if not self.authorizer:
            logger.error("Authorization hook invoked without an authorizer", hook=hook)
            raise AuthorizerNotConfigured(hook=hook)
        return self.authorizer

    def authorize(self, callback: AuthorizeCallback) -> None:
        """Ask the session to authorize with the configured authorizer.

        ``callback(key, value)`` receives every credential pair the session
        delivers; it may be called any number of times, including zero.
        """
        authorizer = self._require_authorizer("authorize")
        self.session.authorize(authorizer, callback)

    # ------------------------------------------------------------------
    # Low-level hook path
    # ------------------------------------------------------------------

    def ajax_options(self, *args: Any, **kwargs: Any) -> RequestOptions:
        """Build request options via the base hook and add authorization to them."""
        authorizer = self._require_authorizer("ajax_options")
        base = self._base.ajax_options
        options = base(*args, **kwargs) if base is not None else None
        if options is None:
            options = {}
        return self._install_before_send(options, authorizer)

    def wrap_request_options(self, options: RequestOptions) -> RequestOptions:
        """Add authorization to an existing options bag, in place.

        Any before_send already in the bag is kept and runs first.
        """
        authorizer = self._require_authorizer("ajax_options")
        return self._install_before_send(options, authorizer)

    def _install_before_send(self, options: RequestOptions, authorizer: str) -> RequestOptions:
        previous = options.get(BEFORE_SEND_KEY)
        session = self.session

        def before_send(request: RequestHandle, *args: Any, **kwargs: Any) -> None:
            """Authorize ``request``, a handle with set_request_header().

            The handle is required.  Extra arguments are forwarded only to the
            previous before_send.
            """
            if previous is not None:
                previous(request, *args, **kwargs)

            def set_header(name: str, value: str) -> None:
                logger.debug("Setting authorization header on request", header=name)
                request.set_request_header(name, value)

            session.authorize(authorizer, set_header)

        options[BEFORE_SEND_KEY] = before_send
        return options

    # ------------------------------------------------------------------
    # Header-map hook path
    # ------------------------------------------------------------------

    def headers_for_request(self) -> Headers:
        """Return the base headers merged with the session's credentials.

        The base mapping is copied, never mutated.  Without a base hook the
        result starts empty, so it is ``{}`` when nothing is delivered.
        """
        authorizer = self._require_authorizer("headers_for_request")
        base = self._base.headers_for_request
        headers: Headers = dict(base() or {}) if base is not None else {}

        def merge(name: str, value: str) -> None:
            headers[name] = value

        self.session.authorize(authorizer, merge)
        return headers

    # ------------------------------------------------------------------
    # Response handling
    # ------------------------------------------------------------------

    def ensure_response_authorized(self, status: int, *args: Any, **kwargs: Any) -> None:
        """Invalidate the session if the response shows its credentials were rejected.

        Default rule: status 401 while the session is authenticated.
        Override to widen or narrow it; handle_response still delegates.
        """
        if status == UNAUTHORIZED_STATUS and self.session.is_authenticated:
            logger.info("Invalidating session after unauthorized response", status=status)
            self.session.invalidate()

    def handle_response(self, status: int, *args: Any, **kwargs: Any) -> Any:
        """Check authorization, then return the base handler's result unchanged."""
        self.ensure_response_authorized(status, *args, **kwargs)
        base = self._base.handle_response
        if base is None:
            return None
        return base(status, *args, **kwargs)
