"""
data_adapter_auth.exceptions — Errors raised by the authorization interceptor.

AuthorizerNotConfigured is a developer-facing precondition failure, not a
runtime condition to recover from.
"""


class AuthorizerNotConfigured(AssertionError):
    """
    Raised when an authorization hook runs without an authorizer configured.

    Subclasses AssertionError: a missing authorizer is a programming error and
    must abort request processing before an unauthenticated request is sent.

    Attributes:
        hook: Name of the hook that required the authorizer
              ("ajax_options", "headers_for_request" or "authorize").
    """

    def __init__(self, *, hook: str) -> None:
        self.hook = hook
        super().__init__(
            f"Assertion Failed: {hook!r} requires an authorizer; configure "
            "`authorizer` on the interceptor or set DATA_ADAPTER_AUTHORIZER"
        )


class InterceptorAlreadyAttached(Exception):
    """Raised when attaching an interceptor to an adapter that already has one."""

    def __init__(self, *, adapter: object) -> None:
        self.adapter = adapter
        super().__init__(f"An AuthorizationInterceptor is already attached to {adapter!r}")


class UnknownAuthorizer(LookupError):
    """Raised by InMemorySession when authorize() names an unregistered authorizer."""

    def __init__(self, *, authorizer: str) -> None:
        self.authorizer = authorizer
        super().__init__(f"No authorizer registered under {authorizer!r}")


class AdapterError(Exception):
    """
    Raised by RequestsAdapter.handle_response for non-success statuses.

    Attributes:
        status:  HTTP status code of the response.
        payload: Decoded JSON body, raw text, or None for an empty body.
    """

    def __init__(self, *, status: int, payload: object = None) -> None:
        self.status = status
        self.payload = payload
        super().__init__(f"Request failed with HTTP status {status}")
