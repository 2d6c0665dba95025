"""
data_adapter_auth — Session authorization for data-access adapters.

Wraps a host adapter's request and response hooks so every request carries the
session's credentials and a rejected (401) response invalidates the session.
"""

from data_adapter_auth.config import AdapterAuthConfig
from data_adapter_auth.exceptions import (
    AdapterError,
    AuthorizerNotConfigured,
    InterceptorAlreadyAttached,
    UnknownAuthorizer,
)
from data_adapter_auth.interceptor import AuthorizationInterceptor
from data_adapter_auth.models import BaseHooks, RequestHandle, SessionService
from data_adapter_auth.session import InMemorySession
from data_adapter_auth.transport import PreparedRequestHandle, RequestsAdapter

__all__ = [
    "AdapterAuthConfig",
    "AdapterError",
    "AuthorizationInterceptor",
    "AuthorizerNotConfigured",
    "BaseHooks",
    "InMemorySession",
    "InterceptorAlreadyAttached",
    "PreparedRequestHandle",
    "RequestHandle",
    "RequestsAdapter",
    "SessionService",
    "UnknownAuthorizer",
]
