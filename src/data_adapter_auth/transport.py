"""
data_adapter_auth.transport — requests-based host adapter.

RequestsAdapter exposes the three hook points an AuthorizationInterceptor
wraps (ajax_options, headers_for_request, handle_response) and drives them in
order for every request:

    options = ajax_options(method, url, **kwargs)
    headers = headers_for_request() + options["headers"]
    before_send(PreparedRequestHandle)        # if present in options
    send -> decode payload
    return handle_response(status, headers, payload, request_data)

Transport errors (requests.RequestException) are logged and re-raised.
"""

from __future__ import annotations

import dataclasses
from typing import Any

import requests
from aws_lambda_powertools import Logger

from data_adapter_auth.config import AdapterAuthConfig
from data_adapter_auth.exceptions import AdapterError
from data_adapter_auth.models import BEFORE_SEND_KEY, Headers, RequestOptions

logger = Logger(service="data-adapter-auth")

# Options passed to requests.Request; headers are merged separately.
_REQUEST_FIELDS = ("files", "data", "params", "auth", "cookies", "json")
# Options passed to Session.send(), after merging environment settings.
_SEND_FIELDS = ("timeout", "allow_redirects", "stream", "verify", "cert", "proxies")


class PreparedRequestHandle:
    """Low-level request handle given to before_send callbacks."""

    def __init__(self, prepared: requests.PreparedRequest) -> None:
        self.prepared = prepared

    def set_request_header(self, name: str, value: str) -> None:
        self.prepared.headers[name] = value


def _decode_payload(response: requests.Response) -> Any:
    """JSON body when the response declares one, raw text otherwise, None if empty."""
    if not response.content:
        return None
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.warning("Response declared JSON but did not decode", content_type=content_type)
    return response.text


class RequestsAdapter:
    """
    Data adapter sending requests through a requests.Session.

    Subclass and override the hooks, or attach an AuthorizationInterceptor to
    an instance:

        adapter = RequestsAdapter("https://api.example.org")
        AuthorizationInterceptor.attach(adapter, session=session, authorizer="authorizer:token")
        adapter.get("/v1/things")
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_session: requests.Session | None = None,
        timeout_seconds: float | None = None,
        config: AdapterAuthConfig | None = None,
    ) -> None:
        config = config or AdapterAuthConfig.from_env()
        if timeout_seconds is not None:
            config = dataclasses.replace(config, timeout_seconds=timeout_seconds)
        self.base_url = base_url if base_url is not None else config.base_url
        self.timeout_seconds = config.timeout_seconds
        self._http = http_session or requests.Session()

    def build_url(self, url: str) -> str:
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def ajax_options(self, method: str, url: str, **kwargs: Any) -> RequestOptions:
        options: RequestOptions = {"timeout": self.timeout_seconds}
        options.update(kwargs)
        options["method"] = method.upper()
        options["url"] = self.build_url(url)
        return options

    def headers_for_request(self) -> Headers:
        return {"Accept": "application/json"}

    def handle_response(
        self,
        status: int,
        headers: Headers,
        payload: Any,
        request_data: dict[str, Any],
    ) -> Any:
        """Return the payload for success and redirect statuses, raise AdapterError otherwise."""
        if 200 <= status < 400:
            return payload
        logger.warning(
            "Request failed",
            status=status,
            method=request_data.get("method"),
            url=request_data.get("url"),
        )
        raise AdapterError(status=status, payload=payload)

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        options = self.ajax_options(method, url, **kwargs)
        before_send = options.pop(BEFORE_SEND_KEY, None)

        headers: Headers = dict(self.headers_for_request() or {})
        headers.update(options.get("headers") or {})

        request = requests.Request(
            method=options["method"],
            url=options["url"],
            headers=headers,
            **{k: options[k] for k in _REQUEST_FIELDS if k in options},
        )
        prepared = self._http.prepare_request(request)
        if before_send is not None:
            before_send(PreparedRequestHandle(prepared))

        ignored = set(options) - {"method", "url", "headers", *_REQUEST_FIELDS, *_SEND_FIELDS}
        if ignored:
            logger.debug("Ignoring unknown request options", options=sorted(ignored))

        send_kwargs: dict[str, Any] = {
            "timeout": options.get("timeout"),
            "allow_redirects": options.get("allow_redirects", True),
        }
        send_kwargs.update(
            self._http.merge_environment_settings(
                prepared.url,
                options.get("proxies") or {},
                options.get("stream"),
                options.get("verify"),
                options.get("cert"),
            )
        )
        request_data = {"method": prepared.method, "url": prepared.url}
        try:
            response = self._http.send(prepared, **send_kwargs)
        except requests.RequestException:
            logger.exception("Request could not be sent", **request_data)
            raise

        payload = _decode_payload(response)
        return self.handle_response(
            response.status_code, dict(response.headers), payload, request_data
        )

    def get(self, url: str, **kwargs: Any) -> Any:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Any:
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> Any:
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> Any:
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Any:
        return self.request("DELETE", url, **kwargs)
