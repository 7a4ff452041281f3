"""Authenticated HTTP calls against the Mailgun API.

Provides :class:`MailgunTransport`, which performs exactly one request per
:meth:`MailgunTransport.call` and classifies the outcome into the domain
error types.

System Role:
    Adapter layer. The only module in the package that touches the network.
    TLS verification against the configured CA root file is always on; tests
    inject an ``httpx.MockTransport`` instead of disabling it.
"""

from __future__ import annotations

import contextlib
import logging
import ssl
from collections.abc import Iterator, Mapping, Sequence
from typing import IO, Any

import httpx
import orjson

from mailgun_agent.domain.errors import ApiError, DecodeError, TransportError

from .config import MailgunConfig
from .payload import FieldValue, FileField

logger = logging.getLogger(__name__)

API_USERNAME = "api"
JSON_CONTENT_TYPE = "application/json"


def _underlying_errno(exc: BaseException) -> int | None:
    """Return the first ``errno`` found along the exception chain.

    Example:
        >>> err = RuntimeError("wrapped")
        >>> err.__cause__ = ConnectionRefusedError(111, "Connection refused")
        >>> _underlying_errno(err)
        111
        >>> _underlying_errno(ValueError("no errno")) is None
        True
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, OSError) and current.errno is not None:
            return current.errno
        current = current.__cause__ or current.__context__
    return None


def _primary_content_type(header: str | None) -> str:
    """Return the media type of a Content-Type header without parameters.

    Example:
        >>> _primary_content_type("Application/JSON; charset=utf-8")
        'application/json'
        >>> _primary_content_type(None)
        ''
    """
    return (header or "").split(";", 1)[0].strip().lower()


def _provider_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str):
            return message
    return None


class MailgunTransport:
    """Issue single authenticated requests to the Mailgun API.

    Args:
        config: Immutable connection settings.
        transport: Optional ``httpx`` transport used instead of a TLS
            connection pinned to ``config.ca_root_file``. Intended for tests.
    """

    def __init__(self, config: MailgunConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> MailgunConfig:
        return self._config

    def _ssl_context(self) -> ssl.SSLContext:
        """Build a verifying SSL context trusting only the configured CA file."""
        context = ssl.create_default_context(cafile=str(self._config.ca_root_file))
        context.check_hostname = True
        context.verify_mode = ssl.CERT_REQUIRED
        return context

    @contextlib.contextmanager
    def _client(self) -> Iterator[httpx.Client]:
        transport = self._transport if self._transport is not None else httpx.HTTPTransport(verify=self._ssl_context())
        client = httpx.Client(
            transport=transport,
            auth=httpx.BasicAuth(API_USERNAME, self._config.api_key.get_secret_value()),
            timeout=httpx.Timeout(self._config.timeout, connect=self._config.connect_timeout),
        )
        with client:
            yield client

    def _send(
        self,
        method: str,
        url: str,
        fields: Mapping[str, FieldValue],
        files: Sequence[FileField],
        multipart: bool,
    ) -> httpx.Response:
        with contextlib.ExitStack() as stack:
            client = stack.enter_context(self._client())
            if method == "GET":
                # params= would replace a query already present in the endpoint.
                target = httpx.URL(url).copy_merge_params(dict(fields)) if fields else httpx.URL(url)
                return client.request(method, target)
            if not multipart:
                return client.request(method, url, data=dict(fields) if fields else None)

            uploads: list[tuple[str, tuple[str, IO[bytes] | bytes, str]]] = []
            for file_field in files:
                if file_field.path is not None:
                    content: IO[bytes] | bytes = stack.enter_context(file_field.path.open("rb"))
                else:
                    content = file_field.content or b""
                uploads.append((file_field.name, (file_field.filename, content, file_field.content_type)))
            return client.request(method, url, data=dict(fields), files=uploads)

    def call(
        self,
        method: str,
        endpoint: str,
        fields: Mapping[str, FieldValue] | None = None,
        *,
        files: Sequence[FileField] = (),
        multipart: bool = False,
    ) -> Any:
        """Perform one API request and return the decoded response body.

        GET requests send *fields* as query parameters, merged with any query
        string already present in *endpoint*. Other methods send them as a
        ``multipart/form-data`` body together with *files* when *multipart*
        is true, otherwise as ``application/x-www-form-urlencoded``.

        Args:
            method: HTTP method, case-insensitive.
            endpoint: Path appended to the configured API server URL.
            fields: Form or query fields; list values repeat the key.
            files: File parts, used only for multipart requests.
            multipart: Select multipart encoding for non-GET requests.

        Returns:
            The parsed JSON document when the response is ``application/json``,
            otherwise the raw response text.

        Raises:
            TransportError: Connection, TLS, timeout or local file failure.
            ApiError: The API answered with a status other than 200.
            DecodeError: A 200 response carried malformed JSON.
        """
        method_upper = method.upper()
        url = self._config.api_server_url + endpoint
        summary = f"{method_upper} {endpoint}"

        try:
            response = self._send(method_upper, url, fields or {}, files, multipart)
        except (httpx.RequestError, OSError) as exc:
            logger.debug("Mailgun request failed", exc_info=True)
            raise TransportError(
                f"Mailgun request {summary} failed",
                method=method_upper,
                endpoint=endpoint,
                error_code=_underlying_errno(exc),
                error_text=str(exc) or type(exc).__name__,
            ) from exc

        status = response.status_code
        body: Any = response.text
        if _primary_content_type(response.headers.get("content-type")) == JSON_CONTENT_TYPE:
            try:
                body = orjson.loads(response.content)
            except orjson.JSONDecodeError as exc:
                if status == 200:
                    raise DecodeError(
                        f"Mailgun API call to {summary} returned malformed JSON",
                        method=method_upper,
                        endpoint=endpoint,
                        api_response_code=status,
                        body=response.text,
                    ) from exc

        if status != 200:
            api_message = _provider_message(body)
            logger.warning(
                "Mailgun API call rejected",
                extra={"method": method_upper, "endpoint": endpoint, "status": status, "api_message": api_message},
            )
            raise ApiError(
                f"Mailgun API call to {summary} failed",
                method=method_upper,
                endpoint=endpoint,
                api_response_code=status,
                api_response_msg=api_message,
            )

        logger.info("Mailgun API call succeeded", extra={"method": method_upper, "endpoint": endpoint})
        return body


__all__ = ["API_USERNAME", "MailgunTransport"]
