"""Domain-specific exceptions for typed error handling at boundaries.

Every exception raised by the package derives from :class:`MailerError`, so
callers that only care about "sending failed" can catch a single type.
"""

from __future__ import annotations


class MailerError(Exception):
    """Base class for all mailer agent failures.

    Example:
        >>> isinstance(ComposeError("bad"), MailerError)
        True
    """


class ConfigurationError(MailerError):
    """Missing, invalid, or incomplete configuration.

    Raised when the CA root file cannot be read or when a configuration
    section lacks a required key.

    Example:
        >>> err = ConfigurationError("SSL/TLS CA root file is not readable or does not exist")
        >>> str(err)
        'SSL/TLS CA root file is not readable or does not exist'
    """


class ComposeError(MailerError):
    """The message cannot be turned into a valid request.

    Always raised before any network activity.
    """


class InvalidRecipientError(ComposeError, ValueError):
    """Email address validation failure.

    Inherits from ValueError so generic ``except ValueError`` handlers
    still catch malformed addresses.

    Example:
        >>> err = InvalidRecipientError("Invalid recipient: not-an-email")
        >>> isinstance(err, ValueError)
        True
    """


class DeliveryError(MailerError):
    """A single API call did not succeed.

    Attributes:
        method: Upper-cased HTTP method of the failed call.
        endpoint: Endpoint path relative to the API server URL.
    """

    def __init__(self, message: str, *, method: str = "", endpoint: str = "") -> None:
        super().__init__(message)
        self.method = method
        self.endpoint = endpoint


class TransportError(DeliveryError):
    """Connection, TLS or timeout failure before any HTTP status was read.

    Attributes:
        error_code: Underlying ``errno`` when the failure carries one.
        error_text: Text of the underlying failure.

    Example:
        >>> err = TransportError(
        ...     "Mailgun request POST /messages failed",
        ...     method="POST",
        ...     endpoint="/messages",
        ...     error_code=111,
        ...     error_text="Connection refused",
        ... )
        >>> (err.error_code, err.error_text)
        (111, 'Connection refused')
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        endpoint: str = "",
        error_code: int | None = None,
        error_text: str | None = None,
    ) -> None:
        super().__init__(message, method=method, endpoint=endpoint)
        self.error_code = error_code
        self.error_text = error_text


class ApiError(DeliveryError):
    """Mailgun answered with a status other than 200.

    Attributes:
        api_response_code: HTTP status code returned by the API.
        api_response_msg: Provider message from the JSON body, if any.

    Example:
        >>> err = ApiError("Mailgun API call to POST /messages failed", api_response_code=401)
        >>> err.api_response_code, err.api_response_msg
        (401, None)
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        endpoint: str = "",
        api_response_code: int,
        api_response_msg: str | None = None,
    ) -> None:
        super().__init__(message, method=method, endpoint=endpoint)
        self.api_response_code = api_response_code
        self.api_response_msg = api_response_msg


class DecodeError(DeliveryError):
    """A successful response advertised JSON but the body did not parse.

    Attributes:
        api_response_code: HTTP status code of the response.
        body: Raw response text that failed to decode.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        endpoint: str = "",
        api_response_code: int,
        body: str = "",
    ) -> None:
        super().__init__(message, method=method, endpoint=endpoint)
        self.api_response_code = api_response_code
        self.body = body


__all__ = [
    "ApiError",
    "ComposeError",
    "ConfigurationError",
    "DecodeError",
    "DeliveryError",
    "InvalidRecipientError",
    "MailerError",
    "TransportError",
]
