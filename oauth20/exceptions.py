"""OAuth 2.0 client exceptions

Three kinds of failure reach callers:

- ``OAuth2InputError``: the request could not be built (nothing was sent)
- transport errors: raised by the transport (``httpx.HTTPError`` for the
  default one) and propagated unchanged
- ``OAuth2ProtocolError``: the server was reached but rejected the request
"""

from enum import Enum
from typing import Optional

from .models import Response


class OAuth2ErrorCode(str, Enum):
    """Error codes defined by RFC 6749 section 5.2 and RFC 7009"""
    INVALID_REQUEST = "invalid_request"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"
    UNSUPPORTED_TOKEN_TYPE = "unsupported_token_type"
    ACCESS_DENIED = "access_denied"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["OAuth2ErrorCode"]:
        """Map a wire error code to the enum, or None for unknown codes"""
        try:
            return cls(value)
        except ValueError:
            return None


class OAuth2Error(Exception):
    """Base exception for OAuth 2.0 client operations"""
    pass


class OAuth2InputError(OAuth2Error, ValueError):
    """A request could not be built from the given input"""
    pass


class OAuth2ProtocolError(OAuth2Error):
    """The server answered but the exchange failed"""

    def __init__(self, message: str, response: Optional[Response] = None):
        super().__init__(message)
        self.response = response


class OAuth2AccessTokenErrorResponse(OAuth2ProtocolError):
    """Error object returned by the authorization server

    Attributes:
        error: Error code string exactly as sent by the server
        error_code: Parsed error code, None when the server used a non-standard one
        error_description: Human readable description, if any
        error_uri: URI of an error page, if any
    """

    def __init__(
        self,
        error: str,
        error_description: Optional[str] = None,
        error_uri: Optional[str] = None,
        response: Optional[Response] = None,
    ):
        message = error if not error_description else f"{error}: {error_description}"
        super().__init__(message, response)
        self.error = error
        self.error_code = OAuth2ErrorCode.parse(error)
        self.error_description = error_description
        self.error_uri = error_uri


__all__ = [
    "OAuth2ErrorCode",
    "OAuth2Error",
    "OAuth2InputError",
    "OAuth2ProtocolError",
    "OAuth2AccessTokenErrorResponse",
]
