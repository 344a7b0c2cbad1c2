"""Data models for OAuth 2.0 client flows"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional
from urllib.parse import quote, urlencode

from .constants import CONTENT_TYPE_FORM, DEFAULT_RESPONSE_TYPE, HEADER_CONTENT_TYPE


def encode_params(params: Mapping[str, str]) -> str:
    """Percent-encode parameters per RFC 3986 (spaces become %20)"""
    return urlencode(params, quote_via=quote, safe="")


def append_params(url: str, params: Mapping[str, str]) -> str:
    """Append encoded parameters to a URL that may already carry a query string"""
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{encode_params(params)}"


class Verb(str, Enum):
    """HTTP verbs a token request may use"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"

    @property
    def permits_body(self) -> bool:
        return self in (Verb.POST, Verb.PUT, Verb.PATCH)


class TokenTypeHint(str, Enum):
    """Optional hint sent with a revocation request (RFC 7009)"""
    ACCESS_TOKEN = "access_token"
    REFRESH_TOKEN = "refresh_token"

    def __str__(self) -> str:
        return self.value


class OAuthRequest:
    """Mutable HTTP request under construction

    Owned by whoever builds it until it is handed to a transport. Parameter
    maps keep insertion order and unique keys; re-adding a key overwrites.
    """

    def __init__(self, verb: Verb, url: str):
        self.verb = Verb(verb)
        self.url = url
        self.headers: Dict[str, str] = {}
        self.query_string_params: Dict[str, str] = {}
        self.body_params: Dict[str, str] = {}
        self.payload: Optional[str] = None

    def add_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def add_parameter(self, key: str, value: str) -> None:
        """Add a parameter to the body or the query string, depending on the verb"""
        if self.verb.permits_body:
            self.add_body_parameter(key, value)
        else:
            self.add_query_string_parameter(key, value)

    def add_body_parameter(self, key: str, value: str) -> None:
        self.body_params[key] = value

    def add_query_string_parameter(self, key: str, value: str) -> None:
        self.query_string_params[key] = value

    def set_payload(self, payload: str) -> None:
        self.payload = payload

    @property
    def parameters(self) -> Dict[str, str]:
        """All parameters, query string first, body overriding on clashes"""
        return {**self.query_string_params, **self.body_params}

    @property
    def complete_url(self) -> str:
        return append_params(self.url, self.query_string_params)

    @property
    def body_contents(self) -> Optional[str]:
        """Raw payload when set, otherwise the form-encoded body parameters"""
        if self.payload is not None:
            return self.payload
        if not self.body_params:
            return None
        return encode_params(self.body_params)

    @property
    def content_type(self) -> Optional[str]:
        if HEADER_CONTENT_TYPE in self.headers:
            return self.headers[HEADER_CONTENT_TYPE]
        if self.payload is None and self.body_params:
            return CONTENT_TYPE_FORM
        return None

    def __repr__(self) -> str:
        return f"<OAuthRequest {self.verb.value} {self.url}>"


@dataclass(frozen=True)
class Response:
    """HTTP response as seen by the OAuth core (read-only)

    Attributes:
        code: HTTP status code
        body: Decoded response body
        headers: Response headers
        message: Reason phrase, when the transport provides one
    """
    code: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    message: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return 200 <= self.code < 300


@dataclass(frozen=True)
class AccessToken:
    """OAuth 2.0 access token issued by the authorization server

    Attributes:
        access_token: Bearer token string
        token_type: Token type reported by the server (usually "Bearer")
        expires_in: Lifetime in seconds, if reported
        refresh_token: Refresh token, if issued
        scope: Granted scope, if reported
        raw_response: Raw token response body
    """
    access_token: str
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
    raw_response: Optional[str] = field(default=None, repr=False, compare=False)

    def __repr__(self) -> str:
        # Never print the secrets themselves
        return (
            f"AccessToken(token_type={self.token_type!r}, expires_in={self.expires_in!r}, "
            f"scope={self.scope!r}, has_refresh_token={self.refresh_token is not None})"
        )


@dataclass(frozen=True)
class AccessTokenRequestParams:
    """Inputs for an authorization-code exchange

    Attributes:
        code: Authorization code from the redirect
        pkce_code_verifier: Verifier captured when the authorization URL was built
        scope: Per-call scope; None falls back to the service default
        extra_parameters: Additional token request parameters, added last
    """
    code: str
    pkce_code_verifier: Optional[str] = None
    scope: Optional[str] = None
    extra_parameters: Mapping[str, str] = field(default_factory=dict)


@dataclass
class AuthorizationResult:
    """Code and state extracted from an authorization redirect"""
    code: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class ClientConfig:
    """Read-only client identity shared by every request a service builds

    Attributes:
        api_key: OAuth client identifier
        api_secret: OAuth client secret (None for public clients)
        callback: Redirect URI registered with the provider
        default_scope: Scope used when a call supplies none
        response_type: Authorization response type
        user_agent: User-Agent header sent with every request
    """
    api_key: str
    api_secret: Optional[str] = None
    callback: Optional[str] = None
    default_scope: Optional[str] = None
    response_type: str = DEFAULT_RESPONSE_TYPE
    user_agent: Optional[str] = None

    def resolve_scope(self, scope: Optional[str]) -> Optional[str]:
        """Explicit scope wins, even when empty; None falls back to the default"""
        if scope is not None:
            return scope
        return self.default_scope
