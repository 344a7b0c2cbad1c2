"""OAuth 2.0 client flows

Authorization URLs (with state, extra parameters and PKCE), token exchange for
the authorization code, refresh token, password and client credentials
grants, bearer request signing, redirect parsing and token revocation.
"""

from .api import OAuth2Api
from .authorization import AuthorizationURLBuilder
from .client_authentication import (
    ClientAuthentication,
    HttpBasicAuthenticationScheme,
    RequestBodyAuthenticationScheme,
)
from .exceptions import (
    OAuth2AccessTokenErrorResponse,
    OAuth2Error,
    OAuth2ErrorCode,
    OAuth2InputError,
    OAuth2ProtocolError,
)
from .extractors import OAuth2AccessTokenJsonExtractor
from .models import (
    AccessToken,
    AccessTokenRequestParams,
    AuthorizationResult,
    ClientConfig,
    OAuthRequest,
    Response,
    TokenTypeHint,
    Verb,
)
from .pkce import PKCE, PKCECodeChallengeMethod, PKCEService
from .redirect import extract_authorization
from .service import OAuth20Service
from .signature import (
    BearerSignature,
    BearerSignatureAuthorizationRequestHeaderField,
    BearerSignatureURIQueryParameter,
)
from .transport import HttpxTransport, Transport

__all__ = [
    # Service
    "OAuth20Service",
    "OAuth2Api",
    "ClientConfig",
    # Authorization
    "AuthorizationURLBuilder",
    "PKCE",
    "PKCECodeChallengeMethod",
    "PKCEService",
    "extract_authorization",
    # Models
    "AccessToken",
    "AccessTokenRequestParams",
    "AuthorizationResult",
    "OAuthRequest",
    "Response",
    "TokenTypeHint",
    "Verb",
    # Strategies
    "ClientAuthentication",
    "HttpBasicAuthenticationScheme",
    "RequestBodyAuthenticationScheme",
    "BearerSignature",
    "BearerSignatureAuthorizationRequestHeaderField",
    "BearerSignatureURIQueryParameter",
    "OAuth2AccessTokenJsonExtractor",
    "Transport",
    "HttpxTransport",
    # Errors
    "OAuth2Error",
    "OAuth2ErrorCode",
    "OAuth2InputError",
    "OAuth2ProtocolError",
    "OAuth2AccessTokenErrorResponse",
]
