"""Client authentication for token endpoint requests (RFC 6749 section 2.3)"""

import base64
from typing import Optional

from .constants import CLIENT_ID, CLIENT_SECRET, HEADER_AUTHORIZATION
from .models import OAuthRequest


class ClientAuthentication:
    """Encodes the client credentials into a token request"""

    def add_client_authentication(
        self,
        request: OAuthRequest,
        api_key: str,
        api_secret: Optional[str]
    ) -> None:
        raise NotImplementedError


class HttpBasicAuthenticationScheme(ClientAuthentication):
    """HTTP Basic authentication with the client id and secret

    Nothing is added unless both values are present.
    """

    def add_client_authentication(
        self,
        request: OAuthRequest,
        api_key: str,
        api_secret: Optional[str]
    ) -> None:
        if api_key is None or api_secret is None:
            return
        credentials = f"{api_key}:{api_secret}".encode("utf-8")
        encoded = base64.b64encode(credentials).decode("ascii")
        request.add_header(HEADER_AUTHORIZATION, f"Basic {encoded}")


class RequestBodyAuthenticationScheme(ClientAuthentication):
    """Client id (and secret, when set) sent as request parameters"""

    def add_client_authentication(
        self,
        request: OAuthRequest,
        api_key: str,
        api_secret: Optional[str]
    ) -> None:
        request.add_parameter(CLIENT_ID, api_key)
        if api_secret is not None:
            request.add_parameter(CLIENT_SECRET, api_secret)
