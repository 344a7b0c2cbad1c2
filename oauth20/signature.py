"""Bearer token placement on outgoing API requests (RFC 6750)"""

from .constants import ACCESS_TOKEN, HEADER_AUTHORIZATION
from .models import OAuthRequest


class BearerSignature:
    """Writes a bearer access token into a request"""

    def sign_request(self, access_token: str, request: OAuthRequest) -> None:
        raise NotImplementedError


class BearerSignatureAuthorizationRequestHeaderField(BearerSignature):
    """Sends the token in the Authorization header (RFC 6750 section 2.1)"""

    def sign_request(self, access_token: str, request: OAuthRequest) -> None:
        request.add_header(HEADER_AUTHORIZATION, f"Bearer {access_token}")


class BearerSignatureURIQueryParameter(BearerSignature):
    """Sends the token as the access_token query parameter (RFC 6750 section 2.3)"""

    def sign_request(self, access_token: str, request: OAuthRequest) -> None:
        request.add_query_string_parameter(ACCESS_TOKEN, access_token)
