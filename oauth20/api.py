"""Provider configuration for OAuth 2.0 services"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .client_authentication import ClientAuthentication, HttpBasicAuthenticationScheme
from .extractors import OAuth2AccessTokenJsonExtractor
from .models import Verb, append_params
from .signature import BearerSignature, BearerSignatureAuthorizationRequestHeaderField


@dataclass
class OAuth2Api:
    """Endpoints and protocol choices of one OAuth 2.0 provider

    Providers differ by configuration, not by subclassing: swap the client
    authentication, bearer signature or extractor to match a provider.

    Attributes:
        access_token_endpoint: Token endpoint URL
        authorization_base_url: Authorization endpoint URL
        refresh_token_endpoint: Endpoint for refresh requests (defaults to the token endpoint)
        revoke_token_endpoint: Revocation endpoint (RFC 7009), if the provider has one
        access_token_verb: HTTP verb for token requests
        client_authentication: How client credentials are sent
        bearer_signature: Where access tokens go on signed API requests
        access_token_extractor: Parser for token responses
        authorization_params: Provider-required authorization URL parameters
    """
    access_token_endpoint: str
    authorization_base_url: str
    refresh_token_endpoint: Optional[str] = None
    revoke_token_endpoint: Optional[str] = None
    access_token_verb: Verb = Verb.POST
    client_authentication: ClientAuthentication = field(default_factory=HttpBasicAuthenticationScheme)
    bearer_signature: BearerSignature = field(default_factory=BearerSignatureAuthorizationRequestHeaderField)
    access_token_extractor: OAuth2AccessTokenJsonExtractor = field(default_factory=OAuth2AccessTokenJsonExtractor)
    authorization_params: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.refresh_token_endpoint is None:
            self.refresh_token_endpoint = self.access_token_endpoint
        self.access_token_verb = Verb(self.access_token_verb)

    def get_authorization_url(self, params: Mapping[str, str]) -> str:
        return append_params(self.authorization_base_url, params)
