"""OAuth authorization URL construction"""

import logging
import webbrowser
from typing import Dict, Mapping, Optional

from .api import OAuth2Api
from .constants import CLIENT_ID, REDIRECT_URI, RESPONSE_TYPE, SCOPE, STATE
from .models import ClientConfig
from .pkce import PKCE, PKCECodeChallengeMethod, PKCEService

logger = logging.getLogger(__name__)


class AuthorizationURLBuilder:
    """Builds the URL a user is sent to in order to authorize the client

    Setters return the builder so calls can be chained::

        builder = service.create_authorization_url_builder().state(state).init_pkce()
        url = builder.build()
        verifier = builder.get_pkce().code_verifier
    """

    def __init__(
        self,
        api: OAuth2Api,
        config: ClientConfig,
        pkce_service: Optional[PKCEService] = None
    ):
        self.api = api
        self.config = config
        self.pkce_service = pkce_service or PKCEService()
        self._state: Optional[str] = None
        self._scope: Optional[str] = None
        self._additional_params: Dict[str, str] = {}
        self._pkce: Optional[PKCE] = None

    def state(self, state: Optional[str]) -> "AuthorizationURLBuilder":
        """Opaque anti-CSRF value, passed through verbatim"""
        self._state = state
        return self

    def scope(self, scope: Optional[str]) -> "AuthorizationURLBuilder":
        """Override the service default scope for this URL"""
        self._scope = scope
        return self

    def additional_params(self, params: Optional[Mapping[str, str]]) -> "AuthorizationURLBuilder":
        """Extra query parameters, added after (and overriding) the built-in ones"""
        self._additional_params = dict(params or {})
        return self

    def pkce(self, pkce: Optional[PKCE]) -> "AuthorizationURLBuilder":
        self._pkce = pkce
        return self

    def init_pkce(
        self,
        code_challenge_method: PKCECodeChallengeMethod = PKCECodeChallengeMethod.S256
    ) -> "AuthorizationURLBuilder":
        """Generate a new PKCE, replacing any previous one

        Capture ``get_pkce().code_verifier`` right away; calling this again
        discards the old verifier.
        """
        self._pkce = self.pkce_service.generate_pkce(code_challenge_method)
        return self

    def get_pkce(self) -> Optional[PKCE]:
        return self._pkce

    def build(self) -> str:
        """Construct the authorization URL

        Returns:
            Full, percent-encoded authorization URL
        """
        params = {
            RESPONSE_TYPE: self.config.response_type,
            CLIENT_ID: self.config.api_key,
        }
        if self.config.callback is not None:
            params[REDIRECT_URI] = self.config.callback

        scope = self._scope if self._scope is not None else self.config.default_scope
        if scope is not None:
            params[SCOPE] = scope
        if self._state is not None:
            params[STATE] = self._state

        params.update(self.api.authorization_params)
        params.update(self._additional_params)

        if self._pkce is not None:
            params.update(self._pkce.get_authorization_url_params())

        url = self.api.get_authorization_url(params)
        logger.debug(f"Built authorization URL for {self.api.authorization_base_url} (pkce={self._pkce is not None})")
        return url

    def start_login_flow(self) -> str:
        """Build the URL and open it in the default browser

        Returns:
            Authorization URL that was opened
        """
        auth_url = self.build()

        # Open the authorization URL in the default browser
        webbrowser.open(auth_url)

        return auth_url
