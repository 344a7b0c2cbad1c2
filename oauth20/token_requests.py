"""Token endpoint request construction for each grant type

Every function here only builds an OAuthRequest; none performs I/O.
"""

import logging
from typing import Optional

from .api import OAuth2Api
from .constants import (
    AUTHORIZATION_CODE,
    CLIENT_CREDENTIALS,
    CODE,
    GRANT_TYPE,
    PASSWORD,
    PKCE_CODE_VERIFIER,
    REDIRECT_URI,
    REFRESH_TOKEN,
    SCOPE,
    TOKEN,
    TOKEN_TYPE_HINT,
    USERNAME,
)
from .exceptions import OAuth2InputError
from .models import AccessTokenRequestParams, ClientConfig, OAuthRequest, TokenTypeHint, Verb

logger = logging.getLogger(__name__)


def _new_token_request(api: OAuth2Api, config: ClientConfig, endpoint: str) -> OAuthRequest:
    request = OAuthRequest(api.access_token_verb, endpoint)
    api.client_authentication.add_client_authentication(request, config.api_key, config.api_secret)
    return request


def _add_scope(request: OAuthRequest, config: ClientConfig, scope: Optional[str]) -> None:
    resolved = config.resolve_scope(scope)
    if resolved is not None:
        request.add_parameter(SCOPE, resolved)


def create_access_token_request(
    api: OAuth2Api,
    config: ClientConfig,
    params: AccessTokenRequestParams
) -> OAuthRequest:
    """Authorization code grant (RFC 6749 section 4.1.3)"""
    request = _new_token_request(api, config, api.access_token_endpoint)

    request.add_parameter(CODE, params.code)
    if config.callback is not None:
        request.add_parameter(REDIRECT_URI, config.callback)
    _add_scope(request, config, params.scope)
    request.add_parameter(GRANT_TYPE, AUTHORIZATION_CODE)

    if params.pkce_code_verifier is not None:
        request.add_parameter(PKCE_CODE_VERIFIER, params.pkce_code_verifier)

    for key, value in params.extra_parameters.items():
        request.add_parameter(key, value)

    logger.debug(f"Built authorization_code request for {request.url}")
    return request


def create_refresh_token_request(
    api: OAuth2Api,
    config: ClientConfig,
    refresh_token: Optional[str],
    scope: Optional[str] = None
) -> OAuthRequest:
    """Refresh token grant (RFC 6749 section 6)

    Raises:
        OAuth2InputError: If refresh_token is None or empty
    """
    if refresh_token is None or refresh_token == "":
        raise OAuth2InputError("The refresh_token cannot be None or empty")

    request = _new_token_request(api, config, api.refresh_token_endpoint)

    _add_scope(request, config, scope)
    request.add_parameter(REFRESH_TOKEN, refresh_token)
    request.add_parameter(GRANT_TYPE, REFRESH_TOKEN)

    logger.debug(f"Built refresh_token request for {request.url}")
    return request


def create_password_grant_request(
    api: OAuth2Api,
    config: ClientConfig,
    username: str,
    password: str,
    scope: Optional[str] = None
) -> OAuthRequest:
    """Resource owner password credentials grant (RFC 6749 section 4.3)"""
    request = OAuthRequest(api.access_token_verb, api.access_token_endpoint)
    request.add_parameter(USERNAME, username)
    request.add_parameter(PASSWORD, password)
    _add_scope(request, config, scope)
    request.add_parameter(GRANT_TYPE, PASSWORD)

    api.client_authentication.add_client_authentication(request, config.api_key, config.api_secret)

    logger.debug(f"Built password request for {request.url}")
    return request


def create_client_credentials_grant_request(
    api: OAuth2Api,
    config: ClientConfig,
    scope: Optional[str] = None
) -> OAuthRequest:
    """Client credentials grant (RFC 6749 section 4.4)"""
    request = _new_token_request(api, config, api.access_token_endpoint)

    _add_scope(request, config, scope)
    request.add_parameter(GRANT_TYPE, CLIENT_CREDENTIALS)

    logger.debug(f"Built client_credentials request for {request.url}")
    return request


def create_revoke_token_request(
    api: OAuth2Api,
    config: ClientConfig,
    token_to_revoke: str,
    token_type_hint: Optional[TokenTypeHint] = None
) -> OAuthRequest:
    """Token revocation request (RFC 7009 section 2.1), always a POST

    Raises:
        OAuth2InputError: If the provider has no revocation endpoint
    """
    if not api.revoke_token_endpoint:
        raise OAuth2InputError("The provider does not define a revoke token endpoint")

    request = OAuthRequest(Verb.POST, api.revoke_token_endpoint)
    api.client_authentication.add_client_authentication(request, config.api_key, config.api_secret)

    request.add_parameter(TOKEN, token_to_revoke)
    if token_type_hint is not None:
        request.add_parameter(TOKEN_TYPE_HINT, TokenTypeHint(token_type_hint).value)

    logger.debug(f"Built revoke request for {request.url}")
    return request
