"""Builds an OAuth20Service from settings"""

import logging

import settings
from oauth20 import (
    BearerSignatureAuthorizationRequestHeaderField,
    BearerSignatureURIQueryParameter,
    ClientConfig,
    HttpBasicAuthenticationScheme,
    HttpxTransport,
    OAuth20Service,
    OAuth2Api,
    OAuth2InputError,
    RequestBodyAuthenticationScheme,
)

logger = logging.getLogger(__name__)

CLIENT_AUTH_SCHEMES = {
    "basic": HttpBasicAuthenticationScheme,
    "body": RequestBodyAuthenticationScheme,
}

BEARER_PLACEMENTS = {
    "header": BearerSignatureAuthorizationRequestHeaderField,
    "query": BearerSignatureURIQueryParameter,
}


def build_api() -> OAuth2Api:
    """Provider configuration from OAUTH2_* settings

    Raises:
        OAuth2InputError: If a required endpoint or a protocol choice is invalid
    """
    if not settings.OAUTH2_TOKEN_URL:
        raise OAuth2InputError("OAUTH2_TOKEN_URL is not configured")

    client_auth = CLIENT_AUTH_SCHEMES.get(str(settings.OAUTH2_CLIENT_AUTH).lower())
    if client_auth is None:
        raise OAuth2InputError(
            f"OAUTH2_CLIENT_AUTH must be one of {sorted(CLIENT_AUTH_SCHEMES)}, got {settings.OAUTH2_CLIENT_AUTH!r}"
        )

    bearer_signature = BEARER_PLACEMENTS.get(str(settings.OAUTH2_BEARER_PLACEMENT).lower())
    if bearer_signature is None:
        raise OAuth2InputError(
            f"OAUTH2_BEARER_PLACEMENT must be one of {sorted(BEARER_PLACEMENTS)}, "
            f"got {settings.OAUTH2_BEARER_PLACEMENT!r}"
        )

    return OAuth2Api(
        access_token_endpoint=settings.OAUTH2_TOKEN_URL,
        authorization_base_url=settings.OAUTH2_AUTHORIZATION_URL,
        refresh_token_endpoint=settings.OAUTH2_REFRESH_URL,
        revoke_token_endpoint=settings.OAUTH2_REVOKE_URL,
        client_authentication=client_auth(),
        bearer_signature=bearer_signature(),
    )


def build_service() -> OAuth20Service:
    """OAuth20Service wired from settings, with an httpx transport"""
    if not settings.OAUTH2_CLIENT_ID:
        raise OAuth2InputError("OAUTH2_CLIENT_ID is not configured")

    config = ClientConfig(
        api_key=settings.OAUTH2_CLIENT_ID,
        api_secret=settings.OAUTH2_CLIENT_SECRET,
        callback=settings.OAUTH2_CALLBACK,
        default_scope=settings.OAUTH2_DEFAULT_SCOPE,
        user_agent=settings.OAUTH2_USER_AGENT,
    )
    transport = HttpxTransport(
        timeout=settings.REQUEST_TIMEOUT,
        connect_timeout=settings.CONNECT_TIMEOUT,
    )

    logger.debug(f"Configured OAuth client {config.api_key} for {settings.OAUTH2_TOKEN_URL}")
    return OAuth20Service(
        build_api(),
        config,
        transport=transport,
        max_workers=settings.ASYNC_MAX_WORKERS,
    )
