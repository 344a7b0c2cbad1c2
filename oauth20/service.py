"""OAuth 2.0 service: token exchange orchestration

Every network operation comes in two modes:

- blocking: ``get_access_token(...)`` runs the request on the calling thread
- non-blocking: ``get_access_token_async(...)`` submits it to an executor and
  returns a ``concurrent.futures.Future`` at once

In non-blocking mode every failure, including invalid input, is delivered
through the future and the optional callback instead of being raised.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar, Union

from . import token_requests
from .api import OAuth2Api
from .authorization import AuthorizationURLBuilder
from .constants import HEADER_USER_AGENT
from .models import (
    AccessToken,
    AccessTokenRequestParams,
    AuthorizationResult,
    ClientConfig,
    OAuthRequest,
    Response,
    TokenTypeHint,
)
from .pkce import PKCE, PKCEService
from .redirect import extract_authorization
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Invoked exactly once per async call: (result, None) on success, (None, error) on failure
AsyncCallback = Callable[[Optional[T], Optional[BaseException]], None]

DEFAULT_MAX_WORKERS = 4


class OAuth20Service:
    """Client side of the OAuth 2.0 protocol for one provider and one client

    Holds only read-only configuration, so one instance can serve concurrent
    calls from several threads.

    ``Future.cancel()`` on a non-blocking call only stops an exchange that
    has not started yet. Once a worker picks it up the request runs to
    completion, since transports expose a blocking ``execute`` only.

    Args:
        api: Provider endpoints and protocol choices
        config: Client identity (id, secret, redirect URI, default scope)
        transport: HTTP transport (default: HttpxTransport)
        executor: Executor for non-blocking calls (default: an owned thread pool)
        max_workers: Size of the owned thread pool
    """

    def __init__(
        self,
        api: OAuth2Api,
        config: ClientConfig,
        transport: Optional[Transport] = None,
        executor: Optional[Executor] = None,
        max_workers: int = DEFAULT_MAX_WORKERS
    ):
        self.api = api
        self.config = config
        self.transport = transport or HttpxTransport()
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="oauth20",
        )
        self.pkce_service = PKCEService()

    # Configuration accessors
    @property
    def default_scope(self) -> Optional[str]:
        return self.config.default_scope

    @property
    def response_type(self) -> str:
        return self.config.response_type

    # Authorization URLs
    def create_authorization_url_builder(self) -> AuthorizationURLBuilder:
        return AuthorizationURLBuilder(self.api, self.config, self.pkce_service)

    def get_authorization_url(
        self,
        state: Optional[str] = None,
        additional_params: Optional[dict] = None,
        pkce: Optional[PKCE] = None
    ) -> str:
        """Return the URL where users should be sent to authorize this client

        Args:
            state: Opaque anti-CSRF value
            additional_params: Extra query parameters, overriding built-in ones
            pkce: PKCE values to attach

        Returns:
            Authorization URL
        """
        return (
            self.create_authorization_url_builder()
            .state(state)
            .additional_params(additional_params)
            .pkce(pkce)
            .build()
        )

    def extract_authorization(self, redirect_location: str) -> AuthorizationResult:
        return extract_authorization(redirect_location)

    # Request signing
    def sign_request(
        self,
        access_token: Union[AccessToken, str, None],
        request: OAuthRequest
    ) -> None:
        """Attach a bearer token to an API request; a None token leaves it untouched"""
        if access_token is None:
            return
        if isinstance(access_token, AccessToken):
            access_token = access_token.access_token
        self.api.bearer_signature.sign_request(access_token, request)

    # Transport
    def execute(self, request: OAuthRequest) -> Response:
        """Send a request through the transport, adding the User-Agent if configured"""
        if self.config.user_agent:
            request.add_header(HEADER_USER_AGENT, self.config.user_agent)
        return self.transport.execute(request)

    def _extract_token(self, response: Response) -> AccessToken:
        return self.api.access_token_extractor.extract(response)

    def _check_revoke_response(self, response: Response) -> None:
        if response.code != 200:
            logger.error(f"Token revocation failed with status {response.code}")
            self.api.access_token_extractor.generate_error(response.body, response)

    def _send_access_token_request_sync(self, request: OAuthRequest) -> AccessToken:
        token = self._extract_token(self.execute(request))
        logger.info(f"Obtained access token from {request.url}")
        return token

    def _submit(
        self,
        build_request: Callable[[], OAuthRequest],
        convert: Callable[[Response], T],
        callback: Optional[AsyncCallback] = None
    ) -> "Future[T]":
        """Run build, send and convert on the executor

        The callback runs on the worker thread, never on the submitting one.
        """
        def task() -> T:
            try:
                request = build_request()
                result = convert(self.execute(request))
            except Exception as e:
                logger.error(f"Async OAuth request failed: {e}")
                _notify(callback, None, e)
                raise
            _notify(callback, result, None)
            return result

        return self.executor.submit(task)

    def _send_access_token_request_async(
        self,
        build_request: Callable[[], OAuthRequest],
        callback: Optional[AsyncCallback] = None
    ) -> "Future[AccessToken]":
        return self._submit(build_request, self._extract_token, callback)

    # Authorization code grant
    def get_access_token(self, params: Union[AccessTokenRequestParams, str]) -> AccessToken:
        """Exchange an authorization code for an access token

        Args:
            params: Request parameters, or just the authorization code

        Returns:
            AccessToken issued by the server
        """
        request = token_requests.create_access_token_request(self.api, self.config, _as_params(params))
        return self._send_access_token_request_sync(request)

    def get_access_token_async(
        self,
        params: Union[AccessTokenRequestParams, str],
        callback: Optional[AsyncCallback] = None
    ) -> "Future[AccessToken]":
        return self._send_access_token_request_async(
            lambda: token_requests.create_access_token_request(self.api, self.config, _as_params(params)),
            callback,
        )

    # Refresh token grant
    def refresh_access_token(self, refresh_token: str, scope: Optional[str] = None) -> AccessToken:
        """Obtain a new access token with a refresh token

        Raises:
            OAuth2InputError: If refresh_token is None or empty
        """
        request = token_requests.create_refresh_token_request(self.api, self.config, refresh_token, scope)
        return self._send_access_token_request_sync(request)

    def refresh_access_token_async(
        self,
        refresh_token: str,
        scope: Optional[str] = None,
        callback: Optional[AsyncCallback] = None
    ) -> "Future[AccessToken]":
        return self._send_access_token_request_async(
            lambda: token_requests.create_refresh_token_request(self.api, self.config, refresh_token, scope),
            callback,
        )

    # Resource owner password credentials grant
    def get_access_token_password_grant(
        self,
        username: str,
        password: str,
        scope: Optional[str] = None
    ) -> AccessToken:
        request = token_requests.create_password_grant_request(
            self.api, self.config, username, password, scope
        )
        return self._send_access_token_request_sync(request)

    def get_access_token_password_grant_async(
        self,
        username: str,
        password: str,
        scope: Optional[str] = None,
        callback: Optional[AsyncCallback] = None
    ) -> "Future[AccessToken]":
        return self._send_access_token_request_async(
            lambda: token_requests.create_password_grant_request(
                self.api, self.config, username, password, scope
            ),
            callback,
        )

    # Client credentials grant
    def get_access_token_client_credentials_grant(self, scope: Optional[str] = None) -> AccessToken:
        request = token_requests.create_client_credentials_grant_request(self.api, self.config, scope)
        return self._send_access_token_request_sync(request)

    def get_access_token_client_credentials_grant_async(
        self,
        scope: Optional[str] = None,
        callback: Optional[AsyncCallback] = None
    ) -> "Future[AccessToken]":
        return self._send_access_token_request_async(
            lambda: token_requests.create_client_credentials_grant_request(self.api, self.config, scope),
            callback,
        )

    # Revocation
    def revoke_token(
        self,
        token_to_revoke: str,
        token_type_hint: Optional[TokenTypeHint] = None
    ) -> None:
        """Revoke an access or refresh token (RFC 7009)

        Raises:
            OAuth2ProtocolError: If the server answers with anything but 200
        """
        request = token_requests.create_revoke_token_request(
            self.api, self.config, token_to_revoke, token_type_hint
        )
        self._check_revoke_response(self.execute(request))
        logger.info(f"Revoked token at {request.url}")

    def revoke_token_async(
        self,
        token_to_revoke: str,
        token_type_hint: Optional[TokenTypeHint] = None,
        callback: Optional[AsyncCallback] = None
    ) -> "Future[None]":
        return self._submit(
            lambda: token_requests.create_revoke_token_request(
                self.api, self.config, token_to_revoke, token_type_hint
            ),
            self._check_revoke_response,
            callback,
        )

    # Lifecycle
    def close(self) -> None:
        """Shut down the owned executor and the transport"""
        if self._owns_executor:
            self.executor.shutdown(wait=True)
        self.transport.close()

    def __enter__(self) -> "OAuth20Service":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _as_params(params: Union[AccessTokenRequestParams, str]) -> AccessTokenRequestParams:
    if isinstance(params, AccessTokenRequestParams):
        return params
    return AccessTokenRequestParams(code=params)


def _notify(callback: Optional[AsyncCallback], result, error: Optional[BaseException]) -> None:
    if callback is None:
        return
    try:
        callback(result, error)
    except Exception:
        # Callback failures never change the exchange outcome
        logger.exception("OAuth completion callback raised")
