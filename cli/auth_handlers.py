"""OAuth flow handlers for CLI"""

import logging
from typing import Callable, Dict, List, Optional

import httpx
from rich.prompt import Prompt

from oauth20 import (
    AccessTokenRequestParams,
    OAuth20Service,
    OAuth2AccessTokenErrorResponse,
    OAuth2InputError,
    OAuth2ProtocolError,
    TokenTypeHint,
)
from cli.status_display import show_access_token, show_authorization

logger = logging.getLogger(__name__)


def describe_error(error: BaseException) -> tuple[str, str]:
    """
    Classify a failed OAuth operation for display

    Args:
        error: Exception raised by the service

    Returns:
        Tuple of (status, message)
    """
    if isinstance(error, OAuth2InputError):
        return "LOCAL_ERROR", f"Could not build request: {error}"

    if isinstance(error, httpx.TimeoutException):
        return "TRANSPORT_ERROR", f"Timed out reaching the server: {error}"

    if isinstance(error, httpx.HTTPError):
        return "TRANSPORT_ERROR", f"Could not reach the server: {error}"

    if isinstance(error, OAuth2AccessTokenErrorResponse):
        detail = f" ({error.error_uri})" if error.error_uri else ""
        return "SERVER_REJECTED", f"Server rejected request: {error}{detail}"

    if isinstance(error, OAuth2ProtocolError):
        return "SERVER_REJECTED", f"Server rejected request: {error}"

    return "UNKNOWN_ERROR", f"Unexpected error: {error}"


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Turn key=value strings into a dict

    Raises:
        OAuth2InputError: If a pair has no '='
    """
    params = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise OAuth2InputError(f"Expected key=value, got {pair!r}")
        params[key] = value
    return params


def run_handler(action: Callable[[], None], console) -> int:
    """
    Run a handler and report failures by kind

    Returns:
        Process exit code
    """
    try:
        action()
        return 0
    except (OAuth2InputError, OAuth2ProtocolError, httpx.HTTPError) as e:
        status, message = describe_error(e)
        logger.debug(f"[CLI] {status}: {e!r}")
        console.print(f"[red]{status}:[/red] {message}")
        return 1


def authorize(
    service: OAuth20Service,
    console,
    state: Optional[str] = None,
    use_pkce: bool = False,
    params: Optional[List[str]] = None,
    scope: Optional[str] = None,
    open_browser: bool = False,
):
    """
    Print (and optionally open) the authorization URL

    Args:
        service: OAuth20Service instance
        console: Rich console for output
        state: Opaque anti-CSRF value
        use_pkce: Generate PKCE values and attach the challenge
        params: Extra key=value query parameters
        scope: Scope override
        open_browser: Open the URL in the default browser
    """
    builder = (
        service.create_authorization_url_builder()
        .state(state)
        .scope(scope)
        .additional_params(parse_params(params))
    )
    if use_pkce:
        builder.init_pkce()

    if open_browser:
        auth_url = builder.start_login_flow()
        console.print("[green][OK][/green] Browser opened")
    else:
        auth_url = builder.build()

    console.print("\n[bold]Authorization URL:[/bold]")
    console.print(auth_url, soft_wrap=True)

    pkce = builder.get_pkce()
    if pkce is not None:
        console.print("\n[bold]PKCE code verifier[/bold] [dim](keep it for the exchange step)[/dim]:")
        console.print(pkce.code_verifier, soft_wrap=True)


def parse_redirect(service: OAuth20Service, console, redirect_url: str):
    """Show the code and state carried by a redirect URL"""
    show_authorization(service.extract_authorization(redirect_url), console)


def exchange(
    service: OAuth20Service,
    console,
    code_or_url: str,
    verifier: Optional[str] = None,
    scope: Optional[str] = None,
    expected_state: Optional[str] = None,
    reveal: bool = False,
):
    """
    Exchange an authorization code (or a full redirect URL) for a token

    Raises:
        OAuth2InputError: If no code is found or the state does not match
    """
    code = code_or_url
    if "?" in code_or_url:
        result = service.extract_authorization(code_or_url)
        if result.code is None:
            raise OAuth2InputError("Redirect URL carries no authorization code")
        if expected_state is not None and result.state != expected_state:
            raise OAuth2InputError("State in redirect does not match the expected state")
        code = result.code

    console.print("Exchanging authorization code for tokens...")
    token = service.get_access_token(
        AccessTokenRequestParams(code=code, pkce_code_verifier=verifier, scope=scope)
    )
    console.print("[green][OK][/green] Token obtained")
    show_access_token(token, console, reveal=reveal)


def refresh(service: OAuth20Service, console, refresh_token: str, scope: Optional[str] = None, reveal: bool = False):
    console.print("Refreshing access token...")
    token = service.refresh_access_token(refresh_token, scope)
    console.print("[green][OK][/green] Token refreshed")
    show_access_token(token, console, reveal=reveal)


def password_grant(
    service: OAuth20Service,
    console,
    username: str,
    scope: Optional[str] = None,
    reveal: bool = False,
):
    password = Prompt.ask(f"Password for {username}", password=True, console=console)
    token = service.get_access_token_password_grant(username, password, scope)
    console.print("[green][OK][/green] Token obtained")
    show_access_token(token, console, reveal=reveal)


def client_credentials(service: OAuth20Service, console, scope: Optional[str] = None, reveal: bool = False):
    token = service.get_access_token_client_credentials_grant(scope)
    console.print("[green][OK][/green] Token obtained")
    show_access_token(token, console, reveal=reveal)


def revoke(service: OAuth20Service, console, token: str, hint: Optional[str] = None):
    token_type_hint = TokenTypeHint(hint) if hint else None
    service.revoke_token(token, token_type_hint)
    console.print("[green][OK][/green] Token revoked")
