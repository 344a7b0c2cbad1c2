"""CLI entry point and argument parsing"""

import sys
import argparse

from oauth20 import OAuth2InputError
from cli import auth_handlers
from cli.debug_setup import setup_debug_console
from cli.service_factory import build_service


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OAuth 2.0 client flows")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--reveal",
        action="store_true",
        help="Print token values in full instead of masking them"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    authorize = subparsers.add_parser("authorize", help="Print the authorization URL")
    authorize.add_argument("--state", default=None, help="Opaque anti-CSRF value")
    authorize.add_argument("--pkce", action="store_true", help="Attach a PKCE code challenge")
    authorize.add_argument("--scope", default=None, help="Scope override")
    authorize.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra query parameter (repeatable)"
    )
    authorize.add_argument("--open", action="store_true", help="Open the URL in the default browser")

    parse_redirect = subparsers.add_parser("parse-redirect", help="Show code and state of a redirect URL")
    parse_redirect.add_argument("url", help="Redirect URL received at the callback")

    exchange = subparsers.add_parser("exchange", help="Exchange an authorization code for tokens")
    exchange.add_argument("code", help="Authorization code or the full redirect URL")
    exchange.add_argument("--verifier", default=None, help="PKCE code verifier from the authorize step")
    exchange.add_argument("--scope", default=None, help="Scope override")
    exchange.add_argument("--state", default=None, help="Expected state in the redirect URL")

    refresh = subparsers.add_parser("refresh", help="Refresh an access token")
    refresh.add_argument("refresh_token", help="Refresh token")
    refresh.add_argument("--scope", default=None, help="Scope override")

    password = subparsers.add_parser("password", help="Resource owner password grant")
    password.add_argument("username", help="Resource owner username")
    password.add_argument("--scope", default=None, help="Scope override")

    client_credentials = subparsers.add_parser("client-credentials", help="Client credentials grant")
    client_credentials.add_argument("--scope", default=None, help="Scope override")

    revoke = subparsers.add_parser("revoke", help="Revoke a token")
    revoke.add_argument("token", help="Token to revoke")
    revoke.add_argument(
        "--hint",
        choices=["access_token", "refresh_token"],
        default=None,
        help="Token type hint"
    )

    return parser


def dispatch(args, service, console) -> int:
    """Run the handler for the parsed command"""
    handlers = {
        "authorize": lambda: auth_handlers.authorize(
            service, console, args.state, args.pkce, args.param, args.scope, args.open
        ),
        "parse-redirect": lambda: auth_handlers.parse_redirect(service, console, args.url),
        "exchange": lambda: auth_handlers.exchange(
            service, console, args.code, args.verifier, args.scope, args.state, args.reveal
        ),
        "refresh": lambda: auth_handlers.refresh(service, console, args.refresh_token, args.scope, args.reveal),
        "password": lambda: auth_handlers.password_grant(service, console, args.username, args.scope, args.reveal),
        "client-credentials": lambda: auth_handlers.client_credentials(service, console, args.scope, args.reveal),
        "revoke": lambda: auth_handlers.revoke(service, console, args.token, args.hint),
    }
    return auth_handlers.run_handler(handlers[args.command], console)


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)
    console = setup_debug_console(args.debug)

    try:
        service = build_service()
    except OAuth2InputError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        sys.exit(2)

    try:
        with service:
            exit_code = dispatch(args, service, console)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        exit_code = 130

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
