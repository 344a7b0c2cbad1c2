"""Token display functionality for CLI"""

from rich.table import Table

from oauth20 import AccessToken, AuthorizationResult


def mask_secret(value: str, visible: int = 6) -> str:
    """Show only the first characters of a secret"""
    if len(value) <= visible:
        return "*" * len(value)
    return f"{value[:visible]}...({len(value)} chars)"


def show_access_token(token: AccessToken, console, reveal: bool = False):
    """
    Display an access token as a table

    Args:
        token: AccessToken to display
        console: Rich console for output
        reveal: Print the token values in full instead of masking them
    """
    show = (lambda v: v) if reveal else mask_secret

    table = Table(title="Access Token")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Access Token", show(token.access_token))
    table.add_row("Token Type", token.token_type or "-")
    table.add_row("Expires In", f"{token.expires_in}s" if token.expires_in is not None else "-")
    table.add_row("Scope", token.scope or "-")
    table.add_row("Refresh Token", show(token.refresh_token) if token.refresh_token else "-")

    console.print(table)


def show_authorization(result: AuthorizationResult, console):
    """Display code and state parsed from a redirect"""
    table = Table(title="Authorization Redirect")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value")

    table.add_row("code", result.code if result.code is not None else "[dim]absent[/dim]")
    table.add_row("state", result.state if result.state is not None else "[dim]absent[/dim]")

    console.print(table)
