"""CLI package for the OAuth 2.0 client

Drives the authorization, token exchange and revocation flows from the
command line.
"""

from cli.main import main

__all__ = [
    "main",
]
