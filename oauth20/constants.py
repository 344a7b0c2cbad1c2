"""
OAuth 2.0 wire constants (RFC 6749, RFC 7009, RFC 7636)
"""

# Authorization request
RESPONSE_TYPE = "response_type"
CLIENT_ID = "client_id"
CLIENT_SECRET = "client_secret"
REDIRECT_URI = "redirect_uri"
SCOPE = "scope"
STATE = "state"
CODE = "code"

# Token request
GRANT_TYPE = "grant_type"
AUTHORIZATION_CODE = "authorization_code"
REFRESH_TOKEN = "refresh_token"
PASSWORD = "password"
USERNAME = "username"
CLIENT_CREDENTIALS = "client_credentials"

# Token response
ACCESS_TOKEN = "access_token"
ERROR = "error"

# Revocation
TOKEN = "token"
TOKEN_TYPE_HINT = "token_type_hint"

# PKCE
PKCE_CODE_VERIFIER = "code_verifier"
PKCE_CODE_CHALLENGE = "code_challenge"
PKCE_CODE_CHALLENGE_METHOD = "code_challenge_method"

# HTTP
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
DEFAULT_RESPONSE_TYPE = "code"
