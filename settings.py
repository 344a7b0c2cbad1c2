from config.loader import get_config_loader

config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "info")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "oauth_debug.log")

# Client identity
OAUTH2_CLIENT_ID = config.get("OAUTH2_CLIENT_ID", "")
OAUTH2_CLIENT_SECRET = config.get_optional("OAUTH2_CLIENT_SECRET")
OAUTH2_CALLBACK = config.get_optional("OAUTH2_CALLBACK")
OAUTH2_DEFAULT_SCOPE = config.get_optional("OAUTH2_DEFAULT_SCOPE")
OAUTH2_USER_AGENT = config.get_optional("OAUTH2_USER_AGENT")

# Provider endpoints
OAUTH2_AUTHORIZATION_URL = config.get("OAUTH2_AUTHORIZATION_URL", "")
OAUTH2_TOKEN_URL = config.get("OAUTH2_TOKEN_URL", "")
# Refresh falls back to the token endpoint when unset
OAUTH2_REFRESH_URL = config.get_optional("OAUTH2_REFRESH_URL")
OAUTH2_REVOKE_URL = config.get_optional("OAUTH2_REVOKE_URL")

# Provider protocol choices
# basic: HTTP Basic header, body: client_id/client_secret form parameters
OAUTH2_CLIENT_AUTH = config.get_choice("OAUTH2_CLIENT_AUTH", ("basic", "body"), "basic")
# header: Authorization: Bearer, query: access_token query parameter
OAUTH2_BEARER_PLACEMENT = config.get_choice("OAUTH2_BEARER_PLACEMENT", ("header", "query"), "header")

# Timeouts (seconds)
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# Worker pool for non-blocking exchanges
ASYNC_MAX_WORKERS = config.get("ASYNC_MAX_WORKERS", 4)
