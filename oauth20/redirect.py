"""Authorization callback parsing"""

from .constants import CODE, STATE
from .models import AuthorizationResult


def extract_authorization(redirect_location: str) -> AuthorizationResult:
    """Extract code and state from the URL the provider redirected to

    Only the query component is read (up to the first '#'). Pairs that do
    not split into exactly a key and a value are skipped, and values are
    returned exactly as they appear, without URL decoding.

    Args:
        redirect_location: Full redirect URL received at the callback endpoint

    Returns:
        AuthorizationResult with code and/or state, None where absent
    """
    authorization = AuthorizationResult()

    start = redirect_location.find("?")
    if start == -1:
        return authorization

    end = redirect_location.find("#", start)
    if end == -1:
        end = len(redirect_location)

    for param in redirect_location[start + 1:end].split("&"):
        key_value = param.split("=")
        # "code=" carries no value and counts as a single part
        while key_value and key_value[-1] == "":
            key_value.pop()
        if len(key_value) != 2:
            continue

        key, value = key_value
        if key == CODE:
            authorization.code = value
        elif key == STATE:
            authorization.state = value

    return authorization
