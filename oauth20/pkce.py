"""PKCE (Proof Key for Code Exchange, RFC 7636) generation"""

import base64
import hashlib
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .constants import PKCE_CODE_CHALLENGE, PKCE_CODE_CHALLENGE_METHOD


def _base64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


class PKCECodeChallengeMethod(str, Enum):
    """How the code challenge is derived from the verifier"""
    S256 = "S256"
    PLAIN = "plain"

    def transform(self, code_verifier: str) -> str:
        if self is PKCECodeChallengeMethod.PLAIN:
            return code_verifier
        digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
        return _base64url(digest)


@dataclass(frozen=True)
class PKCE:
    """PKCE values for a single authorization attempt

    The verifier cannot be recovered from the challenge, so callers must keep
    it until the authorization code is exchanged.

    Attributes:
        code_verifier: High-entropy random string sent with the token request
        code_challenge: Value derived from the verifier, sent in the authorization URL
        code_challenge_method: Derivation used for the challenge
    """
    code_verifier: str
    code_challenge: str
    code_challenge_method: PKCECodeChallengeMethod = PKCECodeChallengeMethod.S256

    def get_authorization_url_params(self) -> Dict[str, str]:
        return {
            PKCE_CODE_CHALLENGE: self.code_challenge,
            PKCE_CODE_CHALLENGE_METHOD: self.code_challenge_method.value,
        }

    def __repr__(self) -> str:
        return f"PKCE(code_challenge_method={self.code_challenge_method.value!r})"


class PKCEService:
    """Generates PKCE verifier/challenge pairs

    Args:
        number_of_bytes: Random bytes behind the verifier; 32 bytes gives the
            43 character minimum length, 96 the 128 character maximum
    """

    def __init__(self, number_of_bytes: int = 32):
        if not 32 <= number_of_bytes <= 96:
            raise ValueError("number_of_bytes must be between 32 and 96")
        self.number_of_bytes = number_of_bytes

    def generate_pkce(
        self,
        code_challenge_method: PKCECodeChallengeMethod = PKCECodeChallengeMethod.S256
    ) -> PKCE:
        """Generate a fresh PKCE for one authorization attempt"""
        code_verifier = _base64url(secrets.token_bytes(self.number_of_bytes))
        return self.generate_pkce_from_verifier(code_verifier, code_challenge_method)

    @staticmethod
    def generate_pkce_from_verifier(
        code_verifier: str,
        code_challenge_method: PKCECodeChallengeMethod = PKCECodeChallengeMethod.S256
    ) -> PKCE:
        return PKCE(
            code_verifier=code_verifier,
            code_challenge=code_challenge_method.transform(code_verifier),
            code_challenge_method=code_challenge_method,
        )
