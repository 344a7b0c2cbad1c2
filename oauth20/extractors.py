"""Token response parsing (RFC 6749 sections 5.1 and 5.2)"""

import json
import logging
from typing import Any, Dict, NoReturn, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .constants import ERROR
from .exceptions import OAuth2AccessTokenErrorResponse, OAuth2ProtocolError
from .models import AccessToken, Response

logger = logging.getLogger(__name__)


class TokenResponsePayload(BaseModel):
    """Successful token response body"""
    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None


class ErrorResponsePayload(BaseModel):
    """Error response body"""
    model_config = ConfigDict(extra="allow")

    error: str
    error_description: Optional[str] = None
    error_uri: Optional[str] = None


def _load_json(body: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return None
    return data if isinstance(data, dict) else None


class OAuth2AccessTokenJsonExtractor:
    """Turns a token endpoint response into an AccessToken or a protocol error"""

    def extract(self, response: Response) -> AccessToken:
        """Extract an access token from a token endpoint response

        Args:
            response: Response from the token endpoint

        Returns:
            Parsed AccessToken

        Raises:
            OAuth2AccessTokenErrorResponse: If the server returned an error object
            OAuth2ProtocolError: If the response is not a usable token response
        """
        body = response.body or ""
        if response.code != 200:
            logger.error(f"Token endpoint returned status {response.code}")
            self.generate_error(body, response)

        data = _load_json(body)
        if data is None:
            raise OAuth2ProtocolError(
                f"Response body is not a JSON object: '{body[:200]}'", response
            )

        if data.get(ERROR) is not None:
            self.generate_error(body, response)

        try:
            payload = TokenResponsePayload.model_validate(data)
        except ValidationError as e:
            raise OAuth2ProtocolError(
                f"Response body is incorrect. Can't extract an access token: {e}", response
            ) from e

        return AccessToken(
            access_token=payload.access_token,
            token_type=payload.token_type,
            expires_in=payload.expires_in,
            refresh_token=payload.refresh_token,
            scope=payload.scope,
            raw_response=body,
        )

    def generate_error(self, body: str, response: Optional[Response] = None) -> NoReturn:
        """Raise the protocol error described by an error response body

        Args:
            body: Response body
            response: Full response, attached to the raised exception

        Raises:
            OAuth2AccessTokenErrorResponse: If the body is an RFC 6749 error object
            OAuth2ProtocolError: Otherwise, with the body as message
        """
        data = _load_json(body or "")
        if data is not None:
            try:
                payload = ErrorResponsePayload.model_validate(data)
            except ValidationError:
                payload = None
            if payload is not None:
                raise OAuth2AccessTokenErrorResponse(
                    error=payload.error,
                    error_description=payload.error_description,
                    error_uri=payload.error_uri,
                    response=response,
                )

        status = f" (HTTP {response.code})" if response is not None else ""
        raise OAuth2ProtocolError(f"Unexpected error response{status}: '{body}'", response)
