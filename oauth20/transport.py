"""HTTP transport for OAuth requests"""

import logging
from typing import Optional

import httpx

from .constants import HEADER_CONTENT_TYPE
from .models import OAuthRequest, Response

logger = logging.getLogger(__name__)


class Transport:
    """Executes an OAuthRequest and returns the raw Response

    Implementations raise their own exceptions for network failures; the
    OAuth service passes them to callers unchanged.
    """

    def execute(self, request: OAuthRequest) -> Response:
        raise NotImplementedError

    def close(self) -> None:
        pass


class HttpxTransport(Transport):
    """Blocking transport backed by an httpx.Client

    Args:
        client: Preconfigured client; when omitted one is created and owned
        timeout: Total request timeout in seconds for an owned client
        connect_timeout: Connection timeout in seconds for an owned client
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        connect_timeout: float = 10.0
    ):
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(timeout, connect=connect_timeout)
        )

    def execute(self, request: OAuthRequest) -> Response:
        headers = dict(request.headers)
        content_type = request.content_type
        if content_type is not None:
            headers[HEADER_CONTENT_TYPE] = content_type

        body = request.body_contents
        logger.debug(f"Sending {request.verb.value} {request.url}")

        http_response = self.client.request(
            request.verb.value,
            request.complete_url,
            headers=headers,
            content=body.encode("utf-8") if body is not None else None,
        )

        logger.debug(f"Response status from {request.url}: {http_response.status_code}")
        return Response(
            code=http_response.status_code,
            body=http_response.text,
            headers=dict(http_response.headers),
            message=http_response.reason_phrase,
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
