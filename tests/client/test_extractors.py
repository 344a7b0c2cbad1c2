"""Tests for token response parsing."""

import pytest

from oauth20 import (
    OAuth2AccessTokenErrorResponse,
    OAuth2AccessTokenJsonExtractor,
    OAuth2ErrorCode,
    OAuth2ProtocolError,
    Response,
)

from conftest import TOKEN_BODY


@pytest.fixture
def extractor():
    return OAuth2AccessTokenJsonExtractor()


class TestExtract:
    def test_full_token(self, extractor):
        token = extractor.extract(Response(code=200, body=TOKEN_BODY))

        assert token.access_token == "at-123"
        assert token.token_type == "Bearer"
        assert token.expires_in == 3600
        assert token.refresh_token == "rt-456"
        assert token.scope == "read"
        assert token.raw_response == TOKEN_BODY

    def test_minimal_token(self, extractor):
        token = extractor.extract(Response(code=200, body='{"access_token": "at"}'))

        assert token.access_token == "at"
        assert token.refresh_token is None
        assert token.expires_in is None

    def test_unknown_fields_are_allowed(self, extractor):
        body = '{"access_token": "at", "id_token": "jwt", "ext": {"a": 1}}'
        assert extractor.extract(Response(code=200, body=body)).raw_response == body

    def test_missing_access_token(self, extractor):
        with pytest.raises(OAuth2ProtocolError, match="Can't extract an access token"):
            extractor.extract(Response(code=200, body='{"token_type": "Bearer"}'))

    @pytest.mark.parametrize("body", ["", "not json", "[1, 2]"])
    def test_non_object_body(self, extractor, body):
        with pytest.raises(OAuth2ProtocolError) as exc_info:
            extractor.extract(Response(code=200, body=body))

        assert not isinstance(exc_info.value, OAuth2AccessTokenErrorResponse)
        assert exc_info.value.response.code == 200

    def test_error_object_with_200_status(self, extractor):
        with pytest.raises(OAuth2AccessTokenErrorResponse) as exc_info:
            extractor.extract(Response(code=200, body='{"error": "invalid_grant"}'))

        assert exc_info.value.error_code is OAuth2ErrorCode.INVALID_GRANT

    def test_null_error_field_is_not_an_error(self, extractor):
        token = extractor.extract(Response(code=200, body='{"access_token": "at", "error": null}'))
        assert token.access_token == "at"

    def test_error_status(self, extractor):
        body = (
            '{"error": "invalid_client", "error_description": "Bad secret", '
            '"error_uri": "https://p.example/errors"}'
        )
        response = Response(code=401, body=body)

        with pytest.raises(OAuth2AccessTokenErrorResponse) as exc_info:
            extractor.extract(response)

        error = exc_info.value
        assert error.error == "invalid_client"
        assert error.error_code is OAuth2ErrorCode.INVALID_CLIENT
        assert error.error_description == "Bad secret"
        assert error.error_uri == "https://p.example/errors"
        assert error.response is response
        assert str(error) == "invalid_client: Bad secret"

    def test_error_status_with_token_body_is_still_an_error(self, extractor):
        with pytest.raises(OAuth2ProtocolError):
            extractor.extract(Response(code=500, body=TOKEN_BODY))


class TestGenerateError:
    def test_non_standard_error_code(self, extractor):
        with pytest.raises(OAuth2AccessTokenErrorResponse) as exc_info:
            extractor.generate_error('{"error": "quota_exceeded"}')

        assert exc_info.value.error == "quota_exceeded"
        assert exc_info.value.error_code is None

    def test_unparseable_body(self, extractor):
        response = Response(code=503, body="Service Unavailable")

        with pytest.raises(OAuth2ProtocolError, match=r"HTTP 503.*Service Unavailable") as exc_info:
            extractor.generate_error(response.body, response)

        assert not isinstance(exc_info.value, OAuth2AccessTokenErrorResponse)
        assert exc_info.value.response is response

    def test_error_code_parse(self):
        assert OAuth2ErrorCode.parse("unsupported_token_type") is OAuth2ErrorCode.UNSUPPORTED_TOKEN_TYPE
        assert OAuth2ErrorCode.parse("nope") is None
        assert OAuth2ErrorCode.parse(None) is None
