"""Tests for token endpoint request builders."""

import base64

import pytest

from oauth20 import (
    AccessTokenRequestParams,
    ClientConfig,
    OAuth2Api,
    OAuth2InputError,
    RequestBodyAuthenticationScheme,
    TokenTypeHint,
    Verb,
)
from oauth20 import token_requests

GRANT_SPECIFIC_PARAMS = {
    "authorization_code": {"code", "redirect_uri", "code_verifier"},
    "refresh_token": {"refresh_token"},
    "password": {"username", "password"},
    "client_credentials": set(),
}


def basic_header(client_id, secret):
    return "Basic " + base64.b64encode(f"{client_id}:{secret}".encode()).decode()


def build_all(api, config, scope=None):
    return {
        "authorization_code": token_requests.create_access_token_request(
            api, config, AccessTokenRequestParams(code="abc", pkce_code_verifier="v", scope=scope)
        ),
        "refresh_token": token_requests.create_refresh_token_request(api, config, "rt", scope),
        "password": token_requests.create_password_grant_request(api, config, "alice", "pw", scope),
        "client_credentials": token_requests.create_client_credentials_grant_request(api, config, scope),
    }


class TestGrantTypes:
    def test_each_builder_sets_its_grant_type(self, api, client_config):
        for grant, request in build_all(api, client_config).items():
            assert request.body_params["grant_type"] == grant

    def test_no_parameters_from_other_grants(self, api, client_config):
        for grant, request in build_all(api, client_config).items():
            foreign = set().union(*(p for g, p in GRANT_SPECIFIC_PARAMS.items() if g != grant))
            foreign -= GRANT_SPECIFIC_PARAMS[grant]
            assert not foreign & set(request.parameters), grant


class TestAuthorizationCodeRequest:
    def test_parameters(self, api, client_config):
        request = token_requests.create_access_token_request(
            api, client_config, AccessTokenRequestParams(code="abc")
        )

        assert request.verb is Verb.POST
        assert request.url == "https://provider.example/oauth/token"
        assert request.body_params == {
            "code": "abc",
            "redirect_uri": "https://app.example/cb",
            "scope": "read write",
            "grant_type": "authorization_code",
        }
        assert request.headers["Authorization"] == basic_header("client-1", "secret-1")

    def test_pkce_verifier_is_sent_byte_identical(self, service):
        builder = service.create_authorization_url_builder().init_pkce()
        builder.build()
        verifier = builder.get_pkce().code_verifier

        request = token_requests.create_access_token_request(
            service.api, service.config, AccessTokenRequestParams(code="abc", pkce_code_verifier=verifier)
        )

        assert request.body_params["code_verifier"] == verifier

    def test_no_redirect_uri_when_callback_unset(self, api):
        request = token_requests.create_access_token_request(
            api, ClientConfig(api_key="c", api_secret="s"), AccessTokenRequestParams(code="abc")
        )
        assert "redirect_uri" not in request.body_params

    def test_empty_code_is_not_validated(self, api, client_config):
        request = token_requests.create_access_token_request(
            api, client_config, AccessTokenRequestParams(code="")
        )
        assert request.body_params["code"] == ""

    def test_extra_parameters_added_last(self, api, client_config):
        params = AccessTokenRequestParams(code="abc", extra_parameters={"resource": "https://api.example"})
        request = token_requests.create_access_token_request(api, client_config, params)

        assert list(request.body_params)[-1] == "resource"

    def test_get_verb_uses_query_string(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize",
            access_token_verb=Verb.GET,
        )
        request = token_requests.create_access_token_request(api, client_config, AccessTokenRequestParams("abc"))

        assert request.query_string_params["code"] == "abc"
        assert request.body_params == {}


class TestScopeResolution:
    def test_explicit_scope_overrides_default(self, api, client_config):
        for request in build_all(api, client_config, scope="admin").values():
            assert request.body_params["scope"] == "admin"

    def test_default_scope_used_when_none(self, api, client_config):
        for request in build_all(api, client_config).values():
            assert request.body_params["scope"] == "read write"

    def test_empty_string_is_an_explicit_scope(self, api, client_config):
        for request in build_all(api, client_config, scope="").values():
            assert request.body_params["scope"] == ""

    def test_no_scope_when_neither_set(self, api):
        config = ClientConfig(api_key="c", api_secret="s")
        for request in build_all(api, config).values():
            assert "scope" not in request.parameters


class TestRefreshTokenRequest:
    @pytest.mark.parametrize("refresh_token", [None, ""])
    def test_rejects_absent_or_empty_token(self, api, client_config, refresh_token):
        with pytest.raises(OAuth2InputError):
            token_requests.create_refresh_token_request(api, client_config, refresh_token)

    @pytest.mark.parametrize("refresh_token", [" ", "0", "rt"])
    def test_accepts_any_other_token(self, api, client_config, refresh_token):
        request = token_requests.create_refresh_token_request(api, client_config, refresh_token)
        assert request.body_params["refresh_token"] == refresh_token

    def test_input_error_is_a_value_error(self, api, client_config):
        with pytest.raises(ValueError):
            token_requests.create_refresh_token_request(api, client_config, "")

    def test_uses_refresh_endpoint(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize",
            refresh_token_endpoint="https://p.example/refresh",
        )
        request = token_requests.create_refresh_token_request(api, client_config, "rt")

        assert request.url == "https://p.example/refresh"

    def test_refresh_endpoint_defaults_to_token_endpoint(self, api, client_config):
        request = token_requests.create_refresh_token_request(api, client_config, "rt")
        assert request.url == api.access_token_endpoint


class TestPasswordAndClientCredentials:
    def test_password_parameters(self, api, client_config):
        request = token_requests.create_password_grant_request(api, client_config, "alice", "pw")

        assert request.body_params["username"] == "alice"
        assert request.body_params["password"] == "pw"
        assert request.headers["Authorization"] == basic_header("client-1", "secret-1")

    def test_client_credentials_parameters(self, api, client_config):
        request = token_requests.create_client_credentials_grant_request(api, client_config)

        assert request.body_params == {"scope": "read write", "grant_type": "client_credentials"}

    def test_body_authentication(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize",
            client_authentication=RequestBodyAuthenticationScheme(),
        )
        request = token_requests.create_client_credentials_grant_request(api, client_config)

        assert request.body_params["client_id"] == "client-1"
        assert request.body_params["client_secret"] == "secret-1"
        assert "Authorization" not in request.headers


class TestRevokeTokenRequest:
    def test_parameters(self, api, client_config):
        request = token_requests.create_revoke_token_request(api, client_config, "at-123")

        assert request.verb is Verb.POST
        assert request.url == "https://provider.example/oauth/revoke"
        assert request.body_params == {"token": "at-123"}
        assert request.headers["Authorization"] == basic_header("client-1", "secret-1")

    def test_token_type_hint(self, api, client_config):
        request = token_requests.create_revoke_token_request(
            api, client_config, "rt", TokenTypeHint.REFRESH_TOKEN
        )
        assert request.body_params["token_type_hint"] == "refresh_token"

    def test_always_post_even_for_get_providers(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize",
            revoke_token_endpoint="https://p.example/revoke",
            access_token_verb=Verb.GET,
        )
        request = token_requests.create_revoke_token_request(api, client_config, "at")

        assert request.verb is Verb.POST
        assert request.body_params["token"] == "at"

    def test_missing_revoke_endpoint(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize",
        )
        with pytest.raises(OAuth2InputError, match="revoke"):
            token_requests.create_revoke_token_request(api, client_config, "at")
