"""Tests for authorization URL construction."""

from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

from oauth20 import AuthorizationURLBuilder, ClientConfig, OAuth2Api, PKCECodeChallengeMethod


def query_of(url):
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query, keep_blank_values=True).items()}


class TestAuthorizationURLBuilder:
    def test_required_params(self, service):
        url = service.get_authorization_url()

        assert url == (
            "https://provider.example/oauth/authorize?response_type=code&client_id=client-1"
            "&redirect_uri=https%3A%2F%2Fapp.example%2Fcb&scope=read%20write"
        )

    def test_state_passed_verbatim(self, service):
        assert query_of(service.get_authorization_url(state="xyz-123"))["state"] == "xyz-123"

    def test_no_state_no_param(self, service):
        assert "state" not in query_of(service.get_authorization_url())

    def test_scope_override_beats_default(self, service):
        url = service.create_authorization_url_builder().scope("profile").build()
        assert query_of(url)["scope"] == "profile"

    def test_no_redirect_uri_or_scope_when_unset(self, api):
        builder = AuthorizationURLBuilder(api, ClientConfig(api_key="client-1"))
        query = query_of(builder.build())

        assert query == {"response_type": "code", "client_id": "client-1"}

    def test_custom_response_type(self, api):
        builder = AuthorizationURLBuilder(api, ClientConfig(api_key="c", response_type="code id_token"))
        assert query_of(builder.build())["response_type"] == "code id_token"

    def test_additional_params_override_built_ins(self, service):
        url = service.get_authorization_url(additional_params={"scope": "admin", "prompt": "consent"})
        query = query_of(url)

        assert query["scope"] == "admin"
        assert query["prompt"] == "consent"

    def test_provider_params_included(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize",
            authorization_params={"access_type": "offline"},
        )
        url = AuthorizationURLBuilder(api, client_config).build()

        assert query_of(url)["access_type"] == "offline"

    def test_base_url_with_query_string(self, client_config):
        api = OAuth2Api(
            access_token_endpoint="https://p.example/token",
            authorization_base_url="https://p.example/authorize?tenant=t1",
        )
        url = AuthorizationURLBuilder(api, client_config).build()

        assert url.startswith("https://p.example/authorize?tenant=t1&response_type=code")

    def test_init_pkce_adds_challenge(self, service):
        builder = service.create_authorization_url_builder().init_pkce()
        query = query_of(builder.build())
        pkce = builder.get_pkce()

        assert query["code_challenge"] == pkce.code_challenge
        assert query["code_challenge_method"] == "S256"
        assert "code_verifier" not in query

    def test_init_pkce_plain(self, service):
        builder = service.create_authorization_url_builder().init_pkce(PKCECodeChallengeMethod.PLAIN)
        query = query_of(builder.build())

        assert query["code_challenge_method"] == "plain"
        assert query["code_challenge"] == builder.get_pkce().code_verifier

    def test_init_pkce_twice_replaces_verifier(self, service):
        builder = service.create_authorization_url_builder().init_pkce()
        first = builder.get_pkce()
        builder.init_pkce()

        assert builder.get_pkce().code_verifier != first.code_verifier
        assert query_of(builder.build())["code_challenge"] == builder.get_pkce().code_challenge

    def test_pkce_wins_over_additional_params(self, service):
        builder = (
            service.create_authorization_url_builder()
            .additional_params({"code_challenge": "bogus"})
            .init_pkce()
        )
        assert query_of(builder.build())["code_challenge"] == builder.get_pkce().code_challenge

    def test_get_pkce_none_by_default(self, service):
        assert service.create_authorization_url_builder().get_pkce() is None

    def test_start_login_flow_opens_browser(self, service):
        with patch("oauth20.authorization.webbrowser.open") as mock_open:
            url = service.create_authorization_url_builder().state("s").start_login_flow()

        mock_open.assert_called_once_with(url)
        assert query_of(url)["state"] == "s"
