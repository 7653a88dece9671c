"""
Tests for the auth injector and the header merger.
"""

import base64

import pytest

from reqbeam.schemas.request import (
    ApiKeyAuth,
    BasicAuth,
    BearerAuth,
    CustomHeaderAuth,
    NoAuth,
    RequestTemplate,
)
from reqbeam.services.auth_injector import apply_auth, resolve_auth
from reqbeam.services.header_merger import merge_headers


URL = "https://api.example.com/users"


class TestApplyAuth:
    """Header and URL changes per auth scheme."""

    @pytest.mark.parametrize("auth", [None, NoAuth()])
    def test_no_auth_returns_inputs_unchanged(self, auth):
        headers, url = apply_auth(auth, {"Accept": "text/plain"}, URL)

        assert headers == {"Accept": "text/plain"}
        assert url == URL

    def test_bearer(self):
        headers, url = apply_auth(BearerAuth(value="abc123"), {}, URL)

        assert headers == {"Authorization": "Bearer abc123"}
        assert url == URL

    def test_basic_is_base64_encoded_once(self):
        headers, _ = apply_auth(BasicAuth(username="alice", password="s3cr:et"), {}, URL)

        token = headers["Authorization"].removeprefix("Basic ")
        assert base64.b64decode(token).decode("utf-8") == "alice:s3cr:et"

    def test_basic_with_non_ascii_credentials(self):
        headers, _ = apply_auth(BasicAuth(username="zoë", password="pässword"), {}, URL)

        token = headers["Authorization"].removeprefix("Basic ")
        assert base64.b64decode(token).decode("utf-8") == "zoë:pässword"

    def test_api_key_defaults_to_header(self):
        headers, url = apply_auth(ApiKeyAuth(key="X-API-Key", value="k"), {}, URL)

        assert headers == {"X-API-Key": "k"}
        assert url == URL

    def test_api_key_in_query(self):
        auth = ApiKeyAuth(key="api_key", value="a b", location="query")

        headers, url = apply_auth(auth, {}, URL + "?page=1")

        assert headers == {}
        assert url == URL + "?page=1&api_key=a%20b"

    def test_api_key_in_query_overwrites_existing_param(self):
        auth = ApiKeyAuth(key="api_key", value="new", location="query")

        _, url = apply_auth(auth, {}, URL + "?api_key=old")

        assert url == URL + "?api_key=new"

    def test_api_key_in_query_on_unparseable_url(self):
        auth = ApiKeyAuth(key="api_key", value="k", location="query")

        _, url = apply_auth(auth, {}, "{{base}}/users")

        assert url == "{{base}}/users?api_key=k"

    def test_custom_header(self):
        auth = CustomHeaderAuth(header_name="X-Signature", header_value="Token xyz")

        headers, _ = apply_auth(auth, {}, URL)

        assert headers == {"X-Signature": "Token xyz"}

    @pytest.mark.parametrize("auth", [
        ApiKeyAuth(key="", value="k"),
        ApiKeyAuth(key="X-Key", value=""),
        ApiKeyAuth(key="", value="k", location="query"),
        BearerAuth(value=""),
        BasicAuth(username="alice", password=""),
        BasicAuth(username="", password="pw"),
        CustomHeaderAuth(header_name="X-Sig", header_value=""),
        CustomHeaderAuth(header_name="", header_value="v"),
    ])
    def test_incomplete_fields_are_a_no_op(self, auth):
        headers, url = apply_auth(auth, {"Accept": "*/*"}, URL)

        assert headers == {"Accept": "*/*"}
        assert url == URL

    def test_template_headers_are_kept(self):
        headers, _ = apply_auth(BearerAuth(value="t"), {"Accept": "application/json"}, URL)

        assert headers == {"Accept": "application/json", "Authorization": "Bearer t"}

    def test_input_headers_are_not_mutated(self):
        original = {"Accept": "application/json"}

        apply_auth(BearerAuth(value="t"), original, URL)

        assert original == {"Accept": "application/json"}


class TestResolveAuth:
    """Placeholder substitution inside auth descriptors."""

    def test_resolves_every_string_field(self):
        auth = BasicAuth(username="{{user}}", password="{{ PASS }}")

        resolved = resolve_auth(auth, {"user": "alice", "pass": "pw"})

        assert resolved == BasicAuth(username="alice", password="pw")

    def test_keeps_variant_and_location(self):
        auth = ApiKeyAuth(key="{{key_name}}", value="{{key}}", location="query")

        resolved = resolve_auth(auth, {"key_name": "api_key", "key": "secret"})

        assert isinstance(resolved, ApiKeyAuth)
        assert resolved.location == "query"
        assert (resolved.key, resolved.value) == ("api_key", "secret")

    def test_none_stays_none(self):
        assert resolve_auth(None, {"a": "b"}) is None

    def test_fields_of_other_variants_are_ignored(self):
        template = RequestTemplate.model_validate({
            "method": "GET",
            "url": URL,
            "auth": {"type": "bearer", "value": "t", "username": "ignored", "location": "query"},
        })

        headers, url = apply_auth(template.auth, {}, template.url)

        assert headers == {"Authorization": "Bearer t"}
        assert url == URL


class TestMergeHeaders:
    """Precedence between custom and auth headers."""

    def test_auth_authorization_overwrites_custom(self):
        merged = merge_headers({"Authorization": "Bearer old"}, {"Authorization": "Bearer new"})
        assert merged == {"Authorization": "Bearer new"}

    def test_authorization_conflict_is_case_insensitive(self):
        merged = merge_headers(
            {"authorization": "Bearer old", "Accept": "*/*"},
            {"Authorization": "Bearer new"}
        )
        assert merged == {"Accept": "*/*", "Authorization": "Bearer new"}

    def test_every_casing_of_custom_authorization_is_removed(self):
        merged = merge_headers(
            {"authorization": "Bearer old1", "AUTHORIZATION": "Bearer old2", "Accept": "*/*"},
            {"Authorization": "Bearer new"}
        )
        assert merged == {"Accept": "*/*", "Authorization": "Bearer new"}

    def test_custom_header_wins_for_other_names(self):
        merged = merge_headers({"X-Foo": "user"}, {"X-Foo": "auth"})
        assert merged == {"X-Foo": "user"}

    def test_custom_header_wins_regardless_of_case(self):
        merged = merge_headers({"x-api-key": "user"}, {"X-API-Key": "auth"})
        assert merged == {"x-api-key": "user"}

    def test_auth_header_added_when_absent(self):
        merged = merge_headers({"Accept": "*/*"}, {"X-API-Key": "k"})
        assert merged == {"Accept": "*/*", "X-API-Key": "k"}

    def test_empty_inputs(self):
        assert merge_headers({}, {}) == {}

    def test_inputs_are_not_mutated(self):
        custom = {"Authorization": "Bearer old"}
        auth = {"Authorization": "Bearer new"}

        merge_headers(custom, auth)

        assert custom == {"Authorization": "Bearer old"}
        assert auth == {"Authorization": "Bearer new"}

    def test_api_key_header_does_not_clobber_custom_header(self):
        auth_headers, _ = apply_auth(ApiKeyAuth(key="X-Foo", value="auth"), {}, URL)

        merged = merge_headers({"X-Foo": "user"}, auth_headers)

        assert merged == {"X-Foo": "user"}
