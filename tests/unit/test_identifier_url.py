"""Tests for credential_resolver.did.url: identifier and DID URL parsing."""
from __future__ import annotations

import pytest

from credential_resolver.did.url import Identifier, parse_identifier
from credential_resolver.errors import MalformedIdentifierError


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestIdentifierParse:
    def test_bare_did(self) -> None:
        identifier = Identifier.parse("did:example:123456789abcdefghi")
        assert identifier.scheme == "did"
        assert identifier.method == "example"
        assert identifier.method_specific_id == "123456789abcdefghi"
        assert identifier.params == ()
        assert identifier.path is None
        assert identifier.query is None
        assert identifier.fragment is None

    def test_colon_separated_method_specific_id(self) -> None:
        identifier = Identifier.parse("did:web:example.com:user:alice")
        assert identifier.method == "web"
        assert identifier.method_specific_id == "example.com:user:alice"

    def test_percent_encoded_port(self) -> None:
        identifier = Identifier.parse("did:web:example.com%3A8443")
        assert identifier.method_specific_id == "example.com%3A8443"

    def test_all_url_components(self) -> None:
        text = "did:example:123;service=agent;version-id=4/path/to?query=1#key-1"
        identifier = Identifier.parse(text)
        assert identifier.params == (("service", "agent"), ("version-id", "4"))
        assert identifier.path == "/path/to"
        assert identifier.query == "query=1"
        assert identifier.fragment == "key-1"
        assert identifier.did == "did:example:123"

    def test_param_lookup(self) -> None:
        identifier = Identifier.parse("did:example:123;service=agent")
        assert identifier.param("service") == "agent"
        assert identifier.param("missing") is None

    def test_fragment_only(self) -> None:
        identifier = Identifier.parse("did:key:z6MkabcDEF#z6MkabcDEF")
        assert identifier.fragment == "z6MkabcDEF"
        assert identifier.is_url is True

    def test_non_did_scheme_is_accepted(self) -> None:
        identifier = Identifier.parse("accumulator:dock:0xabcdef")
        assert identifier.scheme == "accumulator"
        assert identifier.is_did is False

    def test_bare_did_is_not_url(self) -> None:
        assert Identifier.parse("did:example:abc").is_url is False


class TestIdentifierRoundTrip:
    @pytest.mark.parametrize(
        "text",
        [
            "did:example:abc",
            "did:web:example.com:user:alice",
            "did:example:abc;service=files",
            "did:example:abc/some/path",
            "did:example:abc?",
            "did:example:abc?versionTime=2021-05-10T17:00:00Z",
            "did:example:abc#",
            "did:example:abc#key-1",
            "did:example:abc;a=1;b=2/path?q=1#frag",
        ],
    )
    def test_str_reproduces_input(self, text: str) -> None:
        assert str(Identifier.parse(text)) == text

    def test_empty_query_distinct_from_absent(self) -> None:
        assert Identifier.parse("did:example:abc?").query == ""
        assert Identifier.parse("did:example:abc").query is None


class TestIdentifierRejects:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "did:",
            "did:example",
            "did:example:",
            "did::abc",
            "example:abc",
            "did:exa mple:abc",
            "DID:example:abc",
            "did:key:abc\n",
            "did:example:abc\n#frag",
        ],
    )
    def test_malformed_raises(self, text: str) -> None:
        with pytest.raises(MalformedIdentifierError):
            Identifier.parse(text)

    def test_non_string_raises(self) -> None:
        with pytest.raises(MalformedIdentifierError):
            Identifier.parse(None)  # type: ignore[arg-type]

    def test_error_carries_identifier(self) -> None:
        with pytest.raises(MalformedIdentifierError) as exc_info:
            Identifier.parse("did:")
        assert exc_info.value.identifier == "did:"


class TestParseIdentifier:
    def test_passes_through_parsed_value(self) -> None:
        identifier = Identifier.parse("did:example:abc")
        assert parse_identifier(identifier) is identifier

    def test_parses_string(self) -> None:
        assert parse_identifier("did:example:abc").method == "example"
