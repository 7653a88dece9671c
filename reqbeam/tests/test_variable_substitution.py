"""
Tests for the variable substitution service.

Covers placeholder extraction, single-pass resolution with case-insensitive
lookup, missing-variable reporting and deep resolution of nested values.
"""

import pytest
from hypothesis import given, strategies as st, settings

from reqbeam.services.variable_substitution import (
    extract_variables,
    get_variable_value,
    has_variable,
    missing_in_value,
    missing_variables,
    normalize_variables,
    resolve,
    resolve_value,
    validate_variables,
)


# Strategy for generating valid variable names (alphanumeric + underscore)
variable_name_strategy = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"),
    min_size=1,
    max_size=20,
)

# Values and surrounding text never contain braces, so they cannot form new placeholders
plain_text_strategy = st.text(max_size=30).filter(lambda s: "{" not in s and "}" not in s)


class TestExtractVariables:
    """Placeholder extraction."""

    @given(var_names=st.lists(variable_name_strategy, min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_extracts_all_placeholders_in_order(self, var_names: list[str]):
        """
        Property: Every placeholder is extracted, left to right, with a lowercase name.
        """
        template = " ".join("{{" + name + "}}" for name in var_names)

        extracted = extract_variables(template)

        assert [p.name for p in extracted] == [name.lower() for name in var_names]

    @given(text=st.text(max_size=100).filter(lambda s: "{{" not in s))
    @settings(max_examples=100)
    def test_returns_empty_for_no_placeholders(self, text: str):
        """
        Property: Text without placeholders yields no matches.
        """
        assert extract_variables(text) == []

    @given(var_name=variable_name_strategy, prefix=plain_text_strategy, suffix=plain_text_strategy)
    @settings(max_examples=100)
    def test_span_points_at_original_text(self, var_name: str, prefix: str, suffix: str):
        """
        Property: start/end offsets slice out the exact matched text.
        """
        template = prefix + "{{ " + var_name + " }}" + suffix

        [placeholder] = extract_variables(template)

        assert placeholder.start == len(prefix)
        assert template[placeholder.start:placeholder.end] == placeholder.text
        assert placeholder.text == "{{ " + var_name + " }}"

    def test_empty_string(self):
        assert extract_variables("") == []

    def test_whitespace_inside_braces_is_allowed(self):
        extracted = extract_variables("{{host}} {{  Port\t}}")
        assert [p.name for p in extracted] == ["host", "port"]
        assert extracted[1].text == "{{  Port\t}}"

    @pytest.mark.parametrize("text", [
        "{{}}",
        "{{ }}",
        "{{a-b}}",
        "{{a.b}}",
        "{{a b}}",
        "{host}",
        "{{host}",
        "{{host",
        "host}}",
    ])
    def test_non_conforming_sequences_are_not_matched(self, text: str):
        assert extract_variables(text) == []


class TestResolve:
    """Single-string resolution."""

    def test_case_insensitive_lookup(self):
        assert resolve("{{Foo}}", {"foo": "x"}) == "x"

    def test_replaces_placeholder_with_whitespace(self):
        assert resolve("{{ baseUrl }}/users", {"baseurl": "https://api.dev.com"}) == "https://api.dev.com/users"

    def test_multiple_variables(self):
        variables = {"baseurl": "https://api.dev.com", "token": "123xyz"}
        result = resolve("{{baseUrl}}/users?token={{token}}", variables)
        assert result == "https://api.dev.com/users?token=123xyz"

    def test_unknown_variable_is_left_verbatim(self):
        assert resolve("{{ Unknown }}/users", {"other": "x"}) == "{{ Unknown }}/users"

    def test_empty_string(self):
        assert resolve("", {"a": "b"}) == ""

    def test_empty_value_is_substituted(self):
        assert resolve("a{{x}}b", {"x": ""}) == "ab"

    def test_substituted_values_are_not_rescanned(self):
        variables = {"a": "{{b}}", "b": "boom"}
        assert resolve("{{a}}", variables) == "{{b}}"

    def test_self_referencing_value_does_not_expand(self):
        assert resolve("{{a}}", {"a": "{{a}}{{a}}"}) == "{{a}}{{a}}"

    @given(
        var_name=variable_name_strategy,
        var_value=plain_text_strategy,
        prefix=plain_text_strategy,
        suffix=plain_text_strategy
    )
    @settings(max_examples=100)
    def test_substitution_preserves_surrounding_text(
        self, var_name: str, var_value: str, prefix: str, suffix: str
    ):
        """
        Property: Substitution replaces only the placeholder, preserving surrounding text.
        """
        template = prefix + "{{" + var_name + "}}" + suffix

        result = resolve(template, {var_name.lower(): var_value})

        assert result == prefix + var_value + suffix

    @given(
        variables=st.dictionaries(
            keys=variable_name_strategy.map(str.lower),
            values=plain_text_strategy,
            min_size=1,
            max_size=5
        ),
        pieces=st.lists(plain_text_strategy, min_size=1, max_size=6)
    )
    @settings(max_examples=100)
    def test_full_substitution_leaves_no_placeholders(
        self, variables: dict[str, str], pieces: list[str]
    ):
        """
        Property: When every referenced name is defined, nothing is left to extract.
        """
        names = list(variables)
        template = "".join(
            piece + "{{" + names[i % len(names)].upper() + "}}"
            for i, piece in enumerate(pieces)
        )

        result = resolve(template, variables)

        assert extract_variables(result) == []
        assert missing_variables(template, variables) == []

    @given(
        defined=st.dictionaries(
            keys=variable_name_strategy.map(str.lower),
            values=plain_text_strategy,
            max_size=3
        ),
        undefined=st.lists(variable_name_strategy, min_size=1, max_size=3),
        filler=plain_text_strategy
    )
    @settings(max_examples=100)
    def test_resolution_is_stable_for_unresolved_placeholders(
        self, defined: dict[str, str], undefined: list[str], filler: str
    ):
        """
        Property: Resolving twice gives the same result as resolving once.
        """
        undefined = [name for name in undefined if name.lower() not in defined]
        names = list(defined) + undefined
        template = filler.join("{{" + name + "}}" for name in names) or filler

        once = resolve(template, defined)

        assert resolve(once, defined) == once
        for name in undefined:
            assert "{{" + name + "}}" in once


class TestMissingVariables:
    """Reporting of unresolved names."""

    def test_deduplicated_in_first_seen_order(self):
        assert missing_variables("{{b}} {{A}} {{b}} {{c}} {{a}}", {"c": "1"}) == ["b", "a"]

    def test_nothing_missing(self):
        assert missing_variables("{{host}}/x", {"host": "h"}) == []

    def test_empty_text(self):
        assert missing_variables("", {}) == []

    @given(undefined_vars=st.lists(variable_name_strategy, min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_all_undefined_variables_reported(self, undefined_vars: list[str]):
        """
        Property: All undefined variables are reported, each once.
        """
        template = " ".join("{{" + name + "}}" for name in undefined_vars)

        missing = missing_variables(template, {})

        assert set(missing) == {name.lower() for name in undefined_vars}
        assert len(missing) == len(set(missing))

    def test_missing_in_nested_value(self):
        value = {"a": "{{x}}", "b": ["{{y}}", {"c": "{{x}} {{z}}"}], "d": 3}
        assert missing_in_value(value, {"y": "1"}) == ["x", "z"]


class TestResolveValue:
    """Deep resolution of nested values."""

    def test_nested_body(self):
        body = {"a": "{{x}}", "b": ["{{y}}", 3], "c": {"d": "{{x}}"}}

        result = resolve_value(body, {"x": "1", "y": "2"})

        assert result == {"a": "1", "b": ["2", 3], "c": {"d": "1"}}

    def test_keys_are_not_resolved(self):
        result = resolve_value({"{{x}}": "{{x}}"}, {"x": "1"})
        assert result == {"{{x}}": "1"}

    @pytest.mark.parametrize("value", [None, 42, 3.5, True, False])
    def test_scalars_pass_through(self, value):
        assert resolve_value(value, {"x": "1"}) is value

    def test_input_is_not_mutated(self):
        body = {"a": ["{{x}}"], "b": {"c": "{{x}}"}}

        resolve_value(body, {"x": "1"})

        assert body == {"a": ["{{x}}"], "b": {"c": "{{x}}"}}

    def test_deeply_nested_lists(self):
        assert resolve_value([[["{{x}}"]]], {"x": "deep"}) == [[["deep"]]]


class TestVariableHelpers:
    """Lookup helpers used by the preview routes."""

    def test_normalize_variables_lowercases_keys(self):
        assert normalize_variables({"Host": "a", "TOKEN": "b"}) == {"host": "a", "token": "b"}

    def test_has_variable_ignores_case(self):
        assert has_variable("HOST", {"host": "a"})
        assert not has_variable("port", {"host": "a"})

    def test_get_variable_value(self):
        assert get_variable_value("Host", {"host": "a"}) == "a"
        assert get_variable_value("port", {"host": "a"}) is None

    def test_validate_variables(self):
        result = validate_variables("{{Host}}:{{port}}/{{host}}", {"host": "example.com"})

        assert result == [
            {"variable": "host", "exists": True, "value": "example.com"},
            {"variable": "port", "exists": False, "value": None},
        ]
