"""
Variable substitution service for replacing {{variable}} placeholders.

This service handles extraction and substitution of variable placeholders
in request templates (URL, headers, query params, body, auth). Lookup is
case-insensitive: placeholder names are lowercased and matched against a
mapping whose keys are already lowercase (see ``normalize_variables``).
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping


# Pattern to match {{variable_name}} placeholders, whitespace inside the braces allowed
VARIABLE_PATTERN = re.compile(r'\{\{\s*([a-zA-Z0-9_]+)\s*\}\}')


@dataclass(frozen=True)
class Placeholder:
    """
    A single placeholder occurrence in a string.

    Attributes:
        text: The full matched text, e.g. ``{{ Host }}``
        name: The normalized (lowercase) variable name, e.g. ``host``
        start: Offset of the first character of ``text``
        end: Offset one past the last character of ``text``
    """
    text: str
    name: str
    start: int
    end: int


def normalize_variables(variables: Mapping[str, str]) -> dict[str, str]:
    """
    Build a lookup mapping with lowercase keys.

    When two keys differ only by case the later one wins.

    Example:
        >>> normalize_variables({"Host": "a", "TOKEN": "b"})
        {'host': 'a', 'token': 'b'}
    """
    return {key.lower(): value for key, value in variables.items()}


def extract_variables(template: str) -> list[Placeholder]:
    """
    Extract all placeholders from a template string.

    Args:
        template: String containing {{variable}} placeholders

    Returns:
        Placeholders in left-to-right order of appearance

    Example:
        >>> [p.name for p in extract_variables("Hello {{Name}}, id {{ id }}")]
        ['name', 'id']
    """
    if not template:
        return []

    return [
        Placeholder(
            text=match.group(0),
            name=match.group(1).lower(),
            start=match.start(),
            end=match.end(),
        )
        for match in VARIABLE_PATTERN.finditer(template)
    ]


def resolve(template: str, variables: Mapping[str, str]) -> str:
    """
    Replace variable placeholders in a template with their values.

    Substituted values are not scanned again, so a value that itself
    looks like a placeholder is inserted literally. Placeholders whose
    name is not in ``variables`` are kept as they are.

    Args:
        template: String containing {{variable}} placeholders
        variables: Mapping of lowercase variable names to values

    Returns:
        The substituted string

    Example:
        >>> resolve("Hello {{Name}}", {"name": "World"})
        'Hello World'
        >>> resolve("Hello {{name}}", {})
        'Hello {{name}}'
    """
    if not template or not variables:
        return template

    def replace_match(match: re.Match) -> str:
        var_name = match.group(1).lower()
        if var_name in variables:
            return variables[var_name]
        return match.group(0)  # Keep original placeholder

    return VARIABLE_PATTERN.sub(replace_match, template)


def missing_variables(template: str, variables: Mapping[str, str]) -> list[str]:
    """
    List the variable names in a template that ``variables`` cannot resolve.

    Names are lowercase, de-duplicated and in first-seen order.

    Example:
        >>> missing_variables("{{a}} {{B}} {{a}} {{c}}", {"c": "1"})
        ['a', 'b']
    """
    missing: list[str] = []
    for placeholder in extract_variables(template):
        if placeholder.name not in variables and placeholder.name not in missing:
            missing.append(placeholder.name)
    return missing


def resolve_value(value: Any, variables: Mapping[str, str]) -> Any:
    """
    Resolve placeholders through an arbitrarily nested value.

    Strings are resolved, lists and tuples element by element, mappings
    value by value with their keys left untouched. Numbers, booleans,
    None and any other type pass through unchanged.

    Example:
        >>> resolve_value({"a": "{{x}}", "b": ["{{y}}", 3]}, {"x": "1", "y": "2"})
        {'a': '1', 'b': ['2', 3]}
    """
    if isinstance(value, str):
        return resolve(value, variables)
    if isinstance(value, (list, tuple)):
        return [resolve_value(item, variables) for item in value]
    if isinstance(value, Mapping):
        return {key: resolve_value(item, variables) for key, item in value.items()}
    return value


def missing_in_value(value: Any, variables: Mapping[str, str]) -> list[str]:
    """Deep counterpart of ``missing_variables`` for nested values."""
    if isinstance(value, str):
        return missing_variables(value, variables)

    if isinstance(value, Mapping):
        children = value.values()
    elif isinstance(value, (list, tuple)):
        children = value
    else:
        return []

    missing: list[str] = []
    for child in children:
        for name in missing_in_value(child, variables):
            if name not in missing:
                missing.append(name)
    return missing


def has_variable(name: str, variables: Mapping[str, str]) -> bool:
    """Check whether a variable exists, ignoring case."""
    return name.lower() in variables


def get_variable_value(name: str, variables: Mapping[str, str]) -> str | None:
    """Return the value of a variable, ignoring case, or None."""
    return variables.get(name.lower())


def validate_variables(template: str, variables: Mapping[str, str]) -> list[dict[str, Any]]:
    """
    Report the status of every distinct variable referenced in a template.

    Returns:
        One ``{"variable", "exists", "value"}`` entry per name in
        first-seen order; ``value`` is None for missing variables.
    """
    results: list[dict[str, Any]] = []
    seen: set[str] = set()

    for placeholder in extract_variables(template):
        if placeholder.name in seen:
            continue
        seen.add(placeholder.name)
        exists = placeholder.name in variables
        results.append({
            "variable": placeholder.name,
            "exists": exists,
            "value": variables[placeholder.name] if exists else None,
        })

    return results
