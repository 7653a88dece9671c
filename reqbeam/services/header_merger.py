"""
Merging of user-declared headers with headers issued by an auth scheme.
"""

from typing import Mapping


def _find_key(headers: Mapping[str, str], key: str) -> str | None:
    """Return the key in ``headers`` equal to ``key`` ignoring case."""
    lowered = key.lower()
    for existing in headers:
        if existing.lower() == lowered:
            return existing
    return None


def merge_headers(
    custom_headers: Mapping[str, str],
    auth_headers: Mapping[str, str]
) -> dict[str, str]:
    """
    Combine custom headers with auth headers.

    The Authorization header from the auth scheme always wins over one
    typed by the user. Every other auth header is only added when the
    user has not declared a header of the same name. Names are compared
    case-insensitively; the casing of the winning entry is kept.

    Example:
        >>> merge_headers({"authorization": "Bearer old"}, {"Authorization": "Bearer new"})
        {'Authorization': 'Bearer new'}
        >>> merge_headers({"X-Foo": "user"}, {"x-foo": "auth"})
        {'X-Foo': 'user'}
    """
    merged = dict(custom_headers)

    for key, value in auth_headers.items():
        if key.lower() == "authorization":
            for existing in [k for k in merged if k.lower() == "authorization"]:
                del merged[existing]
            merged[key] = value
        elif _find_key(merged, key) is None:
            merged[key] = value

    return merged
