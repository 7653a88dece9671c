"""
Query parameter merging for request URLs.

Parameters are set with last-write-wins semantics keyed by name. URLs
that cannot be parsed as absolute (relative paths, hosts that still hold
unresolved {{placeholders}}) are handled by plain string concatenation
so previews keep working while a template is being edited.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Union
from urllib.parse import SplitResult, quote, unquote_plus, urlsplit, urlunsplit

from ..schemas.request import KeyValueRow


logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides ASCII letters, digits and "-_.~"
_COMPONENT_SAFE = "!*'()"

# Characters allowed in the authority part of a URL (RFC 3986 plus "%")
_AUTHORITY_PATTERN = re.compile(r"[A-Za-z0-9\-._~%!$&'()*+,;=:@\[\]]+")


@dataclass(frozen=True)
class ParsedUrl:
    """An absolute URL split into its components."""
    parts: SplitResult


@dataclass(frozen=True)
class UnparseableUrl:
    """A URL that is not a well-formed absolute URL."""
    url: str
    reason: str


UrlParseResult = Union[ParsedUrl, UnparseableUrl]


def encode_component(value: str) -> str:
    """
    Percent-encode a query key or value like ``encodeURIComponent``.

    Lone surrogates are encoded as their UTF-8 byte sequence instead of
    raising.
    """
    return quote(value, safe=_COMPONENT_SAFE, errors="surrogatepass")


def parse_url(url: str) -> UrlParseResult:
    """
    Parse an absolute URL.

    Returns:
        ParsedUrl when the URL has a scheme and a valid authority,
        UnparseableUrl with a reason otherwise
    """
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a non-numeric port
    except ValueError as e:
        return UnparseableUrl(url=url, reason=str(e))

    if not parts.scheme or not parts.netloc:
        return UnparseableUrl(url=url, reason="URL is not absolute")
    if not _AUTHORITY_PATTERN.fullmatch(parts.netloc):
        return UnparseableUrl(url=url, reason=f"Invalid host: {parts.netloc}")

    return ParsedUrl(parts=parts)


def _merge_query(query: str, key: str, value: str) -> str:
    """Set ``key`` in a raw query string, replacing its first occurrence."""
    pair = f"{encode_component(key)}={encode_component(value)}"
    merged: list[str] = []
    replaced = False

    for segment in query.split("&") if query else []:
        if not segment:
            continue
        if unquote_plus(segment.split("=", 1)[0]) == key:
            if not replaced:
                merged.append(pair)
                replaced = True
            continue
        merged.append(segment)

    if not replaced:
        merged.append(pair)
    return "&".join(merged)


def set_query_param(url: str, key: str, value: str) -> str:
    """
    Set a single query parameter on a URL.

    Well-formed URLs get the parameter merged into their query string;
    anything else gets ``?key=value`` or ``&key=value`` appended.

    Example:
        >>> set_query_param("http://a/b?x=1", "x", "2")
        'http://a/b?x=2'
        >>> set_query_param("{{base}}/b", "q", "a b")
        '{{base}}/b?q=a%20b'
    """
    result = parse_url(url)

    if isinstance(result, ParsedUrl):
        query = _merge_query(result.parts.query, key, value)
        return urlunsplit(result.parts._replace(query=query))

    logger.debug("Appending query parameter to unparseable URL %r: %s", url, result.reason)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{encode_component(key)}={encode_component(value)}"


def build_url(base_url: str, params: Iterable[KeyValueRow]) -> str:
    """
    Merge enabled query parameter rows onto a base URL.

    Disabled rows and rows with a blank key are skipped; the remaining
    rows are applied in declared order.

    Args:
        base_url: URL that may already carry a query string
        params: Ordered query parameter rows

    Returns:
        The URL with the parameters merged in
    """
    url = base_url
    for param in params:
        if not param.enabled or not param.key.strip():
            continue
        url = set_query_param(url, param.key, param.value)
    return url
