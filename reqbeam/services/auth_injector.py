"""
Auth injector: turns an authorization descriptor into header and URL changes.

Incomplete descriptors (an API key without a name, basic auth without a
password, ...) are treated as no authorization rather than producing a
half-built credential.
"""

import base64
import logging
from typing import Mapping

from ..schemas.request import (
    ApiKeyAuth,
    AuthDescriptor,
    BasicAuth,
    BearerAuth,
    CustomHeaderAuth,
)
from .url_builder import set_query_param
from .variable_substitution import resolve_value


logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"


def resolve_auth(auth: AuthDescriptor | None, variables: Mapping[str, str]) -> AuthDescriptor | None:
    """Substitute placeholders in every string field of an auth descriptor."""
    if auth is None:
        return None
    return type(auth).model_validate(resolve_value(auth.model_dump(), variables))


def encode_basic_credentials(username: str, password: str) -> str:
    """Return the base64 token for ``username:password``."""
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def apply_auth(
    auth: AuthDescriptor | None,
    headers: Mapping[str, str],
    url: str
) -> tuple[dict[str, str], str]:
    """
    Apply an authorization scheme to a header map and URL.

    The input mapping is never modified; a new dict is returned. Only the
    header (or query parameter) owned by the scheme is added or replaced.

    Args:
        auth: The auth descriptor, or None for no authorization
        headers: Current headers
        url: Current URL

    Returns:
        Tuple of (headers, url) after applying the scheme
    """
    result_headers = dict(headers)
    result_url = url

    if isinstance(auth, ApiKeyAuth):
        if auth.key and auth.value:
            if auth.location == "query":
                result_url = set_query_param(result_url, auth.key, auth.value)
            else:
                result_headers[auth.key] = auth.value
        else:
            logger.debug("Skipping API key auth with empty key or value")

    elif isinstance(auth, BearerAuth):
        if auth.value:
            result_headers[AUTHORIZATION_HEADER] = f"Bearer {auth.value}"

    elif isinstance(auth, BasicAuth):
        if auth.username and auth.password:
            token = encode_basic_credentials(auth.username, auth.password)
            result_headers[AUTHORIZATION_HEADER] = f"Basic {token}"
        else:
            logger.debug("Skipping basic auth with empty username or password")

    elif isinstance(auth, CustomHeaderAuth):
        if auth.header_name and auth.header_value:
            result_headers[auth.header_name] = auth.header_value

    return result_headers, result_url
