"""
Request builder: turns a request template and a variable mapping into a
resolved request.

Everything here is a pure function of its inputs. The template is never
modified and no network or database access happens; the caller chooses
the environment and passes its variables explicitly.
"""

import logging
from typing import Mapping

from ..schemas.execute import ResolvedRequest
from ..schemas.request import Body, JsonBody, RawTextBody, RequestTemplate
from .auth_injector import apply_auth, resolve_auth
from .header_merger import merge_headers
from .url_builder import build_url
from .variable_substitution import missing_in_value, resolve, resolve_value


logger = logging.getLogger(__name__)


def resolve_body(body: Body | None, variables: Mapping[str, str]) -> Body | None:
    """
    Resolve placeholders in a request body of either shape.

    Raw text is resolved as a single string; JSON bodies are resolved
    through every nested string while object keys stay untouched.
    """
    if isinstance(body, RawTextBody):
        return RawTextBody(content=resolve(body.content, variables))
    if isinstance(body, JsonBody):
        return JsonBody(content=resolve_value(body.content, variables))
    return None


def resolve_headers(template: RequestTemplate, variables: Mapping[str, str]) -> dict[str, str]:
    """
    Build the custom header map from enabled rows, resolving values only.

    Header names are case-insensitive, so a later row replaces an earlier
    one whose key differs only by case.
    """
    headers: dict[str, str] = {}
    for row in template.headers:
        if not row.enabled or not row.key.strip():
            continue
        for existing in [k for k in headers if k.lower() == row.key.lower()]:
            del headers[existing]
        headers[row.key] = resolve(row.value, variables)
    return headers


def build_request(template: RequestTemplate, variables: Mapping[str, str]) -> ResolvedRequest:
    """
    Build a resolved request from a template.

    Steps, in order:
      1. resolve variables in the URL
      2. merge enabled query parameters onto it
      3. resolve enabled header values
      4. resolve the body
      5. apply the auth descriptor to the URL and an empty header map
      6. merge custom headers with the auth headers

    Args:
        template: The request template
        variables: Mapping of lowercase variable names to values

    Returns:
        The immutable resolved request
    """
    url = resolve(template.url, variables)

    params = [
        row.model_copy(update={"value": resolve(row.value, variables)})
        for row in template.query_params
    ]
    url = build_url(url, params)

    custom_headers = resolve_headers(template, variables)
    body = resolve_body(template.body, variables)

    auth = resolve_auth(template.auth, variables)
    auth_headers, url = apply_auth(auth, {}, url)

    headers = merge_headers(custom_headers, auth_headers)

    logger.debug("Built %s %s with %d header(s)", template.method, url, len(headers))
    return ResolvedRequest(
        method=template.method,
        url=url,
        headers=headers,
        body=body,
    )


def collect_missing_variables(template: RequestTemplate, variables: Mapping[str, str]) -> list[str]:
    """
    List every variable the template references but ``variables`` lacks.

    Looks at the URL, enabled query parameters, enabled header values,
    the body and the auth fields, in that order. Names are de-duplicated
    in first-seen order.
    """
    sources: list = [template.url]
    sources.extend(row.value for row in template.query_params if row.enabled)
    sources.extend(row.value for row in template.headers if row.enabled and row.key.strip())
    if template.body is not None:
        sources.append(template.body.content)
    if template.auth is not None:
        sources.append(template.auth.model_dump())

    return missing_in_value(sources, variables)
