"""
HTTP execution service for sending resolved requests.

Resolution happens first (``prepare_request``); sending takes a
ResolvedRequest and nothing else, using httpx. Transport failures are
returned as ExecuteErrorResponse values instead of being raised.
"""

import json
import logging
import time
from typing import Any

import httpx

from ..schemas.execute import ExecuteErrorResponse, ExecuteResponse, ResolvedRequest
from ..schemas.request import JsonBody, RawTextBody, RequestTemplate
from .environment_context import EnvironmentContext, resolve_in_context
from .request_builder import collect_missing_variables
from .url_builder import UnparseableUrl, parse_url


logger = logging.getLogger(__name__)

# Default timeout in seconds
DEFAULT_TIMEOUT = 30.0


def prepare_request(
    template: RequestTemplate,
    context: EnvironmentContext
) -> tuple[ResolvedRequest, list[str]]:
    """
    Resolve a template against an environment, with the send-time default headers.

    Args:
        template: The request template
        context: The selected environment

    Returns:
        Tuple of (resolved request, list of warning messages)
    """
    resolved = with_default_headers(resolve_in_context(template, context))

    missing = collect_missing_variables(template, context.variables)
    if missing:
        logger.warning(
            "Unresolved variables %s in environment %r; sending placeholders as-is",
            ", ".join(missing), context.name
        )
    warnings = [f"Undefined variable: {{{{{name}}}}}" for name in missing]

    return resolved, warnings


def serialize_body(request: ResolvedRequest) -> str | None:
    """Return the body as the text that goes on the wire."""
    if isinstance(request.body, RawTextBody):
        return request.body.content
    if isinstance(request.body, JsonBody):
        return json.dumps(request.body.content)
    return None


def with_default_headers(request: ResolvedRequest) -> ResolvedRequest:
    """
    Return the request with the headers added at send time.

    A JSON body gets ``Content-Type: application/json`` unless a
    Content-Type header was set explicitly.
    """
    if isinstance(request.body, JsonBody) and not any(
        key.lower() == "content-type" for key in request.headers
    ):
        headers = {**request.headers, "Content-Type": "application/json"}
        return request.model_copy(update={"headers": headers})
    return request


def parse_json_body(body: str | None, content_type: str | None) -> Any | None:
    """
    Try to parse response body as JSON if content type indicates JSON.

    Args:
        body: Response body string
        content_type: Content-Type header value

    Returns:
        Parsed JSON object or None if not JSON or parsing fails
    """
    if not body or not content_type:
        return None

    if "application/json" in content_type.lower():
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            return None

    return None


async def send_request(
    request: ResolvedRequest,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
    warnings: list[str] | None = None
) -> ExecuteResponse | ExecuteErrorResponse:
    """
    Send a resolved request and capture the response.

    Args:
        request: The resolved request to send
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used by tests to avoid the network
        warnings: Warnings to attach to a successful response

    Returns:
        ExecuteResponse on success, ExecuteErrorResponse on failure
    """
    parsed = parse_url(request.url)
    if isinstance(parsed, UnparseableUrl):
        logger.warning("Refusing to send %s %s: %s", request.method, request.url, parsed.reason)
        return ExecuteErrorResponse(
            error="Invalid URL",
            error_type="invalid_url",
            details=parsed.reason
        )

    headers = dict(with_default_headers(request).headers)
    content = serialize_body(request)

    logger.info("Sending %s %s", request.method, request.url)

    try:
        start_time = time.perf_counter()

        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(
                method=request.method,
                url=request.url,
                headers=headers,
                content=content
            )

        end_time = time.perf_counter()
        response_time_ms = int((end_time - start_time) * 1000)

        response_body = response.text
        response_size = len(response.content)
        response_headers = dict(response.headers)

        content_type = response_headers.get("content-type", "")
        body_json = parse_json_body(response_body, content_type)

        logger.info(
            "%s %s -> %d in %d ms", request.method, request.url,
            response.status_code, response_time_ms
        )

        return ExecuteResponse(
            status_code=response.status_code,
            status_text=response.reason_phrase or "",
            headers=response_headers,
            body=response_body,
            body_json=body_json,
            response_time_ms=response_time_ms,
            response_size=response_size,
            request=request,
            warnings=warnings or []
        )

    except httpx.TimeoutException:
        logger.warning("Request to %s timed out after %s seconds", request.url, timeout)
        return ExecuteErrorResponse(
            error="Request timed out",
            error_type="timeout",
            details=f"Request exceeded {timeout} seconds timeout"
        )
    except httpx.ConnectError as e:
        logger.warning("Failed to connect to %s: %s", request.url, e)
        return ExecuteErrorResponse(
            error="Failed to connect to server",
            error_type="network_error",
            details=str(e)
        )
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        logger.warning("Invalid URL %r: %s", request.url, e)
        return ExecuteErrorResponse(
            error="Invalid URL",
            error_type="invalid_url",
            details=str(e)
        )
    except httpx.HTTPError as e:
        logger.warning("HTTP error for %s: %s", request.url, e)
        return ExecuteErrorResponse(
            error="HTTP error occurred",
            error_type="network_error",
            details=str(e)
        )
    except Exception as e:
        logger.exception("Unexpected error sending %s %s", request.method, request.url)
        return ExecuteErrorResponse(
            error="An unexpected error occurred",
            error_type="unknown",
            details=str(e)
        )
