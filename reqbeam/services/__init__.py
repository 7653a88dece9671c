# Services package

from .variable_substitution import (
    Placeholder,
    extract_variables,
    resolve,
    resolve_value,
    missing_variables,
    normalize_variables,
    validate_variables,
)
from .url_builder import build_url, set_query_param, parse_url, ParsedUrl, UnparseableUrl
from .auth_injector import apply_auth, resolve_auth
from .header_merger import merge_headers
from .request_builder import build_request, collect_missing_variables, resolve_body
from .environment_context import EnvironmentContext, get_environment_context, resolve_in_context
from .http_executor import prepare_request, send_request
from .history_service import save_history

__all__ = [
    "Placeholder",
    "extract_variables",
    "resolve",
    "resolve_value",
    "missing_variables",
    "normalize_variables",
    "validate_variables",
    "build_url",
    "set_query_param",
    "parse_url",
    "ParsedUrl",
    "UnparseableUrl",
    "apply_auth",
    "resolve_auth",
    "merge_headers",
    "build_request",
    "collect_missing_variables",
    "resolve_body",
    "EnvironmentContext",
    "get_environment_context",
    "resolve_in_context",
    "prepare_request",
    "send_request",
    "save_history",
]
