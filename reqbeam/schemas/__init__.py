"""
Pydantic schemas package.

Exports all schemas for API request/response validation.
"""

from .request import (
    HttpMethod,
    KeyValueRow,
    HeaderRow,
    QueryParamRow,
    RawTextBody,
    JsonBody,
    Body,
    NoAuth,
    ApiKeyAuth,
    BearerAuth,
    BasicAuth,
    CustomHeaderAuth,
    AuthDescriptor,
    RequestTemplate,
    RequestBase,
    RequestCreate,
    RequestUpdate,
    RequestResponse,
)

from .environment import (
    VariableBase,
    VariableCreate,
    VariableUpdate,
    VariableResponse,
    EnvironmentBase,
    EnvironmentCreate,
    EnvironmentUpdate,
    EnvironmentResponse,
    EnvironmentWithVariables,
)

from .history import (
    HistoryResponse,
    HistoryListResponse,
)

from .execute import (
    ResolvedRequest,
    ExecuteOptions,
    ExecuteResponse,
    ExecuteErrorResponse,
    RequestPreview,
    RequestPreviewResponse,
    TextPreview,
    TextPreviewResponse,
    PlaceholderInfo,
    VariableStatus,
)

__all__ = [
    # Request template schemas
    "HttpMethod",
    "KeyValueRow",
    "HeaderRow",
    "QueryParamRow",
    "RawTextBody",
    "JsonBody",
    "Body",
    "NoAuth",
    "ApiKeyAuth",
    "BearerAuth",
    "BasicAuth",
    "CustomHeaderAuth",
    "AuthDescriptor",
    "RequestTemplate",
    "RequestBase",
    "RequestCreate",
    "RequestUpdate",
    "RequestResponse",
    # Environment schemas
    "VariableBase",
    "VariableCreate",
    "VariableUpdate",
    "VariableResponse",
    "EnvironmentBase",
    "EnvironmentCreate",
    "EnvironmentUpdate",
    "EnvironmentResponse",
    "EnvironmentWithVariables",
    # History schemas
    "HistoryResponse",
    "HistoryListResponse",
    # Execute and preview schemas
    "ResolvedRequest",
    "ExecuteOptions",
    "ExecuteResponse",
    "ExecuteErrorResponse",
    "RequestPreview",
    "RequestPreviewResponse",
    "TextPreview",
    "TextPreviewResponse",
    "PlaceholderInfo",
    "VariableStatus",
]
