"""
Pydantic schemas for request resolution and execution.

Defines the resolved request produced by the request builder, the
execution result schemas and the preview schemas used for live editor
feedback.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from .request import Body, HttpMethod, RequestTemplate


class ResolvedRequest(BaseModel):
    """
    A fully substituted, transport-ready request.

    Produced by ``build_request``; immutable once built.
    """
    method: HttpMethod
    url: str
    headers: dict[str, str] = {}
    body: Body | None = None

    model_config = ConfigDict(frozen=True)


class ExecuteOptions(BaseModel):
    """Schema for execution options."""
    environment_id: int | None = None


class ExecuteResponse(BaseModel):
    """
    Schema for request execution response.

    Contains all response details including status, headers, body,
    timing information, and any warnings from variable substitution.
    """
    status_code: int
    status_text: str
    headers: dict[str, str]
    body: str | None
    body_json: Any | None = None
    response_time_ms: int
    response_size: int
    request: ResolvedRequest | None = None
    warnings: list[str] = []


class ExecuteErrorResponse(BaseModel):
    """Schema for execution error response."""
    error: str
    error_type: Literal["network_error", "timeout", "invalid_url", "unknown"]
    details: str | None = None


# Preview schemas

class RequestPreview(BaseModel):
    """Schema for previewing a template without sending it."""
    template: RequestTemplate
    environment_id: int | None = None


class RequestPreviewResponse(BaseModel):
    """The request as it would be sent, plus the unresolved variables."""
    request: ResolvedRequest
    missing_variables: list[str] = []


class TextPreview(BaseModel):
    """Schema for resolving a single editor field."""
    text: str
    environment_id: int | None = None


class PlaceholderInfo(BaseModel):
    """A placeholder found in a text."""
    text: str
    name: str
    start: int
    end: int


class VariableStatus(BaseModel):
    """Whether a referenced variable is defined, and its value if so."""
    variable: str
    exists: bool
    value: str | None = None


class TextPreviewResponse(BaseModel):
    """Resolution result for a single text field."""
    resolved: str
    placeholders: list[PlaceholderInfo] = []
    variables: list[VariableStatus] = []
    missing_variables: list[str] = []
