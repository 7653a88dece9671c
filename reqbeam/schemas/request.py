"""
Pydantic schemas for HTTP request templates.

A template is the unresolved request definition as authored by the user:
URL, header rows, query parameter rows, an optional body and an optional
authorization descriptor. Any string in it may contain {{variable}}
placeholders.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# HTTP methods supported by the system
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


class KeyValueRow(BaseModel):
    """A header or query parameter row as entered in the editor."""
    key: str = ""
    value: str = ""
    enabled: bool = True


class HeaderRow(KeyValueRow):
    """A request header row."""


class QueryParamRow(KeyValueRow):
    """A query parameter row."""


# Body variants

class RawTextBody(BaseModel):
    """A body sent as plain text."""
    type: Literal["raw"] = "raw"
    content: str = ""


class JsonBody(BaseModel):
    """A structured JSON body; placeholders may appear at any leaf."""
    type: Literal["json"] = "json"
    content: Any = None


Body = Annotated[Union[RawTextBody, JsonBody], Field(discriminator="type")]


# Authorization variants

class NoAuth(BaseModel):
    """No authorization is added to the request."""
    type: Literal["none"] = "none"


class ApiKeyAuth(BaseModel):
    """API key sent either as a header or as a query parameter."""
    type: Literal["apikey"] = "apikey"
    key: str = ""
    value: str = ""
    location: Literal["header", "query"] = "header"


class BearerAuth(BaseModel):
    """Bearer token sent in the Authorization header."""
    type: Literal["bearer"] = "bearer"
    value: str = ""


class BasicAuth(BaseModel):
    """
    HTTP basic credentials.

    The password is stored in plain text and base64-encoded only when
    the request is assembled.
    """
    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


class CustomHeaderAuth(BaseModel):
    """An arbitrary header carrying the credential."""
    type: Literal["header"] = "header"
    header_name: str = ""
    header_value: str = ""


AuthDescriptor = Annotated[
    Union[NoAuth, ApiKeyAuth, BearerAuth, BasicAuth, CustomHeaderAuth],
    Field(discriminator="type"),
]


class RequestTemplate(BaseModel):
    """The unresolved request definition consumed by the request builder."""
    method: HttpMethod
    url: str
    headers: list[HeaderRow] = []
    query_params: list[QueryParamRow] = []
    body: Body | None = None
    auth: AuthDescriptor | None = None


class RequestBase(RequestTemplate):
    """Base schema with common saved-request fields."""
    name: str


class RequestCreate(RequestBase):
    """Schema for creating a new request."""
    pass


class RequestUpdate(BaseModel):
    """Schema for updating an existing request. All fields are optional."""
    name: str | None = None
    method: HttpMethod | None = None
    url: str | None = None
    headers: list[HeaderRow] | None = None
    query_params: list[QueryParamRow] | None = None
    body: Body | None = None
    auth: AuthDescriptor | None = None
    sort_order: int | None = None


class RequestResponse(RequestBase):
    """Schema for request response with all fields including system-generated ones."""
    id: int
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    def to_template(self) -> RequestTemplate:
        """Strip the storage fields, keeping only what the builder needs."""
        return RequestTemplate.model_validate(
            self.model_dump(include=set(RequestTemplate.model_fields))
        )
