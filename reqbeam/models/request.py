"""
Request model for storing HTTP request templates.

Header rows, query parameter rows, the body and the auth descriptor are
stored as JSON documents in the shape of their Pydantic schemas.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class Request(Base):
    """
    SQLAlchemy model for HTTP request templates.

    Attributes:
        id: Unique identifier for the request
        name: Human-readable name for the request
        method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS)
        url: Target URL, may contain variable placeholders like {{variable}}
        headers: List of {key, value, enabled} header rows
        query_params: List of {key, value, enabled} query parameter rows
        body: Tagged body document ({"type": "raw" | "json", "content": ...})
        auth: Tagged auth descriptor document, or None
        sort_order: Order within the request list
        created_at: Timestamp when the request was created
        updated_at: Timestamp when the request was last updated
    """
    __tablename__ = "requests"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    method: Mapped[str] = mapped_column(String(10))
    url: Mapped[str] = mapped_column(Text)
    headers: Mapped[list] = mapped_column(JSON, default=list)
    query_params: Mapped[list] = mapped_column(JSON, default=list)
    body: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    auth: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    sort_order: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
