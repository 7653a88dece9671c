"""
History service for saving request execution records.
"""

from sqlalchemy.orm import Session

from ..models.history import History
from ..schemas.execute import ExecuteResponse, ResolvedRequest
from .http_executor import serialize_body


def save_history(
    db: Session,
    request: ResolvedRequest,
    response: ExecuteResponse,
    request_id: int | None = None,
    environment_name: str | None = None
) -> History:
    """
    Save a request execution to history.

    The resolved request is stored, so the record shows the URL, headers
    and body exactly as they were sent.

    Args:
        db: Database session
        request: The resolved request that was sent
        response: The response received
        request_id: Optional ID of the saved request template
        environment_name: Name of the environment used for substitution

    Returns:
        The created history record
    """
    history = History(
        request_id=request_id,
        environment_name=environment_name,
        method=request.method,
        url=request.url,
        request_headers=dict(request.headers),
        request_body=serialize_body(request),
        status_code=response.status_code,
        status_text=response.status_text,
        response_headers=response.headers,
        response_body=response.body,
        response_time_ms=response.response_time_ms,
        response_size=response.response_size
    )
    db.add(history)
    db.commit()
    db.refresh(history)
    return history
