"""
History record API routes.

History records are created by the execute routes; these endpoints list,
inspect and delete them.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import ErrorResponse, ResourceNotFoundError
from ..models.history import History
from ..schemas.history import HistoryResponse, HistoryListResponse


router = APIRouter(
    prefix="/api/history",
    tags=["history"],
    responses={404: {"model": ErrorResponse, "description": "History record not found"}},
)


def get_history_or_404(db: Session, history_id: int) -> History:
    """Fetch a history record or raise ResourceNotFoundError."""
    db_history = db.query(History).filter(History.id == history_id).first()
    if db_history is None:
        raise ResourceNotFoundError("History record", history_id)
    return db_history


@router.get("", response_model=HistoryListResponse)
def list_history(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    request_id: int | None = None,
    db: Session = Depends(get_db)
):
    """
    Get history records, newest first.

    Args:
        skip: Number of records to skip (for pagination)
        limit: Maximum number of records to return
        request_id: Only return executions of this saved request
        db: Database session

    Returns:
        HistoryListResponse with items and total count
    """
    query = db.query(History)
    if request_id is not None:
        query = query.filter(History.request_id == request_id)

    total = query.count()
    items = (
        query
        .order_by(History.executed_at.desc(), History.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return HistoryListResponse(items=items, total=total)


@router.get("/{history_id}", response_model=HistoryResponse)
def get_history(history_id: int, db: Session = Depends(get_db)):
    """Get a single history record by ID."""
    return get_history_or_404(db, history_id)


@router.delete("/{history_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_history(history_id: int, db: Session = Depends(get_db)):
    """Delete a single history record by ID."""
    db_history = get_history_or_404(db, history_id)
    db.delete(db_history)
    db.commit()
    return None


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_all_history(db: Session = Depends(get_db)):
    """Clear all history records."""
    db.query(History).delete()
    db.commit()
    return None
