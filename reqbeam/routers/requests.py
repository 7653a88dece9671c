"""
Request template API routes.

Provides CRUD operations for saved HTTP request templates.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import BaseModel

from ..database import get_db
from ..exceptions import ErrorResponse, ResourceNotFoundError
from ..models.request import Request
from ..schemas.request import RequestCreate, RequestUpdate, RequestResponse


router = APIRouter(
    prefix="/api/requests",
    tags=["requests"],
    responses={404: {"model": ErrorResponse, "description": "Request not found"}},
)

# Columns that cannot hold NULL; a null in an update payload leaves them unchanged
REQUIRED_FIELDS = ("name", "method", "url", "sort_order")

# Row lists are stored as empty lists rather than NULL
LIST_FIELDS = ("headers", "query_params")


class ReorderRequest(BaseModel):
    """Schema for reordering requests."""
    request_ids: list[int]


def get_request_or_404(db: Session, request_id: int) -> Request:
    """Fetch a saved request or raise ResourceNotFoundError."""
    db_request = db.query(Request).filter(Request.id == request_id).first()
    if db_request is None:
        raise ResourceNotFoundError("Request", request_id)
    return db_request


@router.post("/reorder", status_code=status.HTTP_200_OK)
def reorder_requests(reorder_data: ReorderRequest, db: Session = Depends(get_db)):
    """
    Reorder requests by updating their sort_order.

    Unknown IDs are ignored.
    """
    for index, request_id in enumerate(reorder_data.request_ids):
        db_request = db.query(Request).filter(Request.id == request_id).first()
        if db_request:
            db_request.sort_order = index
    db.commit()
    return {"message": "Requests reordered successfully"}


@router.post("", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
def create_request(request_data: RequestCreate, db: Session = Depends(get_db)):
    """
    Save a new request template.

    Args:
        request_data: Request template data
        db: Database session

    Returns:
        The created request with assigned ID and timestamps
    """
    data = request_data.model_dump(mode="json")
    db_request = Request(
        name=data["name"],
        method=data["method"],
        url=data["url"],
        headers=data["headers"],
        query_params=data["query_params"],
        body=data["body"],
        auth=data["auth"],
    )
    db.add(db_request)
    db.commit()
    db.refresh(db_request)
    return db_request


@router.get("", response_model=list[RequestResponse])
def list_requests(db: Session = Depends(get_db)):
    """List all saved request templates in display order."""
    return db.query(Request).order_by(Request.sort_order, Request.id).all()


@router.get("/{request_id}", response_model=RequestResponse)
def get_request(request_id: int, db: Session = Depends(get_db)):
    """
    Get a single request template by ID.

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    return get_request_or_404(db, request_id)


@router.put("/{request_id}", response_model=RequestResponse)
def update_request(
    request_id: int,
    request_data: RequestUpdate,
    db: Session = Depends(get_db)
):
    """
    Update an existing request template.

    Only the fields present in the payload are changed; sending
    ``"auth": null`` or ``"body": null`` clears them.

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    db_request = get_request_or_404(db, request_id)

    update_data = request_data.model_dump(mode="json", exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        if value is None and field in LIST_FIELDS:
            value = []
        setattr(db_request, field, value)

    db.commit()
    db.refresh(db_request)
    return db_request


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(request_id: int, db: Session = Depends(get_db)):
    """
    Delete a request template by ID.

    History records keep existing with their request_id cleared.

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    db_request = get_request_or_404(db, request_id)
    db.delete(db_request)
    db.commit()
    return None
