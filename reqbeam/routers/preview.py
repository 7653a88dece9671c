"""
Preview API routes for live editor feedback.

These endpoints resolve templates and single text fields without sending
anything, so an editor can show the final URL, highlight known variables
and flag missing ones on every keystroke.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import ErrorResponse
from ..schemas.execute import (
    PlaceholderInfo,
    RequestPreview,
    RequestPreviewResponse,
    TextPreview,
    TextPreviewResponse,
    VariableStatus,
)
from ..services.environment_context import get_environment_context, resolve_in_context
from ..services.request_builder import collect_missing_variables
from ..services.variable_substitution import (
    extract_variables,
    missing_variables,
    resolve,
    validate_variables,
)


router = APIRouter(
    prefix="/api/preview",
    tags=["preview"],
    responses={404: {"model": ErrorResponse, "description": "Environment not found"}},
)


@router.post("/request", response_model=RequestPreviewResponse)
def preview_request(payload: RequestPreview, db: Session = Depends(get_db)):
    """
    Resolve a request template exactly as execution would, without sending it.

    Unparseable URLs (for example with an undefined {{host}}) are still
    previewed; query parameters are appended as text.
    """
    context = get_environment_context(db, payload.environment_id)

    return RequestPreviewResponse(
        request=resolve_in_context(payload.template, context),
        missing_variables=collect_missing_variables(payload.template, context.variables)
    )


@router.post("/text", response_model=TextPreviewResponse)
def preview_text(payload: TextPreview, db: Session = Depends(get_db)):
    """Resolve one text field and report every placeholder in it."""
    context = get_environment_context(db, payload.environment_id)
    variables = context.variables

    return TextPreviewResponse(
        resolved=resolve(payload.text, variables),
        placeholders=[
            PlaceholderInfo(text=p.text, name=p.name, start=p.start, end=p.end)
            for p in extract_variables(payload.text)
        ],
        variables=[VariableStatus(**status) for status in validate_variables(payload.text, variables)],
        missing_variables=missing_variables(payload.text, variables)
    )
