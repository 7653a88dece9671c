"""
Request execution API routes.

Resolves a saved or ad-hoc request template against an environment,
sends the result over HTTP and records the execution in history.
"""

import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..database import get_db
from ..exceptions import APIException, BadRequestError, ErrorResponse, NetworkError, TimeoutError
from ..schemas.execute import ExecuteErrorResponse, ExecuteOptions, ExecuteResponse
from ..schemas.request import RequestResponse, RequestTemplate
from ..services.environment_context import get_environment_context
from ..services.history_service import save_history
from ..services.http_executor import prepare_request, send_request
from .requests import get_request_or_404


router = APIRouter(prefix="/api/execute", tags=["execute"])

EXECUTE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid URL"},
    404: {"model": ErrorResponse, "description": "Request or environment not found"},
    502: {"model": ErrorResponse, "description": "Network error"},
    504: {"model": ErrorResponse, "description": "Request timeout"},
}


def get_transport() -> httpx.AsyncBaseTransport | None:
    """
    Dependency providing the httpx transport for outgoing requests.

    None selects httpx's default network transport.
    """
    return None


def raise_for_error(result: ExecuteErrorResponse) -> None:
    """Map an execution error to the matching API exception."""
    message = f"{result.error}: {result.details}" if result.details else result.error

    if result.error_type == "timeout":
        raise TimeoutError(message)
    if result.error_type == "network_error":
        raise NetworkError(message)
    if result.error_type == "invalid_url":
        raise BadRequestError(message)
    raise APIException(message, error_code="EXECUTION_ERROR")


async def run_template(
    template: RequestTemplate,
    environment_id: int | None,
    request_id: int | None,
    db: Session,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None
) -> ExecuteResponse:
    """Resolve, send and record one execution."""
    context = get_environment_context(db, environment_id)
    resolved, warnings = prepare_request(template, context)

    result = await send_request(
        resolved,
        timeout=settings.request_timeout,
        transport=transport,
        warnings=warnings
    )
    if isinstance(result, ExecuteErrorResponse):
        raise_for_error(result)

    save_history(
        db=db,
        request=resolved,
        response=result,
        request_id=request_id,
        environment_name=context.name
    )
    return result


@router.post("/{request_id}", response_model=ExecuteResponse, responses=EXECUTE_RESPONSES)
async def execute_saved_request(
    request_id: int,
    options: ExecuteOptions | None = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport)
):
    """
    Execute a saved request template by ID.

    Variables come from ``options.environment_id`` when given, otherwise
    from the active environment.

    Raises:
        ResourceNotFoundError: 404 if the request or environment is not found
        BadRequestError: 400 if the resolved URL cannot be sent
        NetworkError: 502 on connection failures
        TimeoutError: 504 when the request times out
    """
    db_request = get_request_or_404(db, request_id)
    template = RequestResponse.model_validate(db_request).to_template()

    return await run_template(
        template=template,
        environment_id=options.environment_id if options else None,
        request_id=request_id,
        db=db,
        settings=settings,
        transport=transport
    )


@router.post("", response_model=ExecuteResponse, responses=EXECUTE_RESPONSES)
async def execute_temporary_request(
    request: RequestTemplate,
    environment_id: int | None = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport)
):
    """
    Execute an unsaved request template.

    The execution is recorded in history without a request_id.
    """
    return await run_template(
        template=request,
        environment_id=environment_id,
        request_id=None,
        db=db,
        settings=settings,
        transport=transport
    )
