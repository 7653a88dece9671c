"""
Environment selection for request resolution.

The request builder never looks up an environment itself. Routes call
``get_environment_context`` once per call and hand the resulting
variables to the builder.
"""

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from ..exceptions import ResourceNotFoundError
from ..models.environment import Environment
from ..schemas.execute import ResolvedRequest
from ..schemas.request import RequestTemplate
from .request_builder import build_request
from .variable_substitution import normalize_variables


@dataclass(frozen=True)
class EnvironmentContext:
    """
    The variables and base URL of the selected environment.

    Attributes:
        variables: Mapping of lowercase variable names to values
        base_url: Prefix for relative request URLs, may be empty
        name: Environment name, None when no environment was selected
    """
    variables: dict[str, str] = field(default_factory=dict)
    base_url: str = ""
    name: str | None = None


def get_environment_context(db: Session, environment_id: int | None) -> EnvironmentContext:
    """
    Load the specified environment, or the active one when no ID is given.

    Args:
        db: Database session
        environment_id: Specific environment ID, or None to use the active environment

    Returns:
        The environment context; empty when nothing is active

    Raises:
        ResourceNotFoundError: If an explicit environment ID does not exist
    """
    if environment_id is not None:
        env = db.query(Environment).filter(Environment.id == environment_id).first()
        if env is None:
            raise ResourceNotFoundError("Environment", environment_id)
    else:
        env = db.query(Environment).filter(Environment.is_active == True).first()

    if not env:
        return EnvironmentContext()

    return EnvironmentContext(
        variables=normalize_variables({var.key: var.value for var in env.variables}),
        base_url=env.base_url or "",
        name=env.name,
    )


def apply_base_url(url: str, base_url: str) -> str:
    """
    Join the environment base URL in front of a relative URL.

    Example:
        >>> apply_base_url("/users", "https://api.example.com/")
        'https://api.example.com/users'
        >>> apply_base_url("https://other.example.com/x", "https://api.example.com")
        'https://other.example.com/x'
    """
    if not base_url or url.startswith(("http://", "https://")):
        return url
    return base_url.rstrip("/") + "/" + url.lstrip("/")


def resolve_in_context(template: RequestTemplate, context: EnvironmentContext) -> ResolvedRequest:
    """Build a template with the context's variables and apply its base URL."""
    resolved = build_request(template, context.variables)

    url = apply_base_url(resolved.url, context.base_url)
    if url != resolved.url:
        resolved = resolved.model_copy(update={"url": url})
    return resolved
