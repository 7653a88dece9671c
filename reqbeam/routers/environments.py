"""
Environment management API routes.

Provides CRUD operations for environments and their variables, plus
activation of the environment used when a call does not name one.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import ErrorResponse, ResourceNotFoundError
from ..models.environment import Environment, Variable
from ..schemas.environment import (
    EnvironmentCreate,
    EnvironmentUpdate,
    EnvironmentWithVariables,
    VariableCreate,
    VariableUpdate,
    VariableResponse,
)


router = APIRouter(
    prefix="/api/environments",
    tags=["environments"],
    responses={404: {"model": ErrorResponse, "description": "Environment or variable not found"}},
)


def get_environment_or_404(db: Session, environment_id: int) -> Environment:
    """Fetch an environment or raise ResourceNotFoundError."""
    db_environment = db.query(Environment).filter(Environment.id == environment_id).first()
    if db_environment is None:
        raise ResourceNotFoundError("Environment", environment_id)
    return db_environment


def get_variable_or_404(db: Session, variable_id: int) -> Variable:
    """Fetch a variable or raise ResourceNotFoundError."""
    db_variable = db.query(Variable).filter(Variable.id == variable_id).first()
    if db_variable is None:
        raise ResourceNotFoundError("Variable", variable_id)
    return db_variable


def deactivate_others(db: Session, environment_id: int | None = None) -> None:
    """Clear the active flag on every environment except ``environment_id``."""
    query = db.query(Environment).filter(Environment.is_active == True)
    if environment_id is not None:
        query = query.filter(Environment.id != environment_id)
    query.update({"is_active": False})


# Environment endpoints

@router.post("", response_model=EnvironmentWithVariables, status_code=status.HTTP_201_CREATED)
def create_environment(environment_data: EnvironmentCreate, db: Session = Depends(get_db)):
    """
    Create a new environment with optional initial variables.

    If is_active is True, all other environments will be deactivated.
    """
    if environment_data.is_active:
        deactivate_others(db)

    db_environment = Environment(
        name=environment_data.name,
        base_url=environment_data.base_url,
        is_active=environment_data.is_active,
    )
    db.add(db_environment)
    db.flush()  # Get the ID before adding variables

    for var_data in environment_data.variables:
        db.add(Variable(
            environment_id=db_environment.id,
            key=var_data.key,
            value=var_data.value,
        ))

    db.commit()
    db.refresh(db_environment)
    return db_environment


@router.get("", response_model=list[EnvironmentWithVariables])
def list_environments(db: Session = Depends(get_db)):
    """List all environments with their variables."""
    return db.query(Environment).all()


@router.get("/{environment_id}", response_model=EnvironmentWithVariables)
def get_environment(environment_id: int, db: Session = Depends(get_db)):
    """
    Get an environment by ID with all its variables.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    return get_environment_or_404(db, environment_id)


@router.put("/{environment_id}", response_model=EnvironmentWithVariables)
def update_environment(
    environment_id: int,
    environment_data: EnvironmentUpdate,
    db: Session = Depends(get_db)
):
    """
    Update an existing environment.

    If is_active is set to True, all other environments will be deactivated.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    db_environment = get_environment_or_404(db, environment_id)

    update_data = environment_data.model_dump(exclude_unset=True, exclude_none=True)
    if update_data.get("is_active") is True:
        deactivate_others(db, environment_id)

    for field, value in update_data.items():
        setattr(db_environment, field, value)

    db.commit()
    db.refresh(db_environment)
    return db_environment


@router.delete("/{environment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_environment(environment_id: int, db: Session = Depends(get_db)):
    """
    Delete an environment and, by cascade, all its variables.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    db_environment = get_environment_or_404(db, environment_id)
    db.delete(db_environment)
    db.commit()
    return None


@router.post("/{environment_id}/activate", response_model=EnvironmentWithVariables)
def activate_environment(environment_id: int, db: Session = Depends(get_db)):
    """
    Make an environment the active one, deactivating all others.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    db_environment = get_environment_or_404(db, environment_id)

    deactivate_others(db, environment_id)
    db_environment.is_active = True
    db.commit()
    db.refresh(db_environment)
    return db_environment


# Variable endpoints

@router.post(
    "/{environment_id}/variables",
    response_model=VariableResponse,
    status_code=status.HTTP_201_CREATED
)
def add_variable(
    environment_id: int,
    variable_data: VariableCreate,
    db: Session = Depends(get_db)
):
    """
    Add a new variable to an environment.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    get_environment_or_404(db, environment_id)

    db_variable = Variable(
        environment_id=environment_id,
        key=variable_data.key,
        value=variable_data.value,
    )
    db.add(db_variable)
    db.commit()
    db.refresh(db_variable)
    return db_variable


@router.put("/variables/{variable_id}", response_model=VariableResponse)
def update_variable(
    variable_id: int,
    variable_data: VariableUpdate,
    db: Session = Depends(get_db)
):
    """
    Update an existing variable.

    Raises:
        ResourceNotFoundError: 404 if variable not found
    """
    db_variable = get_variable_or_404(db, variable_id)

    update_data = variable_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_variable, field, value)

    db.commit()
    db.refresh(db_variable)
    return db_variable


@router.delete("/variables/{variable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_variable(variable_id: int, db: Session = Depends(get_db)):
    """
    Delete a variable by ID.

    Raises:
        ResourceNotFoundError: 404 if variable not found
    """
    db_variable = get_variable_or_404(db, variable_id)
    db.delete(db_variable)
    db.commit()
    return None
