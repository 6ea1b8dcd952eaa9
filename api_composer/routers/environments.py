"""
Environment management API routes.

Provides CRUD operations for environments and their variables, plus
selection of the active environment used for variable resolution.
"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_store
from ..exceptions import ResourceNotFoundError
from ..schemas.environment import (
    Environment,
    EnvironmentCreate,
    EnvironmentListResponse,
    EnvironmentUpdate,
    Variable,
    VariableCreate,
    VariableUpdate,
)
from ..services.workspace_store import WorkspaceStore


router = APIRouter(prefix="/api/environments", tags=["environments"])


def _get_environment_or_404(store: WorkspaceStore, environment_id: str) -> Environment:
    environment = store.get_environment(environment_id)
    if environment is None:
        raise ResourceNotFoundError("Environment", environment_id)
    return environment


# Environment endpoints

@router.post("", response_model=Environment, status_code=status.HTTP_201_CREATED)
def create_environment(
    environment_data: EnvironmentCreate,
    store: WorkspaceStore = Depends(get_store)
):
    """
    Create a new environment with optional initial variables.

    A name of the form ``Env <n>`` is generated when none is given.

    Args:
        environment_data: Environment name and initial variables
        store: Workspace store

    Returns:
        The created environment with assigned IDs
    """
    variables = [Variable(**var.model_dump()) for var in environment_data.variables]
    return store.add_environment(environment_data.name, variables)


@router.get("", response_model=EnvironmentListResponse)
def list_environments(store: WorkspaceStore = Depends(get_store)):
    """List all environments with their variables and the active environment ID."""
    return EnvironmentListResponse(
        items=store.environments,
        active_environment_id=store.active_environment_id,
    )


@router.post("/deactivate", response_model=EnvironmentListResponse)
def deactivate_environments(store: WorkspaceStore = Depends(get_store)):
    """Clear the active environment so that every placeholder resolves empty."""
    store.set_active_environment(None)
    return EnvironmentListResponse(items=store.environments, active_environment_id=None)


@router.get("/{environment_id}", response_model=Environment)
def get_environment(environment_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Get an environment by ID with all its variables.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    return _get_environment_or_404(store, environment_id)


@router.put("/{environment_id}", response_model=Environment)
def update_environment(
    environment_id: str,
    environment_data: EnvironmentUpdate,
    store: WorkspaceStore = Depends(get_store)
):
    """
    Update an existing environment.

    Providing ``variables`` replaces the whole variable list.

    Args:
        environment_id: The unique identifier of the environment to update
        environment_data: Fields to update (only provided fields are updated)
        store: Workspace store

    Returns:
        The updated environment

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    environment = _get_environment_or_404(store, environment_id)

    update_data = environment_data.model_dump(exclude_unset=True, exclude_none=True)
    updated = Environment.model_validate({**environment.model_dump(), **update_data})
    return store.update_environment(updated)


@router.delete("/{environment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_environment(environment_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Delete an environment by ID.

    If it was active, the first remaining environment becomes active.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    if not store.remove_environment(environment_id):
        raise ResourceNotFoundError("Environment", environment_id)
    return None


@router.post("/{environment_id}/activate", response_model=Environment)
def activate_environment(environment_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Set an environment as the active environment.

    Only one environment can be active at a time.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    environment = _get_environment_or_404(store, environment_id)
    store.set_active_environment(environment_id)
    return environment


# Variable endpoints

@router.post(
    "/{environment_id}/variables",
    response_model=Variable,
    status_code=status.HTTP_201_CREATED
)
def add_variable(
    environment_id: str,
    variable_data: VariableCreate,
    store: WorkspaceStore = Depends(get_store)
):
    """
    Append a variable to an environment.

    Keys need not be unique; the first enabled match wins on resolution.

    Raises:
        ResourceNotFoundError: 404 if environment not found
    """
    environment = _get_environment_or_404(store, environment_id)

    variable = Variable(**variable_data.model_dump())
    store.update_environment(
        environment.model_copy(update={"variables": [*environment.variables, variable]})
    )
    return variable


@router.put("/{environment_id}/variables/{variable_id}", response_model=Variable)
def update_variable(
    environment_id: str,
    variable_id: str,
    variable_data: VariableUpdate,
    store: WorkspaceStore = Depends(get_store)
):
    """
    Update an existing variable in place, keeping its position.

    Raises:
        ResourceNotFoundError: 404 if environment or variable not found
    """
    environment = _get_environment_or_404(store, environment_id)
    current = next((var for var in environment.variables if var.id == variable_id), None)
    if current is None:
        raise ResourceNotFoundError("Variable", variable_id)

    updated = current.model_copy(update=variable_data.model_dump(exclude_unset=True, exclude_none=True))
    store.update_environment(environment.model_copy(update={
        "variables": [updated if var.id == variable_id else var for var in environment.variables]
    }))
    return updated


@router.delete("/{environment_id}/variables/{variable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_variable(
    environment_id: str,
    variable_id: str,
    store: WorkspaceStore = Depends(get_store)
):
    """
    Delete a variable by ID.

    Raises:
        ResourceNotFoundError: 404 if environment or variable not found
    """
    environment = _get_environment_or_404(store, environment_id)
    if not any(var.id == variable_id for var in environment.variables):
        raise ResourceNotFoundError("Variable", variable_id)

    store.update_environment(environment.model_copy(update={
        "variables": [var for var in environment.variables if var.id != variable_id]
    }))
    return None
