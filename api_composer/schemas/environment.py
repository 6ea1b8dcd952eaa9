"""
Pydantic schemas for environments and variables.

Defines schemas for creating, updating, and returning environment/variable data.
"""

from pydantic import BaseModel, Field

from ..ids import create_id


# Variable schemas

class VariableBase(BaseModel):
    """Base schema with common variable fields."""
    key: str = ""
    value: str = ""
    enabled: bool = True


class VariableCreate(VariableBase):
    """Schema for creating a new variable."""
    pass


class VariableUpdate(BaseModel):
    """Schema for updating an existing variable. All fields are optional."""
    key: str | None = None
    value: str | None = None
    enabled: bool | None = None


class Variable(VariableBase):
    """A stored environment variable."""
    id: str = Field(default_factory=create_id)


# Environment schemas

class EnvironmentCreate(BaseModel):
    """Schema for creating a new environment. A name is generated when omitted."""
    name: str | None = None
    variables: list[VariableCreate] = []


class EnvironmentUpdate(BaseModel):
    """Schema for updating an existing environment. All fields are optional."""
    name: str | None = None
    variables: list[Variable] | None = None


class Environment(BaseModel):
    """A named, switchable set of variables."""
    id: str = Field(default_factory=create_id)
    name: str
    variables: list[Variable] = []


class EnvironmentListResponse(BaseModel):
    """Schema for the environment list together with the active selection."""
    items: list[Environment]
    active_environment_id: str | None
