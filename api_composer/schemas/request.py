"""
Pydantic schemas for composing HTTP requests.

Defines the editable header/param rows, the tagged authentication state,
the live composer form, saved request snapshots and the outgoing request
descriptor produced by the assembler.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ..ids import create_id


# HTTP methods supported by the composer
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class KeyValueRow(BaseModel):
    """An editable, toggleable key/value row. Disabled rows are kept but ignored."""
    id: str = Field(default_factory=create_id)
    key: str = ""
    value: str = ""
    enabled: bool = True


class HeaderRow(KeyValueRow):
    """A request header row."""


class ParamRow(KeyValueRow):
    """A query parameter row."""


# Authentication variants

class NoAuth(BaseModel):
    type: Literal["none"] = "none"


class BearerAuth(BaseModel):
    type: Literal["bearer"] = "bearer"
    token: str = ""


class BasicAuth(BaseModel):
    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


AuthState = Annotated[Union[NoAuth, BearerAuth, BasicAuth], Field(discriminator="type")]


class ComposerState(BaseModel):
    """The live request form as entered by the user, before resolution."""
    method: HttpMethod = "GET"
    url: str = ""
    headers: list[HeaderRow] = []
    params: list[ParamRow] = []
    auth: AuthState = Field(default_factory=NoAuth)
    body: str = ""


class RequestDescriptor(BaseModel):
    """A fully resolved, ready-to-send request."""
    method: HttpMethod
    url: str
    headers: dict[str, str] = {}
    body: str | None = None


# Saved request schemas

class SavedRequestCreate(ComposerState):
    """Schema for saving the current composer state under a name."""
    name: str


class SavedRequestUpdate(BaseModel):
    """Schema for overwriting a saved request. All fields are optional."""
    name: str | None = None
    method: HttpMethod | None = None
    url: str | None = None
    headers: list[HeaderRow] | None = None
    params: list[ParamRow] | None = None
    auth: AuthState | None = None
    body: str | None = None


class SavedRequest(SavedRequestCreate):
    """A named, immutable-until-overwritten copy of a composer state."""
    id: str = Field(default_factory=create_id)

    def to_composer(self) -> ComposerState:
        return ComposerState.model_validate(self.model_dump(exclude={"id", "name"}))
