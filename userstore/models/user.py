"""
User domain models and schemas.

Result shape returned by the gateway and service, and the element shape
accepted by a batch insert.

Dependencies: pydantic
System role: Users data contracts
"""

from pydantic import BaseModel, ConfigDict, Field

SettingsKey = str | int | float | bool | None


class User(BaseModel):
    """A stored user. ``id`` is always assigned by the store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    last_name: str = Field(alias="lastName")
    origin: str | None = Field(default=None, alias="from")
    age: int
    key: SettingsKey = Field(
        default=None,
        description="The 'key' field of the settings document, None when absent",
    )


class NewUser(BaseModel):
    """One element of a batch insert request."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(alias="lastName", max_length=255)
    age: int = Field(ge=0, strict=True)
