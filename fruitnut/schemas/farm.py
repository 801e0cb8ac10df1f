"""Farm schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FarmResponse(BaseModel):
    """Farm details shown on the farm settings screen."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Farm unique identifier")
    name: str = Field(description="Farm name")
    owner_name: str | None = Field(default=None, description="Owner's name")
    email: str | None = Field(default=None, description="Contact email")
    phone: str | None = Field(default=None, description="Contact phone")
    address: str | None = Field(default=None, description="Farm address")


class FarmUpdate(BaseModel):
    """Schema for updating farm details.

    All fields are optional for partial updates.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255, description="New farm name")
    owner_name: str | None = Field(default=None, max_length=255, description="New owner name")
    email: str | None = Field(default=None, max_length=255, description="New contact email")
    phone: str | None = Field(default=None, max_length=50, description="New contact phone")
    address: str | None = Field(default=None, description="New address")
