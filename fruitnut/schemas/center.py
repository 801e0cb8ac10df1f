"""Donation center schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CenterSummary(BaseModel):
    """Center option shown in pickers."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Center unique identifier")
    name: str = Field(description="Center name")


class CenterResponse(CenterSummary):
    """Full center details shown on the center profile screen."""

    address: str | None = Field(default=None, description="Street address")
    phone: str | None = Field(default=None, description="Contact phone")
    email: str | None = Field(default=None, description="Contact email")
    capacity_lbs: int | None = Field(default=None, description="Weekly intake capacity in pounds")
    open_hours: str | None = Field(default=None, description="Pickup and drop-off hours")
    accepted_fruits: list[str] = Field(default_factory=list, description="Fruits the center accepts")


class CenterUpdate(BaseModel):
    """Schema for updating center details.

    All fields are optional for partial updates.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255, description="New center name")
    address: str | None = Field(default=None, description="New street address")
    phone: str | None = Field(default=None, max_length=50, description="New contact phone")
    email: str | None = Field(default=None, max_length=255, description="New contact email")
    capacity_lbs: int | None = Field(default=None, ge=0, description="New weekly capacity in pounds")
    open_hours: str | None = Field(default=None, description="New opening hours")
    accepted_fruits: list[str] | None = Field(default=None, description="New list of accepted fruits")
