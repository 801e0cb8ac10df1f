"""Report schemas for farm and center dashboards."""

from pydantic import BaseModel, Field


class BreakdownItem(BaseModel):
    """Donated pounds grouped by one key (fruit, center or farm)."""

    name: str
    lbs: float
    count: int = Field(default=0, description="Number of donations in the group")
    percentage: float = Field(default=0.0, description="Share of the total donated pounds")


class FarmReport(BaseModel):
    """Harvest and donation summary for a farm."""

    total_picked_lbs: float
    total_donated_lbs: float
    waste_rate_percent: float = Field(description="Share of picked pounds that were not donated")
    total_volunteers: int
    active_shift_count: int
    by_fruit: list[BreakdownItem]
    by_center: list[BreakdownItem]


class CenterReport(BaseModel):
    """Received donation summary for a center, nullified donations excluded."""

    total_donated_lbs: float
    donation_count: int
    by_fruit: list[BreakdownItem]
    by_farm: list[BreakdownItem]
