"""Farm and center report service."""

from collections import defaultdict
from typing import Any, Iterable
from uuid import UUID

from fruitnut.core.supabase import get_supabase_client
from fruitnut.models.donation import DonationStatus
from fruitnut.models.shift import ShiftStatus
from fruitnut.schemas.report import BreakdownItem, CenterReport, FarmReport


def waste_rate(picked: float, donated: float) -> float:
    """Percentage of picked pounds that were not donated, one decimal."""
    if picked <= 0:
        return 0.0
    return round((picked - donated) / picked * 100, 1)


def breakdown(pairs: Iterable[tuple[str, float]]) -> list[BreakdownItem]:
    """Group (name, lbs) pairs into items sorted by pounds, largest first."""
    lbs: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for name, amount in pairs:
        lbs[name] += amount
        counts[name] += 1

    total = sum(lbs.values())
    items = [
        BreakdownItem(
            name=name,
            lbs=amount,
            count=counts[name],
            percentage=round(amount / total * 100, 1) if total > 0 else 0.0,
        )
        for name, amount in lbs.items()
    ]
    return sorted(items, key=lambda item: item.lbs, reverse=True)


def _name(row: dict[str, Any], table: str, default: str) -> str:
    embedded = row.get(table)
    if isinstance(embedded, list):
        embedded = embedded[0] if embedded else None
    return (embedded or {}).get("name") or default


class ReportService:
    """Service for aggregating donation reports."""

    def __init__(self) -> None:
        """Initialize report service with Supabase client."""
        self.client = get_supabase_client()

    async def farm_report(self, farm_id: UUID) -> FarmReport:
        """Build the harvest report of a farm.

        Args:
            farm_id: The farm's UUID.

        Returns:
            FarmReport: Totals, waste rate and donated pounds per fruit and center.
        """
        donations = (
            self.client.table("donations")
            .select("date, fruit, amount_picked_lbs, amount_donated_lbs, volunteer_count, donation_centers(name)")
            .eq("farm_id", str(farm_id))
            .execute()
        ).data or []

        shifts = (
            self.client.table("shifts")
            .select("id", count="exact")
            .eq("farm_id", str(farm_id))
            .eq("status", ShiftStatus.ACTIVE.value)
            .execute()
        )

        picked = sum(float(d.get("amount_picked_lbs") or 0) for d in donations)
        donated = sum(float(d.get("amount_donated_lbs") or 0) for d in donations)

        return FarmReport(
            total_picked_lbs=picked,
            total_donated_lbs=donated,
            waste_rate_percent=waste_rate(picked, donated),
            total_volunteers=sum(d.get("volunteer_count") or 0 for d in donations),
            active_shift_count=shifts.count or 0,
            by_fruit=breakdown((d["fruit"], float(d.get("amount_donated_lbs") or 0)) for d in donations),
            by_center=breakdown(
                (_name(d, "donation_centers", "Unassigned"), float(d.get("amount_donated_lbs") or 0))
                for d in donations
            ),
        )

    async def center_report(self, center_id: UUID) -> CenterReport:
        """Build the intake report of a center, nullified donations excluded."""
        donations = (
            self.client.table("donations")
            .select("id, date, fruit, amount_donated_lbs, farms(name)")
            .eq("center_id", str(center_id))
            .neq("status", DonationStatus.NULLIFIED.value)
            .order("date", desc=True)
            .execute()
        ).data or []

        return CenterReport(
            total_donated_lbs=sum(float(d.get("amount_donated_lbs") or 0) for d in donations),
            donation_count=len(donations),
            by_fruit=breakdown((d["fruit"], float(d.get("amount_donated_lbs") or 0)) for d in donations),
            by_farm=breakdown(
                (_name(d, "farms", "Unknown farm"), float(d.get("amount_donated_lbs") or 0))
                for d in donations
            ),
        )
