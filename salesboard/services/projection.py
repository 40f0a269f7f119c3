"""Linear projections: average daily sales extrapolated over a horizon."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Union

from salesboard.services import periods

ZERO = Decimal("0")


@dataclass
class Projection:
    daily_rate: Decimal
    projected_total: Decimal
    historical_total: Decimal
    elapsed_days: int
    horizon_days: int


def project(historical_total, elapsed_days: int, horizon_days: int) -> Projection:
    total = Decimal(str(historical_total or 0))
    if elapsed_days <= 0:
        return Projection(ZERO, ZERO, total, elapsed_days, horizon_days)
    daily_rate = total / elapsed_days
    # Same value as daily_rate * horizon_days, but exact when horizon == elapsed.
    projected_total = total * horizon_days / elapsed_days
    return Projection(daily_rate, projected_total, total, elapsed_days, horizon_days)


def fortnight(historical_total) -> Projection:
    # Elapsed and horizon are both the full window, so the projection equals
    # the total sold in the trailing fortnight.
    return project(historical_total, periods.FORTNIGHT_DAYS, periods.FORTNIGHT_DAYS)


def month(historical_total, reference: Union[date, datetime]) -> Projection:
    return project(
        historical_total,
        periods.days_passed_in_month(reference),
        periods.days_in_month(reference),
    )
