"""Filter sale rows by date range and summarise them overall, per team or per seller."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from salesboard.models import Sale, Seller, Team
from salesboard.services.periods import DateRange

ZERO = Decimal("0")


class GroupBy(str, Enum):
    NONE = "none"
    TEAM = "team"
    SELLER = "seller"


@dataclass
class SalesSummary:
    items: List[Sale]
    total: Decimal
    count: int


@dataclass
class GroupTotals:
    id: str
    name: str
    count: int = 0
    total: Decimal = ZERO
    team_name: Optional[str] = None

    @property
    def mean(self) -> Decimal:
        if self.count <= 0:
            return ZERO
        return self.total / self.count


def _to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def in_range(sale: Sale, date_range: Optional[DateRange]) -> bool:
    if date_range is None:
        return True
    return sale.occurred_at.date() in date_range


def _sorted_by_total(groups: Iterable[GroupTotals]) -> List[GroupTotals]:
    # sorted() is stable, so ties keep the order the groups were supplied in.
    return sorted(groups, key=lambda group: group.total, reverse=True)


def aggregate(
    sales: Iterable[Sale],
    date_range: Optional[DateRange],
    group_by: GroupBy = GroupBy.NONE,
    *,
    teams: Sequence[Team] = (),
    sellers: Sequence[Seller] = (),
):
    """Summarise ``sales`` falling inside ``date_range`` (``None`` means all time).

    With ``GroupBy.NONE`` a :class:`SalesSummary` is returned, newest first.
    With ``TEAM``/``SELLER`` one :class:`GroupTotals` per supplied team or seller
    is returned, including those with no matching sale, sorted by total
    descending. Team attribution uses the team stored on the sale.
    """
    matching = [sale for sale in sales if in_range(sale, date_range)]

    if group_by is GroupBy.NONE:
        matching.sort(key=lambda sale: sale.occurred_at, reverse=True)
        total = sum((_to_decimal(sale.amount) for sale in matching), ZERO)
        return SalesSummary(items=matching, total=total, count=len(matching))

    if group_by is GroupBy.TEAM:
        buckets = {
            team.id: GroupTotals(id=team.id, name=team.name) for team in teams
        }
        key = "team_id"
    elif group_by is GroupBy.SELLER:
        buckets = {
            seller.id: GroupTotals(id=seller.id, name=seller.name, team_name=seller.team_name)
            for seller in sellers
        }
        key = "seller_id"
    else:
        raise ValueError(f"Unsupported grouping {group_by!r}")

    for sale in matching:
        group = buckets.get(getattr(sale, key))
        if group is None:
            continue
        group.count += 1
        group.total += _to_decimal(sale.amount)

    return _sorted_by_total(buckets.values())


def _range_bounds(date_range: DateRange):
    lower = datetime.combine(date_range.start, time.min)
    upper = datetime.combine(date_range.end + timedelta(days=1), time.min)
    return lower, upper


def fetch_sales(session: Session, date_range: Optional[DateRange]) -> List[Sale]:
    """Load sales whose timestamp falls on a day inside ``date_range``."""
    stmt = select(Sale).options(
        selectinload(Sale.seller), selectinload(Sale.team)
    ).order_by(Sale.occurred_at.desc())
    if date_range is not None:
        lower, upper = _range_bounds(date_range)
        stmt = stmt.where(Sale.occurred_at >= lower, Sale.occurred_at < upper)
    return list(session.scalars(stmt).all())


def fetch_teams(session: Session) -> List[Team]:
    return list(session.scalars(select(Team).order_by(Team.id)).all())


def fetch_sellers(session: Session) -> List[Seller]:
    return list(
        session.scalars(
            select(Seller).options(selectinload(Seller.team)).order_by(Seller.id)
        ).all()
    )


def summarize(session: Session, date_range: Optional[DateRange]) -> SalesSummary:
    return aggregate(fetch_sales(session, date_range), date_range)


def totals_by_team(session: Session, date_range: Optional[DateRange]) -> List[GroupTotals]:
    return aggregate(
        fetch_sales(session, date_range),
        date_range,
        GroupBy.TEAM,
        teams=fetch_teams(session),
    )


def totals_by_seller(session: Session, date_range: Optional[DateRange]) -> List[GroupTotals]:
    return aggregate(
        fetch_sales(session, date_range),
        date_range,
        GroupBy.SELLER,
        sellers=fetch_sellers(session),
    )
