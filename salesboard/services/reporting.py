"""Sales recording and reporting operations used by the HTTP routes.

Every function takes the SQLAlchemy session explicitly. Read operations also
accept ``now`` so a report can be computed for any reference instant; it
defaults to the current local time.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from decimal import Decimal, InvalidOperation
from functools import wraps
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from salesboard.ingest.service import SeedSummary, seed_demo_sales
from salesboard.models import Sale, Seller, Team
from salesboard.services import aggregation, projection
from salesboard.services.aggregation import GroupTotals, SalesSummary
from salesboard.services.errors import SalesError, StoreError, ValidationError
from salesboard.services.periods import Period, resolve

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Valor, vendedor e equipe são obrigatórios"
AMOUNT_SCALE = 2
AMOUNT_STEP = Decimal("0.01")
AMOUNT_LIMIT = Decimal("1e10")

__all__ = [
    "SalesError",
    "StoreError",
    "ValidationError",
    "record_sale",
    "sales_for_day",
    "sales_for_week",
    "sales_for_fortnight",
    "sales_for_period",
    "fortnight_projection",
    "month_projection",
    "sales_by_team",
    "sales_by_seller",
    "list_teams",
    "list_sellers",
    "seed_demo_data",
]


def _store_errors(func):
    @wraps(func)
    def wrapper(session: Session, *args, **kwargs):
        try:
            return func(session, *args, **kwargs)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Store failure in %s", func.__name__)
            raise StoreError(str(exc)) from exc

    return wrapper


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_amount(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Valor inválido: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"Valor inválido: {value!r}")
    if amount < 0:
        raise ValidationError("O valor da venda não pode ser negativo")
    # Column is Numeric(12, 2): at most two decimal places and ten integer digits.
    if amount >= AMOUNT_LIMIT:
        raise ValidationError(f"Valor acima do limite permitido: {value!r}")
    if amount.as_tuple().exponent < -AMOUNT_SCALE and amount != amount.quantize(AMOUNT_STEP):
        raise ValidationError(f"Valor com mais de {AMOUNT_SCALE} casas decimais: {value!r}")
    return amount


def _local_naive(moment: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive local time; aware values are converted first."""
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


@_store_errors
def record_sale(
    session: Session,
    amount,
    seller_id: Optional[str],
    team_id: Optional[str],
    description: Optional[str] = None,
    occurred_at: Optional[datetime] = None,
) -> Sale:
    """Append one sale. Seller/team ids are stored as given, without lookup."""
    if _blank(amount) or _blank(seller_id) or _blank(team_id):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    sale = Sale(
        amount=_parse_amount(amount),
        seller_id=seller_id,
        team_id=team_id,
        description=description,
        occurred_at=_local_naive(occurred_at) or datetime.now(),
    )
    session.add(sale)
    session.commit()
    logger.info(
        "Recorded sale %s: %s by seller %s for team %s",
        sale.id,
        sale.amount,
        seller_id,
        team_id,
    )
    return sale


@_store_errors
def sales_for_period(
    session: Session, period: Period, now: Optional[datetime] = None
) -> SalesSummary:
    date_range = resolve(period, now or datetime.now())
    return aggregation.summarize(session, date_range)


def sales_for_day(session: Session, now: Optional[datetime] = None) -> SalesSummary:
    return sales_for_period(session, Period.DAY, now)


def sales_for_week(session: Session, now: Optional[datetime] = None) -> SalesSummary:
    return sales_for_period(session, Period.WEEK, now)


def sales_for_fortnight(session: Session, now: Optional[datetime] = None) -> SalesSummary:
    return sales_for_period(session, Period.FORTNIGHT, now)


def fortnight_projection(
    session: Session, now: Optional[datetime] = None
) -> projection.Projection:
    summary = sales_for_period(session, Period.FORTNIGHT, now)
    return projection.fortnight(summary.total)


def month_projection(
    session: Session, now: Optional[datetime] = None
) -> projection.Projection:
    now = now or datetime.now()
    summary = sales_for_period(session, Period.MONTH, now)
    return projection.month(summary.total, now)


def _optional_range(period, now: Optional[datetime]):
    period = Period.parse(period)
    if period is None:
        return None
    return resolve(period, now or datetime.now())


@_store_errors
def sales_by_team(
    session: Session, period=None, now: Optional[datetime] = None
) -> List[GroupTotals]:
    """Totals for every team; ``period=None`` aggregates all recorded sales."""
    return aggregation.totals_by_team(session, _optional_range(period, now))


@_store_errors
def sales_by_seller(
    session: Session, period=None, now: Optional[datetime] = None
) -> List[GroupTotals]:
    return aggregation.totals_by_seller(session, _optional_range(period, now))


@_store_errors
def list_teams(session: Session) -> List[Team]:
    return list(session.scalars(select(Team).order_by(Team.name)).all())


@_store_errors
def list_sellers(session: Session) -> List[Seller]:
    return list(
        session.scalars(
            select(Seller).options(selectinload(Seller.team)).order_by(Seller.name)
        ).all()
    )


@_store_errors
def seed_demo_data(
    session: Session,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> SeedSummary:
    return seed_demo_sales(session, now=now, rng=rng)
