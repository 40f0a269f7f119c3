from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from salesboard.api.schemas import (
    FortnightProjectionResponse,
    MonthProjectionResponse,
    SaleCreateRequest,
    SaleCreatedResponse,
    SaleItem,
    SalesPeriodResponse,
    SeedResponse,
    SellerSalesRow,
    SellerSummary,
    TeamSalesRow,
    TeamSummary,
)
from salesboard.core.config import settings
from salesboard.db.session import get_db
from salesboard.models import Sale
from salesboard.services import reporting
from salesboard.services.aggregation import GroupTotals, SalesSummary
from salesboard.services.errors import StoreError, ValidationError

router = APIRouter()

PERIOD_DESCRIPTION = "day, week, fortnight or month (dia, semana, quinzena, mes); omit for all time"


def _decimal_to_float(value: Optional[Decimal]) -> float:
    if value is None:
        return 0.0
    return float(value)


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def _serialize_sale(sale: Sale) -> SaleItem:
    return SaleItem(
        id=sale.id,
        valor=_decimal_to_float(sale.amount),
        vendedor_id=sale.seller_id,
        equipe_id=sale.team_id,
        data_venda=sale.occurred_at,
        descricao=sale.description,
        vendedor_nome=sale.seller.name if sale.seller else None,
        equipe_nome=sale.team.name if sale.team else None,
    )


def _serialize_summary(summary: SalesSummary) -> SalesPeriodResponse:
    return SalesPeriodResponse(
        vendas=[_serialize_sale(sale) for sale in summary.items],
        total=_decimal_to_float(summary.total),
        quantidade=summary.count,
    )


def _serialize_team_totals(group: GroupTotals) -> TeamSalesRow:
    return TeamSalesRow(
        id=group.id,
        equipe_nome=group.name,
        quantidade_vendas=group.count,
        total_vendas=_decimal_to_float(group.total),
        media_venda=_decimal_to_float(group.mean),
    )


def _serialize_seller_totals(group: GroupTotals) -> SellerSalesRow:
    return SellerSalesRow(
        id=group.id,
        vendedor_nome=group.name,
        equipe_nome=group.team_name,
        quantidade_vendas=group.count,
        total_vendas=_decimal_to_float(group.total),
        media_venda=_decimal_to_float(group.mean),
    )


@router.get("/health")
def read_health():
    """Return minimal health metadata for smoke checks."""
    return {
        "status": "ok",
        "service": settings.project_name,
        "version": settings.version,
        "environment": settings.environment,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }


@router.post(
    "/sales",
    response_model=SaleCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_sale(request: SaleCreateRequest, db: Session = Depends(get_db)):
    try:
        sale = reporting.record_sale(
            db,
            amount=request.amount,
            seller_id=request.seller_id,
            team_id=request.team_id,
            description=request.description,
            occurred_at=request.occurred_at,
        )
    except (ValidationError, StoreError) as exc:
        raise _http_error(exc)
    return SaleCreatedResponse(id=sale.id, message="Venda registrada com sucesso")


@router.get("/sales/day", response_model=SalesPeriodResponse)
def get_sales_for_day(db: Session = Depends(get_db)):
    try:
        return _serialize_summary(reporting.sales_for_day(db))
    except StoreError as exc:
        raise _http_error(exc)


@router.get("/sales/week", response_model=SalesPeriodResponse)
def get_sales_for_week(db: Session = Depends(get_db)):
    try:
        return _serialize_summary(reporting.sales_for_week(db))
    except StoreError as exc:
        raise _http_error(exc)


@router.get("/sales/fortnight", response_model=SalesPeriodResponse)
def get_sales_for_fortnight(db: Session = Depends(get_db)):
    try:
        return _serialize_summary(reporting.sales_for_fortnight(db))
    except StoreError as exc:
        raise _http_error(exc)


@router.get("/projections/fortnight", response_model=FortnightProjectionResponse)
def get_fortnight_projection(db: Session = Depends(get_db)):
    try:
        result = reporting.fortnight_projection(db)
    except StoreError as exc:
        raise _http_error(exc)
    return FortnightProjectionResponse(
        mediaDiaria=_decimal_to_float(result.daily_rate),
        projecaoQuinzena=_decimal_to_float(result.projected_total),
        vendasAtuais=_decimal_to_float(result.historical_total),
    )


@router.get("/projections/month", response_model=MonthProjectionResponse)
def get_month_projection(db: Session = Depends(get_db)):
    try:
        result = reporting.month_projection(db)
    except StoreError as exc:
        raise _http_error(exc)
    return MonthProjectionResponse(
        mediaDiaria=_decimal_to_float(result.daily_rate),
        projecaoMes=_decimal_to_float(result.projected_total),
        vendasAtuais=_decimal_to_float(result.historical_total),
        diasPassados=result.elapsed_days,
        diasNoMes=result.horizon_days,
    )


@router.get("/sales/by-team", response_model=List[TeamSalesRow])
def get_sales_by_team(
    period: Optional[str] = Query(default=None, description=PERIOD_DESCRIPTION),
    db: Session = Depends(get_db),
):
    try:
        groups = reporting.sales_by_team(db, period)
    except (ValidationError, StoreError) as exc:
        raise _http_error(exc)
    return [_serialize_team_totals(group) for group in groups]


@router.get("/sales/by-seller", response_model=List[SellerSalesRow])
def get_sales_by_seller(
    period: Optional[str] = Query(default=None, description=PERIOD_DESCRIPTION),
    db: Session = Depends(get_db),
):
    try:
        groups = reporting.sales_by_seller(db, period)
    except (ValidationError, StoreError) as exc:
        raise _http_error(exc)
    return [_serialize_seller_totals(group) for group in groups]


@router.get("/teams", response_model=List[TeamSummary])
def list_teams(db: Session = Depends(get_db)):
    try:
        teams = reporting.list_teams(db)
    except StoreError as exc:
        raise _http_error(exc)
    return [TeamSummary(id=team.id, nome=team.name) for team in teams]


@router.get("/sellers", response_model=List[SellerSummary])
def list_sellers(db: Session = Depends(get_db)):
    try:
        sellers = reporting.list_sellers(db)
    except StoreError as exc:
        raise _http_error(exc)
    return [
        SellerSummary(
            id=seller.id,
            nome=seller.name,
            equipe_id=seller.team_id,
            equipe_nome=seller.team_name,
        )
        for seller in sellers
    ]


@router.post("/seed", response_model=SeedResponse)
def seed_demo_data(db: Session = Depends(get_db)):
    try:
        summary = reporting.seed_demo_data(db)
    except StoreError as exc:
        raise _http_error(exc)
    return SeedResponse(
        message="Dados de exemplo adicionados com sucesso", vendas=summary.sales
    )
