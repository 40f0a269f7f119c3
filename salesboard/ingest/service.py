import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from salesboard.core.config import settings
from salesboard.db.session import Base
from salesboard.models import Sale, Seller, Team

logger = logging.getLogger(__name__)

REFERENCE_TEAMS: List[Dict[str, Any]] = [
    {"id": "eq1", "name": "Equipe Norte"},
    {"id": "eq2", "name": "Equipe Sul"},
    {"id": "eq3", "name": "Equipe Leste"},
]

REFERENCE_SELLERS: List[Dict[str, Any]] = [
    {"id": "v1", "name": "João Silva", "team_id": "eq1"},
    {"id": "v2", "name": "Maria Santos", "team_id": "eq1"},
    {"id": "v3", "name": "Pedro Costa", "team_id": "eq2"},
    {"id": "v4", "name": "Ana Oliveira", "team_id": "eq2"},
    {"id": "v5", "name": "Carlos Lima", "team_id": "eq3"},
]

DEMO_SALES: List[Dict[str, Any]] = [
    {"amount": 1500, "seller_id": "v1", "team_id": "eq1", "description": "Venda de produto A"},
    {"amount": 2300, "seller_id": "v2", "team_id": "eq1", "description": "Venda de produto B"},
    {"amount": 1800, "seller_id": "v3", "team_id": "eq2", "description": "Venda de produto C"},
    {"amount": 3200, "seller_id": "v4", "team_id": "eq2", "description": "Venda de produto D"},
    {"amount": 2100, "seller_id": "v5", "team_id": "eq3", "description": "Venda de produto E"},
    {"amount": 2800, "seller_id": "v1", "team_id": "eq1", "description": "Venda de produto F"},
    {"amount": 1900, "seller_id": "v2", "team_id": "eq1", "description": "Venda de produto G"},
    {"amount": 2500, "seller_id": "v3", "team_id": "eq2", "description": "Venda de produto H"},
]


@dataclass
class SeedSummary:
    teams: int
    sellers: int
    sales: int


def reset_database(engine: Engine) -> None:
    """Drop and recreate tables for a clean seed."""
    from salesboard import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_reference_data(session: Session) -> SeedSummary:
    """Insert the fixed teams and sellers, leaving existing rows untouched."""
    teams = 0
    sellers = 0
    for entry in REFERENCE_TEAMS:
        if session.get(Team, entry["id"]) is None:
            session.add(Team(**entry))
            teams += 1
    # Teams must exist before sellers reference them on databases that enforce FKs.
    session.flush()
    for entry in REFERENCE_SELLERS:
        if session.get(Seller, entry["id"]) is None:
            session.add(Seller(**entry))
            sellers += 1
    session.commit()
    if teams or sellers:
        logger.info("Seeded %s teams and %s sellers", teams, sellers)
    return SeedSummary(teams=teams, sellers=sellers, sales=0)


def build_demo_sales(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    window_days: Optional[int] = None,
) -> List[Sale]:
    """Return the demo sales, each dated a random whole number of days before ``now``."""
    now = now or datetime.now()
    rng = rng or random.Random()
    window = window_days or settings.demo_window_days
    sales = []
    for entry in DEMO_SALES:
        days_back = rng.randint(0, window - 1)
        sales.append(
            Sale(
                amount=Decimal(str(entry["amount"])),
                seller_id=entry["seller_id"],
                team_id=entry["team_id"],
                description=entry["description"],
                occurred_at=now - timedelta(days=days_back),
            )
        )
    return sales


def seed_demo_sales(
    session: Session,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> SeedSummary:
    sales = build_demo_sales(now=now, rng=rng)
    session.add_all(sales)
    session.commit()
    logger.info("Inserted %s demo sales", len(sales))
    return SeedSummary(teams=0, sellers=0, sales=len(sales))
