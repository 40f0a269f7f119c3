import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from salesboard.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Sale(Base):
    """A single recorded sale.

    ``team_id`` is stored on the sale itself rather than derived from the
    seller, so a sale keeps the team it was booked under even if the seller
    later moves. Seller/team references are not checked on insert.
    """

    __tablename__ = "vendas"

    id = Column(String(36), primary_key=True, default=_new_id)
    amount = Column("valor", Numeric(12, 2), nullable=False)
    seller_id = Column("vendedor_id", String(36), ForeignKey("vendedores.id"), nullable=False)
    team_id = Column("equipe_id", String(36), ForeignKey("equipes.id"), nullable=False)
    occurred_at = Column("data_venda", DateTime, default=datetime.now, nullable=False, index=True)
    description = Column("descricao", Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    seller = relationship("Seller")
    team = relationship("Team")
