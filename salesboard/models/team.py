from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from salesboard.db.session import Base


class Team(Base):
    """Sales team; sellers belong to one and every sale is attributed to one."""

    __tablename__ = "equipes"

    id = Column(String(36), primary_key=True)
    name = Column("nome", String(128), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    sellers = relationship("Seller", back_populates="team")
