from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from salesboard.db.session import Base


class Seller(Base):
    """Salesperson. ``team_id`` may be empty for an orphan seller."""

    __tablename__ = "vendedores"

    id = Column(String(36), primary_key=True)
    name = Column("nome", String(128), nullable=False)
    team_id = Column("equipe_id", String(36), ForeignKey("equipes.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    team = relationship("Team", back_populates="sellers")

    @property
    def team_name(self):
        return self.team.name if self.team else None
