"""SQLAlchemy models for the sales dashboard."""

from salesboard.models.sale import Sale
from salesboard.models.seller import Seller
from salesboard.models.team import Team

__all__ = ["Team", "Seller", "Sale"]
