from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SaleCreateRequest(BaseModel):
    """Incoming payload for POST /sales.

    Fields are optional here so that a missing value is reported with the
    service's own validation message instead of a schema error.
    """

    model_config = ConfigDict(extra="ignore")

    amount: Optional[Union[float, str]] = Field(
        default=None, validation_alias=AliasChoices("amount", "valor")
    )
    seller_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("seller_id", "vendedor_id")
    )
    team_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("team_id", "equipe_id")
    )
    description: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("description", "descricao")
    )
    occurred_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("occurred_at", "data_venda")
    )


class SaleCreatedResponse(BaseModel):
    """Response for POST /sales."""

    model_config = ConfigDict(extra="forbid")

    id: str
    message: str


class SaleItem(BaseModel):
    """A sale row with the seller and team names resolved."""

    model_config = ConfigDict(extra="forbid")

    id: str
    valor: float
    vendedor_id: str
    equipe_id: str
    data_venda: datetime
    descricao: Optional[str] = None
    vendedor_nome: Optional[str] = None
    equipe_nome: Optional[str] = None


class SalesPeriodResponse(BaseModel):
    """Response for /sales/day, /sales/week and /sales/fortnight."""

    model_config = ConfigDict(extra="forbid")

    vendas: List[SaleItem]
    total: float
    quantidade: int


class FortnightProjectionResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mediaDiaria: float
    projecaoQuinzena: float
    vendasAtuais: float


class MonthProjectionResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mediaDiaria: float
    projecaoMes: float
    vendasAtuais: float
    diasPassados: int
    diasNoMes: int


class TeamSalesRow(BaseModel):
    """Per-team totals for /sales/by-team."""

    model_config = ConfigDict(extra="forbid")

    id: str
    equipe_nome: str
    quantidade_vendas: int
    total_vendas: float
    media_venda: float


class SellerSalesRow(BaseModel):
    """Per-seller totals for /sales/by-seller."""

    model_config = ConfigDict(extra="forbid")

    id: str
    vendedor_nome: str
    equipe_nome: Optional[str] = None
    quantidade_vendas: int
    total_vendas: float
    media_venda: float


class TeamSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    nome: str


class SellerSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    nome: str
    equipe_id: Optional[str] = None
    equipe_nome: Optional[str] = None


class SeedResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message: str
    vendas: int
