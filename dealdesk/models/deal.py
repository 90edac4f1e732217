from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from dealdesk.models.fields import LooseNumber
from dealdesk.valuation.numeric import to_optional_number

GapBucket = Literal["near", "moderate", "far", "unknown"]
DealStructure = Literal["standardAmortizing", "bridgeBalloon"]


class SellerFinancing(BaseModel):
    model_config = ConfigDict(frozen=True)

    considered: Optional[str] = Field(None, description="'yes' | 'maybe' | 'no'")
    down_payment_pct: LooseNumber = None
    interest_rate_pct: LooseNumber = None
    term_years: LooseNumber = None


class SellerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    listing_id: Optional[str] = None
    title: str = "Business for Sale"
    industry: Optional[str] = None
    location: Optional[str] = None
    asking_price: LooseNumber = None
    sde: LooseNumber = None
    annual_revenue: LooseNumber = None
    annual_profit: LooseNumber = None
    monthly_lease: LooseNumber = None
    employees: LooseNumber = None
    includes_inventory: bool = False
    includes_building: bool = False
    financing_preference: Optional[str] = None
    seller_financing: SellerFinancing = Field(default_factory=SellerFinancing)
    description: str = ""


class BuyerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    buyer_id: Optional[str] = None
    available_capital: LooseNumber = Field(None, description="Cash the buyer can put down")
    target_purchase_price: LooseNumber = Field(None, description="Buyer's intended offer")
    preferred_financing: Optional[str] = None


class DealContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    seller: SellerContext = Field(default_factory=SellerContext)
    buyer: BuyerContext = Field(default_factory=BuyerContext)


class DealPolicy(BaseModel):
    """Tunable thresholds for the deal resolver. DEFAULT_POLICY holds the house defaults."""

    model_config = ConfigDict(frozen=True)

    near_gap_pct: float = 10
    mod_gap_pct: float = 25
    min_cash_at_close_pct: float = 5
    default_bridge_months: int = 18
    extended_bridge_months: int = 24
    short_bridge_months: int = 12
    extend_shortfall_pct: float = 10
    shorten_shortfall_pct: float = 5
    max_equity_credit_pct_of_price: float = 12
    default_note_interest: float = 10
    default_amort_years: float = 4

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> "DealPolicy":
        """Return a copy with the given fields replaced; unknown keys and non-numeric values are ignored."""
        if not overrides:
            return self
        update: dict[str, float | int] = {}
        for key, raw in overrides.items():
            if key not in type(self).model_fields:
                continue
            value = to_optional_number(raw)
            if value is None:
                continue
            if key.endswith("_months"):
                value = int(value)
            update[key] = value
        return self.model_copy(update=update)


DEFAULT_POLICY = DealPolicy()


class RecommendedTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    cash_down_at_close: Optional[float] = None
    cash_down_pct: Optional[float] = None
    note_principal: Optional[float] = None
    interest_pct: Optional[float] = None
    term_years: Optional[float] = Field(None, description="Amortizing term; None when bridging")
    bridge_months: int = 0
    balloon_at_month: Optional[int] = None
    equity_credit_monthly: float = 0
    equity_credit_cap: float = 0


class DealStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    ask: Optional[float] = None
    offer: Optional[float] = None
    gap_pct: Optional[int] = None
    gap_bucket: GapBucket = "unknown"
    down_pct_requested: Optional[float] = None
    required_down: Optional[int] = None
    buyer_capital: Optional[float] = None
    down_ok: Optional[bool] = None
    down_short: Optional[float] = None
    structure: DealStructure
    recommended: RecommendedTerms
    suggestions: list[str] = Field(default_factory=list)
    policy: DealPolicy = DEFAULT_POLICY
