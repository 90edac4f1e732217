from typing import Any, Optional

from pydantic import BaseModel, Field

from dealdesk.models.deal import BuyerContext, SellerContext
from dealdesk.models.fields import LooseNumber, MultipleTriplet, Number


class ValuationRequest(BaseModel):
    business_name: Optional[str] = Field(None, description="Display name used in the summary text")
    city: Optional[str] = None
    state_or_province: Optional[str] = None
    industry: str = Field("service", description="Free-text industry; normalized against the multiples table")
    industry_multiples: Optional[MultipleTriplet] = Field(None, description="Custom [low, mid, high] SDE multiples")
    annual_revenue: Number = 0.0
    annual_expenses: Number = 0.0
    owner_salary_addback: Number = 0.0
    personal_addbacks: Number = 0.0
    sde_override: LooseNumber = Field(None, description="Manual SDE; wins over the computed figure when non-zero")
    growth_rate_pct: Number = 4.0
    discount_rate_pct: Number = 22.0
    terminal_multiple: Number = 3.0
    risk_score: Number = Field(3.0, description="1 = low risk ... 5 = high risk")
    owner_dependency_score: Number = Field(3.0, description="1 = low dependency ... 5 = high")
    working_capital: Number = 0.0
    seller_carry_allowed: bool = False
    include_ebitda_revenue_methods: bool = False
    ebitda_override: LooseNumber = None
    ebitda_multiples: Optional[MultipleTriplet] = None
    revenue_multiples: Optional[MultipleTriplet] = None
    asking_price: LooseNumber = None


class DCFRequest(BaseModel):
    sde: Number = 0.0
    growth_rate_pct: Number = 4.0
    discount_rate_pct: Number = 22.0
    terminal_multiple: Number = 3.0
    seller_carry_allowed: bool = False
    working_capital: Number = 0.0


class GrowthRequest(BaseModel):
    base_revenue: Number = 0.0
    base_sde: LooseNumber = None
    base_expenses: LooseNumber = Field(None, description="Explicit expenses; otherwise revenue minus SDE")
    growth_rate_pct: Number = 5.0
    years: Number = 3
    multiple: Number = 3.0
    asking_price: LooseNumber = None


class BuyerEconomicsRequest(BaseModel):
    price: Number = 0.0
    sde: Number = 0.0
    manager_wage: Number = 0.0
    capex_reserve: Number = 0.0
    down_payment_pct: Number = Field(0.2, description="Fraction, 0.2 = 20%")
    interest_pct: Number = 10.0
    loan_years: Number = 5.0
    working_capital: Number = 0.0
    closing_costs: Number = 0.0
    target_dscr: Number = 1.25
    target_payback_years: Number = 3.0


class DealRequest(BaseModel):
    seller: SellerContext = Field(default_factory=SellerContext)
    buyer: BuyerContext = Field(default_factory=BuyerContext)
    policy_overrides: Optional[dict[str, Any]] = Field(
        None, description="Per-request DealPolicy overrides, e.g. {'near_gap_pct': 8}"
    )
