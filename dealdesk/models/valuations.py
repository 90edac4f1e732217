from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from dealdesk.models.fields import MultipleTriplet

EarningsBasis = Literal["sde", "ebitda", "revenue"]


class AdjustmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk: float
    owner_dependency: float
    growth: float
    carry: float
    total: float = Field(..., description="Sum of the components, clamped to [-0.75, 0.75]")


class OpsAdjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    ops_bump: float
    ops_score: int
    ops_max: int = 7


class ValuationBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: float
    base: float
    high: float


class SensitivityCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    discount_rate: float
    terminal_multiple: float
    present_value: float


class DCFResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: str = "dcf"
    present_value: float
    projected_cash_flows: list[float]
    discounted_cash_flows: list[float]
    terminal_value: float
    discounted_terminal_value: float
    discount_rate: float = Field(..., description="Discount rate actually applied (decimal), after any carry reduction")
    growth_rate: float
    terminal_multiple: float
    working_capital: float = 0.0
    sensitivity_table: list[SensitivityCell] = Field(default_factory=list)


class PriceDelta(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    percent: float


class BuyerEconomicsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    equity: float
    debt: float
    annual_debt_service: float
    ocf_before_debt: float
    dscr: Optional[float] = Field(None, description="None when there is no debt service")
    fcf_to_equity_yr1: float
    cash_on_cash_yr1: Optional[float] = None
    operator_payback_years: Optional[float] = None
    managed_payback_years: Optional[float] = None
    max_price_for_target_dscr: Optional[float] = None
    max_price_for_managed_payback: Optional[float] = None


class ANAVResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    anav_fmv: float
    anav_olv: float
    net_proceeds_if_sold_assets_only: float


class ValuationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: str
    industry_label: str
    industry_multiples: MultipleTriplet
    sde_computed: float
    sde_used: float
    adjustments: AdjustmentResult
    effective_multiples: MultipleTriplet
    sde_multiple_values: ValuationBand
    ebitda_values: Optional[ValuationBand] = None
    revenue_values: Optional[ValuationBand] = None
    dcf: DCFResult
    working_capital_applied: float = 0.0
    asking_price: Optional[float] = None
    deltas_vs_asking: Optional[dict[str, PriceDelta]] = None
    recommended_method: str = "SDE base"
    recommended_value: float
    summary_text: str
    disclaimer: str
