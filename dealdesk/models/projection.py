from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectionRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    year_index: int
    revenue: float
    expenses: float
    sde: float
    implied_value: float


class GrowthProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: list[ProjectionRow]
    base_revenue: float
    base_expenses: float
    growth_rate: float = Field(..., description="Annual growth as a decimal, after clamping")
    years: int
    multiple: float
    added_value: float = Field(..., description="Year-N implied value minus today's, floored at 0")
    asking_price: Optional[float] = None
    years_to_justify_price: Optional[int] = None
    assumptions: list[str] = Field(default_factory=list)
