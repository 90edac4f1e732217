from dealdesk.models.fields import MultipleTriplet
from dealdesk.models.valuations import EarningsBasis, ValuationBand
from dealdesk.valuation.industry import INDUSTRY_MULTIPLES
from dealdesk.valuation.numeric import to_number

DEFAULT_SDE_MULTIPLES: MultipleTriplet = INDUSTRY_MULTIPLES["fallback"]
DEFAULT_EBITDA_MULTIPLES: MultipleTriplet = (3.0, 4.0, 5.0)
DEFAULT_REVENUE_MULTIPLES: MultipleTriplet = (0.6, 1.0, 1.4)

DEFAULT_MULTIPLES: dict[str, MultipleTriplet] = {
    "sde": DEFAULT_SDE_MULTIPLES,
    "ebitda": DEFAULT_EBITDA_MULTIPLES,
    "revenue": DEFAULT_REVENUE_MULTIPLES,
}


def calculate_multiple_values(
    basis: EarningsBasis,
    amount: float,
    multiples: MultipleTriplet | None = None,
    working_capital: float | None = 0,
) -> ValuationBand:
    """Value = basis amount x multiple - working capital, per tier, never below zero."""
    lo, mid, hi = multiples or DEFAULT_MULTIPLES[basis]
    amount = to_number(amount)
    wc = to_number(working_capital)
    return ValuationBand(
        low=max(0.0, amount * lo - wc),
        base=max(0.0, amount * mid - wc),
        high=max(0.0, amount * hi - wc),
    )


def calculate_sde_multiple_values(
    sde: float = 0,
    multiples: MultipleTriplet = DEFAULT_SDE_MULTIPLES,
    working_capital: float | None = 0,
) -> ValuationBand:
    return calculate_multiple_values("sde", sde, multiples, working_capital)


def calculate_ebitda_values(
    ebitda: float = 0,
    multiples: MultipleTriplet = DEFAULT_EBITDA_MULTIPLES,
    working_capital: float | None = 0,
) -> ValuationBand:
    return calculate_multiple_values("ebitda", ebitda, multiples, working_capital)


def calculate_revenue_values(
    revenue: float = 0,
    multiples: MultipleTriplet = DEFAULT_REVENUE_MULTIPLES,
    working_capital: float | None = 0,
) -> ValuationBand:
    return calculate_multiple_values("revenue", revenue, multiples, working_capital)
