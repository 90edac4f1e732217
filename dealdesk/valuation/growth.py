import logging

from dealdesk.models.projection import GrowthProjection, ProjectionRow
from dealdesk.valuation.numeric import clamp, round_half_up, to_number, to_optional_number

logger = logging.getLogger(__name__)

MIN_GROWTH_RATE = -0.99
MAX_PROJECTION_YEARS = 10
MAX_BREAKEVEN_YEARS = 30

FLAT_EXPENSE_NOTE = (
    "Assumes revenue compounds at the stated rate, expenses stay the same, and the "
    "valuation multiple stays constant. A directional gut-check, not a forecast."
)


def _base_expenses(base_revenue: float, base_sde: float | None, base_expenses: float | None) -> float:
    if base_expenses is not None:
        return max(0.0, base_expenses)
    return max(0.0, base_revenue - (base_sde or 0.0))


def _growth_rate(growth_rate_pct: float | None) -> float:
    return max(MIN_GROWTH_RATE, to_number(growth_rate_pct) / 100)


def _projected_sde(base_revenue: float, expenses: float, g: float, t: int) -> tuple[float, float]:
    revenue = base_revenue * (1 + g) ** t
    return revenue, max(0.0, revenue - expenses)


def project_growth(
    base_revenue: float = 0,
    base_sde: float | None = None,
    growth_rate_pct: float = 5,
    years: int = 3,
    multiple: float = 3.0,
    base_expenses: float | None = None,
    asking_price: float | None = None,
) -> GrowthProjection:
    """Year-by-year revenue/SDE/value under compounding revenue and flat expenses.

    Row 0 is today. Expenses default to base revenue minus base SDE.
    """
    r0 = to_number(base_revenue)
    e0 = _base_expenses(r0, to_optional_number(base_sde), to_optional_number(base_expenses))
    g = _growth_rate(growth_rate_pct)
    n = int(clamp(round_half_up(to_number(years, 1.0)), 1, MAX_PROJECTION_YEARS))
    m = max(0.0, to_number(multiple))

    rows: list[ProjectionRow] = []
    for t in range(n + 1):
        revenue, sde = _projected_sde(r0, e0, g, t)
        rows.append(ProjectionRow(
            year_index=t,
            revenue=revenue,
            expenses=e0,
            sde=sde,
            implied_value=sde * m,
        ))

    ask = to_optional_number(asking_price)
    breakeven = None
    if ask is not None:
        breakeven = years_to_justify_price(
            asking_price=ask,
            multiple=m,
            base_revenue=r0,
            base_sde=base_sde,
            growth_rate_pct=growth_rate_pct,
            base_expenses=base_expenses,
        )

    return GrowthProjection(
        rows=rows,
        base_revenue=r0,
        base_expenses=e0,
        growth_rate=g,
        years=n,
        multiple=m,
        added_value=max(0.0, rows[-1].implied_value - rows[0].implied_value),
        asking_price=ask,
        years_to_justify_price=breakeven,
        assumptions=[FLAT_EXPENSE_NOTE],
    )


def years_to_justify_price(
    asking_price: float | None,
    multiple: float | None,
    base_revenue: float | None,
    base_sde: float | None,
    growth_rate_pct: float | None,
    base_expenses: float | None = None,
) -> int | None:
    """First year whose projected SDE x multiple covers the asking price, scanning up to 30 years.

    A linear scan rather than a log solve: the zero floor on SDE is not invertible.
    """
    ask = to_optional_number(asking_price)
    m = to_optional_number(multiple)
    r0 = to_number(base_revenue)
    s0 = to_optional_number(base_sde)
    g = _growth_rate(growth_rate_pct)

    if not ask or ask <= 0 or not m or m <= 0:
        return None
    if g <= 0:
        return None
    if r0 <= 0 and (s0 is None or s0 <= 0):
        return None

    target_sde = ask / m
    e0 = _base_expenses(r0, s0, to_optional_number(base_expenses))
    for t in range(MAX_BREAKEVEN_YEARS + 1):
        _, sde = _projected_sde(r0, e0, g, t)
        if sde >= target_sde:
            logger.debug(f"Asking price {ask:.0f} justified in year {t} at {m}x")
            return t
    return None
