import logging

from dealdesk.models.valuations import DCFResult, SensitivityCell
from dealdesk.valuation.numeric import to_number

logger = logging.getLogger(__name__)

HORIZON_YEARS = 5
CARRY_DISCOUNT_REDUCTION_PCT = 2.0
CARRY_DISCOUNT_FLOOR_PCT = 10.0
# (1 + r) must stay positive for discounting to mean anything.
MIN_RATE = -0.99


def _discount_rate(
    discount_rate_pct: float,
    seller_carry_allowed: bool,
    carry_reduction_pct: float = CARRY_DISCOUNT_REDUCTION_PCT,
    carry_floor_pct: float = CARRY_DISCOUNT_FLOOR_PCT,
) -> float:
    """Decimal discount rate; seller carry lowers the buyer's cost of capital, with a floor."""
    r = to_number(discount_rate_pct) / 100
    if seller_carry_allowed:
        r = max(carry_floor_pct / 100, r - carry_reduction_pct / 100)
    return max(MIN_RATE, r)


def _compute_pv(
    sde: float,
    g: float,
    r: float,
    terminal_multiple: float,
) -> tuple[float, list[float], list[float], float, float]:
    """Core 5-year DCF. Returns (gross_pv, cash_flows, discounted, terminal_value, discounted_terminal)."""
    cash_flows: list[float] = []
    discounted: list[float] = []
    pv = 0.0
    cf = sde
    terminal_value = 0.0
    discounted_terminal = 0.0

    for t in range(1, HORIZON_YEARS + 1):
        cf = cf * (1 + g)
        df = (1 + r) ** t
        cash_flows.append(cf)
        discounted.append(cf / df)
        pv += cf / df
        if t == HORIZON_YEARS:
            terminal_value = cf * terminal_multiple
            discounted_terminal = terminal_value / df
            pv += discounted_terminal

    return pv, cash_flows, discounted, terminal_value, discounted_terminal


def _compute_sensitivity_table(
    sde: float,
    g: float,
    base_rate: float,
    base_terminal_multiple: float,
    working_capital: float,
) -> list[SensitivityCell]:
    """5x5 grid: discount rate +/-2 pts x terminal multiple +/-0.5."""
    rate_steps = [base_rate + delta for delta in [-0.02, -0.01, 0.0, 0.01, 0.02]]
    multiple_steps = [base_terminal_multiple + delta for delta in [-0.5, -0.25, 0.0, 0.25, 0.5]]

    cells: list[SensitivityCell] = []
    for r in rate_steps:
        for tm in multiple_steps:
            if r <= MIN_RATE or tm < 0:
                continue
            pv, _, _, _, _ = _compute_pv(sde, g, r, tm)
            cells.append(SensitivityCell(
                discount_rate=round(r, 4),
                terminal_multiple=round(tm, 4),
                present_value=round(max(0.0, pv - working_capital), 2),
            ))
    return cells


def calculate_dcf(
    sde: float = 0,
    growth_rate_pct: float = 4,
    discount_rate_pct: float = 22,
    terminal_multiple: float = 3.0,
    seller_carry_allowed: bool = False,
    working_capital: float = 0,
    carry_reduction_pct: float = CARRY_DISCOUNT_REDUCTION_PCT,
    carry_floor_pct: float = CARRY_DISCOUNT_FLOOR_PCT,
) -> float:
    """Present value of 5 years of SDE plus a terminal multiple on year-5 SDE, net of working capital."""
    g = to_number(growth_rate_pct) / 100
    r = _discount_rate(discount_rate_pct, seller_carry_allowed, carry_reduction_pct, carry_floor_pct)
    pv, _, _, _, _ = _compute_pv(to_number(sde), g, r, to_number(terminal_multiple))
    return max(0.0, pv - to_number(working_capital))


def compute_dcf_valuation(
    sde: float = 0,
    growth_rate_pct: float = 4,
    discount_rate_pct: float = 22,
    terminal_multiple: float = 3.0,
    seller_carry_allowed: bool = False,
    working_capital: float = 0,
    carry_reduction_pct: float = CARRY_DISCOUNT_REDUCTION_PCT,
    carry_floor_pct: float = CARRY_DISCOUNT_FLOOR_PCT,
) -> DCFResult:
    """Same computation as calculate_dcf, with the year-by-year breakdown and a sensitivity grid."""
    sde = to_number(sde)
    g = to_number(growth_rate_pct) / 100
    r = _discount_rate(discount_rate_pct, seller_carry_allowed, carry_reduction_pct, carry_floor_pct)
    tm = to_number(terminal_multiple)
    wc = to_number(working_capital)

    pv, cash_flows, discounted, terminal_value, discounted_terminal = _compute_pv(sde, g, r, tm)
    present_value = max(0.0, pv - wc)
    logger.debug(f"DCF: sde={sde}, g={g:.4f}, r={r:.4f}, tm={tm}, pv={present_value:.2f}")

    return DCFResult(
        present_value=present_value,
        projected_cash_flows=cash_flows,
        discounted_cash_flows=discounted,
        terminal_value=terminal_value,
        discounted_terminal_value=discounted_terminal,
        discount_rate=r,
        growth_rate=g,
        terminal_multiple=tm,
        working_capital=wc,
        sensitivity_table=_compute_sensitivity_table(sde, g, r, tm, wc),
    )
