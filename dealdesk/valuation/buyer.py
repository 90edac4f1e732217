"""Buyer-side economics: debt service, DSCR, payback and the price a deal can carry."""
import math

from dealdesk.models.valuations import ANAVResult, BuyerEconomicsResult
from dealdesk.valuation.numeric import clamp, round_down_to, round_half_up, to_number

MAX_PRICE_SEARCH = 10_000_000
BISECTION_STEPS = 60


def _non_negative(value) -> float:
    return max(0.0, to_number(value))


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def loan_payment_annual(principal: float = 0, annual_rate_pct: float = 0, years: float = 1) -> float:
    """Annual debt service on a monthly-amortizing loan."""
    loan = _non_negative(principal)
    r_annual = _non_negative(annual_rate_pct) / 100
    n_months = max(1, round_half_up(to_number(years) * 12))
    if loan == 0:
        return 0.0
    if r_annual == 0:
        return loan / n_months * 12
    r = r_annual / 12
    monthly = (r * loan) / (1 - (1 + r) ** -n_months)
    return monthly * 12


def _operating_cash_flow(sde: float, manager_wage: float, capex_reserve: float) -> float:
    return max(0.0, _non_negative(sde) - _non_negative(manager_wage) - _non_negative(capex_reserve))


def max_price_for_target_dscr(
    sde: float = 0,
    manager_wage: float = 0,
    capex_reserve: float = 0,
    down_payment_pct: float = 0.2,
    interest_pct: float = 10,
    loan_years: float = 5,
    target_dscr: float = 1.25,
) -> float:
    """Highest price whose financed portion still clears the DSCR target (bisection)."""
    dp = clamp(to_number(down_payment_pct), 0, 1)
    ocf = _operating_cash_flow(sde, manager_wage, capex_reserve)
    if ocf <= 0:
        return 0.0

    lo, hi = 0.0, float(MAX_PRICE_SEARCH)
    for _ in range(BISECTION_STEPS):
        mid = (lo + hi) / 2
        debt = mid - mid * dp
        ads = loan_payment_annual(debt, interest_pct, loan_years)
        dscr = ocf / ads if ads > 0 else math.inf
        if dscr >= to_number(target_dscr):
            lo = mid
        else:
            hi = mid
    return float(round_half_up(lo))


def max_price_for_managed_payback(
    sde: float = 0,
    manager_wage: float = 0,
    capex_reserve: float = 0,
    target_years: float = 3,
) -> float:
    managed = _operating_cash_flow(sde, manager_wage, capex_reserve)
    if managed <= 0:
        return 0.0
    return float(round_half_up(managed * to_number(target_years)))


def compute_buyer_economics(
    price: float = 0,
    sde: float = 0,
    manager_wage: float = 0,
    capex_reserve: float = 0,
    down_payment_pct: float = 0.2,
    interest_pct: float = 10,
    loan_years: float = 5,
    working_capital: float = 0,
    closing_costs: float = 0,
    target_dscr: float | None = None,
    target_payback_years: float | None = None,
) -> BuyerEconomicsResult:
    """Year-one economics of buying at `price`. Ratios with a zero denominator come back as None."""
    p = _non_negative(price)
    s = _non_negative(sde)
    dp = clamp(to_number(down_payment_pct), 0, 1)

    equity = p * dp + _non_negative(working_capital) + _non_negative(closing_costs)
    debt = max(0.0, p - p * dp)
    annual_debt_service = loan_payment_annual(debt, to_number(interest_pct), to_number(loan_years))
    ocf = _operating_cash_flow(sde, manager_wage, capex_reserve)
    dscr = ocf / annual_debt_service if annual_debt_service > 0 else math.inf
    fcf_to_equity = ocf - annual_debt_service
    cash_on_cash = fcf_to_equity / equity if equity > 0 else math.inf
    operator_payback = p / s if s > 0 else math.inf
    managed_payback = p / ocf if ocf > 0 else math.inf

    dscr_cap = None
    if target_dscr is not None:
        dscr_cap = max_price_for_target_dscr(
            sde, manager_wage, capex_reserve, down_payment_pct, interest_pct, loan_years, target_dscr,
        )
    payback_cap = None
    if target_payback_years is not None:
        payback_cap = max_price_for_managed_payback(sde, manager_wage, capex_reserve, target_payback_years)

    return BuyerEconomicsResult(
        equity=equity,
        debt=debt,
        annual_debt_service=annual_debt_service,
        ocf_before_debt=ocf,
        dscr=_finite_or_none(dscr),
        fcf_to_equity_yr1=fcf_to_equity,
        cash_on_cash_yr1=_finite_or_none(cash_on_cash),
        operator_payback_years=_finite_or_none(operator_payback),
        managed_payback_years=_finite_or_none(managed_payback),
        max_price_for_target_dscr=dscr_cap,
        max_price_for_managed_payback=payback_cap,
    )


def compute_anav(
    essential_fmv: float = 0,
    surplus_fmv: float = 0,
    inventory_cost: float = 0,
    liabilities: float = 0,
    olv_factor: float = 0.75,
) -> ANAVResult:
    """Adjusted net asset value: tangible FMV, an orderly-liquidation ballpark, and asset-only net proceeds."""
    olv_pct = clamp(to_number(olv_factor, 0.75) or 0.75, 0, 1)
    fmv = _non_negative(essential_fmv) + _non_negative(surplus_fmv) + _non_negative(inventory_cost)
    return ANAVResult(
        anav_fmv=fmv,
        anav_olv=fmv * olv_pct,
        net_proceeds_if_sold_assets_only=max(0.0, fmv - _non_negative(liabilities)),
    )


def recommended_price(
    obv_base: float = 0,
    dscr_cap: float | None = None,
    payback_cap: float | None = None,
    safety_pad: float = 0.9,
    step: float = 5000,
) -> float:
    """Lowest of the earnings value and the padded DSCR/payback caps, rounded down to `step`."""
    pad = to_number(safety_pad, 1.0) or 1.0
    limits = [to_number(obv_base)]
    for cap in (dscr_cap, payback_cap):
        if cap is not None and math.isfinite(cap):
            limits.append(cap * pad)
    return round_down_to(max(0.0, min(limits)), step)


def is_asset_heavy(anav_fmv: float = 0, obv_base: float = 0, threshold: float = 1.3) -> bool:
    """True when tangible assets outweigh the earnings-based value by the threshold ratio."""
    a = to_number(anav_fmv)
    o = to_number(obv_base)
    if o <= 0:
        return True
    return a > o * (to_number(threshold, 1.3) or 1.3)
