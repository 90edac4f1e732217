import logging

from dealdesk.models.request import ValuationRequest
from dealdesk.models.valuations import PriceDelta, ValuationBand, ValuationSummary
from dealdesk.valuation.adjustments import compute_adjustments, effective_multiples
from dealdesk.valuation.dcf import compute_dcf_valuation
from dealdesk.valuation.industry import INDUSTRY_MULTIPLES, normalize_industry
from dealdesk.valuation.multiples import (
    DEFAULT_EBITDA_MULTIPLES, DEFAULT_REVENUE_MULTIPLES,
    calculate_ebitda_values, calculate_revenue_values, calculate_sde_multiple_values,
)
from dealdesk.valuation.numeric import format_currency, percent_delta

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "Indicative estimate only, based on common small-business multiples and the inputs provided. "
    "Not an appraisal, fairness opinion, or guarantee of sale price."
)


def compute_sde(request: ValuationRequest) -> float:
    """Revenue minus expenses plus owner and personal add-backs, floored at zero."""
    return max(
        0.0,
        request.annual_revenue - request.annual_expenses
        + request.owner_salary_addback + request.personal_addbacks,
    )


def _score(value: float) -> float:
    """Blank or zero scores read as neutral (3)."""
    return value or 3.0


def _band_line(label: str, band: ValuationBand) -> str:
    return (
        f"{label}: Low {format_currency(band.low)}, Base {format_currency(band.base)}, "
        f"High {format_currency(band.high)}"
    )


def _deltas(sde_values: ValuationBand, dcf_value: float, asking: float) -> dict[str, PriceDelta]:
    points = {
        "sde_low": sde_values.low,
        "sde_base": sde_values.base,
        "sde_high": sde_values.high,
        "dcf": dcf_value,
    }
    return {
        name: PriceDelta(amount=value - asking, percent=percent_delta(value, asking))
        for name, value in points.items()
    }


def build_valuation_summary(request: ValuationRequest) -> ValuationSummary:
    """Run every valuation method over one set of owner inputs and summarize against the asking price."""
    sde_computed = compute_sde(request)
    sde_used = request.sde_override or sde_computed or 0.0

    industry_key = normalize_industry(request.industry)
    base_multiples = request.industry_multiples or INDUSTRY_MULTIPLES[industry_key]

    adjustments = compute_adjustments(
        growth_rate_pct=request.growth_rate_pct,
        risk_score=_score(request.risk_score),
        owner_dep_score=_score(request.owner_dependency_score),
        seller_carry_allowed=request.seller_carry_allowed,
    )
    effective = effective_multiples(base_multiples, adjustments.total)
    wc = request.working_capital

    sde_values = calculate_sde_multiple_values(sde=sde_used, multiples=effective, working_capital=wc)

    ebitda_values = None
    revenue_values = None
    if request.include_ebitda_revenue_methods:
        ebitda_values = calculate_ebitda_values(
            ebitda=request.ebitda_override or sde_used,
            multiples=request.ebitda_multiples or DEFAULT_EBITDA_MULTIPLES,
            working_capital=wc,
        )
        revenue_values = calculate_revenue_values(
            revenue=request.annual_revenue,
            multiples=request.revenue_multiples or DEFAULT_REVENUE_MULTIPLES,
            working_capital=wc,
        )

    dcf = compute_dcf_valuation(
        sde=sde_used,
        growth_rate_pct=request.growth_rate_pct,
        discount_rate_pct=request.discount_rate_pct,
        terminal_multiple=request.terminal_multiple or 3.0,
        seller_carry_allowed=request.seller_carry_allowed,
        working_capital=wc,
    )

    asking = request.asking_price if request.asking_price and request.asking_price > 0 else None
    deltas = _deltas(sde_values, dcf.present_value, asking) if asking else None

    logger.info(
        f"Valuation for '{request.business_name or 'unnamed'}': industry={industry_key}, "
        f"sde={sde_used:.0f}, adj={adjustments.total:+.2f}, base={sde_values.base:.0f}, "
        f"dcf={dcf.present_value:.0f}"
    )

    summary_text = _summary_text(
        request, sde_used, effective, sde_values, ebitda_values, revenue_values, dcf.present_value, asking,
    )

    return ValuationSummary(
        industry=industry_key,
        industry_label=request.industry,
        industry_multiples=base_multiples,
        sde_computed=sde_computed,
        sde_used=sde_used,
        adjustments=adjustments,
        effective_multiples=effective,
        sde_multiple_values=sde_values,
        ebitda_values=ebitda_values,
        revenue_values=revenue_values,
        dcf=dcf,
        working_capital_applied=wc,
        asking_price=asking,
        deltas_vs_asking=deltas,
        recommended_method="SDE base",
        recommended_value=sde_values.base,
        summary_text=summary_text,
        disclaimer=DISCLAIMER,
    )


def _summary_text(
    request: ValuationRequest,
    sde_used: float,
    effective: tuple[float, float, float],
    sde_values: ValuationBand,
    ebitda_values: ValuationBand | None,
    revenue_values: ValuationBand | None,
    dcf_value: float,
    asking: float | None,
) -> str:
    lines = [f"Valuation Summary{f' for {request.business_name}' if request.business_name else ''}"]
    place = ", ".join(p for p in (request.city, request.state_or_province) if p)
    if place:
        lines.append(place)
    lines.append(f"Industry: {request.industry}")
    lines.append("")
    lines.append(f"SDE used: {format_currency(sde_used)} (computed or manual)")
    lines.append(
        f"Industry multiples (adjusted): Low {effective[0]:.2f}x | Base {effective[1]:.2f}x | High {effective[2]:.2f}x"
    )
    lines.append(_band_line("SDE results", sde_values))
    if ebitda_values:
        lines.append(_band_line("EBITDA method", ebitda_values))
    if revenue_values:
        lines.append(_band_line("Revenue method", revenue_values))
    carry_note = " with carry adj." if request.seller_carry_allowed else ""
    lines.append(
        f"DCF (5y, terminal {request.terminal_multiple:.1f}x, growth {request.growth_rate_pct:g}%, "
        f"discount {request.discount_rate_pct:g}%{carry_note}): {format_currency(dcf_value)}"
    )
    if asking:
        lines.append("")
        lines.append(f"Your target asking price: {format_currency(asking)}")
        lines.append(
            f"Delta vs Asking - SDE Base: {format_currency(sde_values.base - asking)} "
            f"({percent_delta(sde_values.base, asking):.1f}%)"
        )
    lines.append("")
    lines.append(
        f"Notes: Working capital {format_currency(request.working_capital)}. "
        f"Risk {_score(request.risk_score):g}/5, Owner-dependency {_score(request.owner_dependency_score):g}/5. "
        f"Seller carry {'YES' if request.seller_carry_allowed else 'NO'}."
    )
    return "\n".join(lines)
