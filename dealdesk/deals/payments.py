from dealdesk.models.deal import DealStrategy
from dealdesk.valuation.numeric import to_optional_number


def monthly_payment(principal: float | None, annual_rate_pct: float | None, months: float | None) -> float | None:
    """Standard amortizing payment P*r / (1 - (1+r)^-n) with a monthly rate.

    None when any input is missing or zero; a zero rate degrades to straight-line.
    """
    p = to_optional_number(principal)
    rate = to_optional_number(annual_rate_pct)
    n = to_optional_number(months)
    if not p or not rate or not n:
        return None
    r = rate / 100 / 12
    if r == 0:
        return p / n
    return p * r / (1 - (1 + r) ** -n)


def interest_only_payment(principal: float | None, annual_rate_pct: float | None) -> float | None:
    p = to_optional_number(principal)
    rate = to_optional_number(annual_rate_pct)
    if not p or not rate:
        return None
    return p * rate / 100 / 12


def strategy_monthly_payment(strategy: DealStrategy, seller_term_years: float | None = None) -> float | None:
    """What the buyer pays each month under the recommended terms.

    Interest-only while bridging; otherwise amortizing over the seller's term,
    then the recommended term, then four years.
    """
    terms = strategy.recommended
    if strategy.structure == "bridgeBalloon":
        return interest_only_payment(terms.note_principal, terms.interest_pct)
    years = seller_term_years or terms.term_years or 4
    return monthly_payment(terms.note_principal, terms.interest_pct, years * 12)
