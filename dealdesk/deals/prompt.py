from dealdesk.models.deal import DealContext, DealStrategy
from dealdesk.valuation.numeric import format_currency

SYSTEM_PROMPT = (
    "You are an M&A deal maker for main-street business acquisitions. Write plain, confident "
    "business prose. Use only the figures you are given and do not invent new terms."
)


def money(n: float | None) -> str:
    return "N/A" if n is None else format_currency(n)


def _financing_line(context: DealContext) -> str:
    seller = context.seller
    considered = seller.seller_financing.considered
    if considered and considered != "no":
        return f"Seller is open to financing ({considered})."
    return f"Seller financing preference: {seller.financing_preference or 'unspecified'}."


def _gap_line(strategy: DealStrategy) -> str:
    if strategy.gap_pct is None:
        return "Buyer offer price not specified."
    direction = "under" if strategy.gap_pct >= 0 else "over"
    return (
        f"Buyer offer vs ask: ~{strategy.gap_pct}% {direction} ask "
        f"({money(strategy.offer)} vs {money(strategy.ask)})."
    )


def _capital_line(strategy: DealStrategy) -> str:
    if strategy.required_down is None:
        return "Seller down % not specified."
    short = f" (short by ~{money(strategy.down_short)})" if strategy.down_ok is False else ""
    return f"Required down: {money(strategy.required_down)}. Buyer capital: {money(strategy.buyer_capital)}{short}."


def equity_credit_clause(strategy: DealStrategy) -> str | None:
    terms = strategy.recommended
    if not (terms.equity_credit_monthly and terms.equity_credit_cap):
        return None
    return " ".join([
        f"Down-Payment Credit: During the bridge period, {money(terms.equity_credit_monthly)} from each "
        f"monthly payment accrues as Buyer Equity Credit, up to {money(terms.equity_credit_cap)}.",
        "The accrued credit reduces the balloon at refinance (or is applied to principal if the note "
        "converts to amortizing).",
        "Credit accrues only while the account is current; two or more late payments (>15 days) stop "
        "further accrual.",
    ])


def refinance_fallback_clause(context: DealContext, strategy: DealStrategy) -> str | None:
    if strategy.structure != "bridgeBalloon":
        return None
    # Seller term is in years; the fallback amortization is quoted in months, never under 36.
    term_months = (context.seller.seller_financing.term_years or 4) * 12
    return (
        f"If refinance isn't achieved by month {strategy.recommended.balloon_at_month}, note auto-extends "
        f"12 months at a step-up rate or converts to a {max(36, round(term_months))}-month amortization "
        f"at the prevailing rate (buyer's option)."
    )


def build_deal_prompt(context: DealContext, strategy: DealStrategy) -> str:
    """Assemble the offer-summary prompt from listing facts, buyer facts and the resolved strategy."""
    seller = context.seller
    buyer = context.buyer
    terms = strategy.recommended
    is_bridge = strategy.structure == "bridgeBalloon"

    if is_bridge:
        structure_header = (
            f"Bridge-to-Bank Proposal (interest-only {terms.bridge_months} months, then balloon/refi)"
        )
        payment_line = (
            f"- Payments: interest-only for {terms.bridge_months} months, balloon at month "
            f"{terms.balloon_at_month} via bank refinance"
        )
    else:
        structure_header = "Standard Amortizing Seller Note"
        years = seller.seller_financing.term_years or terms.term_years
        payment_line = f"- Payments: amortizing over {years:g} years"

    includes = "Inventory" if seller.includes_inventory else "-"
    if seller.includes_building:
        includes += " + Building"
    cash_pct = f"{terms.cash_down_pct:g}%" if terms.cash_down_pct is not None else "TBD"
    interest = f"{terms.interest_pct:g}" if terms.interest_pct is not None else "TBD"
    employees = f"{seller.employees:g}" if seller.employees is not None else "N/A"

    lines = [
        "You are an M&A deal maker drafting a concise, **seller-friendly** offer summary that also "
        "respects buyer constraints.",
        "",
        "LISTING",
        f"Title: {seller.title}",
        f"Industry: {seller.industry or 'N/A'}",
        f"Location: {seller.location or 'N/A'}",
        f"Asking Price: {money(seller.asking_price)}",
        f"SDE: {money(seller.sde)} | Revenue: {money(seller.annual_revenue)} | Profit: {money(seller.annual_profit)}",
        f"Lease: {money(seller.monthly_lease)} / mo",
        f"Includes: {includes}",
        f"Employees: {employees}",
        _financing_line(context),
        "",
        "BUYER",
        f"Available Capital: {money(buyer.available_capital)}",
        f"Target Purchase Price: {money(buyer.target_purchase_price)}",
        "",
        "FIT CHECK",
        _gap_line(strategy),
        _capital_line(strategy),
        f"Strategy: {strategy.structure.upper()} | Gap bucket: {strategy.gap_bucket.upper()}",
        *[f"- {s}" for s in strategy.suggestions],
        "",
        f"PROPOSED TERMS - {structure_header}",
        f"- Cash down at close: {cash_pct} (~{money(terms.cash_down_at_close)})",
        f"- Seller note: ~{money(terms.note_principal)} at {interest}%",
        payment_line,
    ]

    credit = equity_credit_clause(strategy)
    if credit:
        lines.append(f"- {credit}")
    fallback = refinance_fallback_clause(context, strategy)
    if fallback:
        lines.append(f"- {fallback}")

    lines += [
        "- Security: standard lien/UCC and personal guarantee",
        "- Reporting: monthly P&L and DSCR target to support refinance readiness",
        "",
        "DESCRIPTION",
        seller.description or "No description provided.",
        "",
        "TASK",
        'Draft a short, confident, seller-friendly offer summary following the "PROPOSED TERMS".',
        "Keep it to ~150-220 words. Offer one optional variant (e.g., small earnout or slightly different down %).",
    ]
    return "\n".join(lines)
