import logging
import math

from dealdesk.models.deal import (
    DEFAULT_POLICY, BuyerContext, DealContext, DealPolicy, DealStrategy, GapBucket,
    RecommendedTerms, SellerContext,
)
from dealdesk.valuation.numeric import format_currency, round_half_up

logger = logging.getLogger(__name__)

BRIDGE = "bridgeBalloon"
STANDARD = "standardAmortizing"

BUCKET_SUGGESTIONS: dict[str, str] = {
    "near": "Position as a fair offer and lean on speed/certainty of close.",
    "moderate": "Propose a midpoint or sweetener (slightly higher down or small earnout).",
    "far": "Frame as value-seeking: structure (earnout or rent-to-own) to bridge price expectations.",
}
COVENANT_REMINDER = (
    "Include simple covenants: monthly P&L, DSCR target, refinance window, and fallback if refi fails."
)


def classify_gap(ask: float | None, offer: float | None, policy: DealPolicy = DEFAULT_POLICY) -> tuple[int | None, GapBucket]:
    """Percent the offer sits under the ask (negative = over) and its bucket."""
    if not ask or not offer:
        return None, "unknown"
    gap_pct = round_half_up((ask - offer) / ask * 100)
    gap = abs(gap_pct)
    if gap <= policy.near_gap_pct:
        return gap_pct, "near"
    if gap <= policy.mod_gap_pct:
        return gap_pct, "moderate"
    return gap_pct, "far"


def _bridge_months(ask: float, down_short: float | None, gap_bucket: str, policy: DealPolicy) -> int:
    """Default bridge, extended for big shortfalls or far gaps, shortened for small near-ask deals."""
    short_pct = down_short / ask * 100 if (ask and down_short is not None) else None
    if (short_pct is not None and short_pct >= policy.extend_shortfall_pct) or gap_bucket == "far":
        return policy.extended_bridge_months
    if short_pct is not None and short_pct <= policy.shorten_shortfall_pct and gap_bucket == "near":
        return policy.short_bridge_months
    return policy.default_bridge_months


def _suggestions(gap_bucket: str, down_ok: bool | None, down_short: float | None) -> list[str]:
    suggestions: list[str] = []
    if gap_bucket in BUCKET_SUGGESTIONS:
        suggestions.append(BUCKET_SUGGESTIONS[gap_bucket])
    if down_ok is False:
        suggestions.append(
            f"Buyer capital is short of the required down by ~{format_currency(down_short)}. "
            "Suggest a bridge-to-bank with a capped equity credit, or mix bank term debt."
        )
    suggestions.append(COVENANT_REMINDER)
    return suggestions


def compute_deal_strategy(
    seller: SellerContext | None = None,
    buyer: BuyerContext | None = None,
    policy: DealPolicy | None = None,
) -> DealStrategy:
    """Resolve a seller's ask/terms and a buyer's capital/offer into a recommended deal structure.

    Missing inputs never raise: the affected fields come back as None and the
    rest of the structure is still filled in consistently.
    """
    seller = seller or SellerContext()
    buyer = buyer or BuyerContext()
    policy = policy or DEFAULT_POLICY
    financing = seller.seller_financing

    ask = seller.asking_price
    offer = buyer.target_purchase_price
    capital = buyer.available_capital
    down_pct = financing.down_payment_pct
    rate_pct = financing.interest_rate_pct if financing.interest_rate_pct is not None else policy.default_note_interest
    term_years = financing.term_years if financing.term_years is not None else policy.default_amort_years

    # Price gap
    gap_pct, gap_bucket = classify_gap(ask, offer, policy)

    # Down payment feasibility
    required_down = None
    down_ok = None
    down_short = None
    if ask and down_pct is not None:
        required_down = round_half_up(down_pct / 100 * ask)
        if capital is not None:
            down_ok = capital >= required_down
            down_short = 0.0 if down_ok else required_down - capital

    use_bridge = down_ok is False or gap_bucket in ("moderate", "far")
    bridge_months = max(1, _bridge_months(ask, down_short, gap_bucket, policy)) if use_bridge else 0

    # Seller always sees some real cash at close
    min_cash_at_close = None
    if ask:
        min_cash_at_close = round_half_up(max(policy.min_cash_at_close_pct, 0) / 100 * ask)

    cash_down = None
    if ask and capital is not None:
        cash_down = min(capital, required_down if required_down is not None else capital)
        cash_down = max(cash_down, min_cash_at_close)
        cash_down = min(cash_down, ask)

    # Equity credit: part of each bridge payment accrues toward the unpaid down
    equity_credit_monthly = 0
    equity_credit_cap = 0.0
    if use_bridge and ask and down_short and cash_down is not None:
        short_now = max(0.0, required_down - cash_down)
        if 0 < short_now and short_now * 100 <= policy.max_equity_credit_pct_of_price * ask:
            equity_credit_cap = short_now
            equity_credit_monthly = math.ceil(equity_credit_cap / bridge_months)

    if ask and cash_down is not None:
        cash_down_pct = round_half_up(cash_down / ask * 100)
        note_principal = ask - cash_down
    else:
        cash_down_pct = down_pct
        note_principal = ask

    structure = BRIDGE if use_bridge else STANDARD
    logger.debug(
        f"Deal strategy: ask={ask}, offer={offer}, gap={gap_pct} ({gap_bucket}), "
        f"required_down={required_down}, capital={capital}, structure={structure}"
    )

    return DealStrategy(
        ask=ask,
        offer=offer,
        gap_pct=gap_pct,
        gap_bucket=gap_bucket,
        down_pct_requested=down_pct,
        required_down=required_down,
        buyer_capital=capital,
        down_ok=down_ok,
        down_short=down_short,
        structure=structure,
        recommended=RecommendedTerms(
            cash_down_at_close=cash_down,
            cash_down_pct=cash_down_pct,
            note_principal=note_principal,
            interest_pct=rate_pct,
            term_years=None if use_bridge else term_years,
            bridge_months=bridge_months,
            balloon_at_month=bridge_months if use_bridge else None,
            equity_credit_monthly=equity_credit_monthly,
            equity_credit_cap=equity_credit_cap,
        ),
        suggestions=_suggestions(gap_bucket, down_ok, down_short),
        policy=policy,
    )


def compute_deal_strategy_for(context: DealContext, policy: DealPolicy | None = None) -> DealStrategy:
    return compute_deal_strategy(context.seller, context.buyer, policy)
