import logging

from dealdesk.deals.payments import strategy_monthly_payment
from dealdesk.deals.prompt import SYSTEM_PROMPT, build_deal_prompt, equity_credit_clause, money
from dealdesk.deals.strategy import compute_deal_strategy
from dealdesk.models.deal import DealContext, DealPolicy, DealStrategy
from dealdesk.models.report import OfferDraft
from dealdesk.services.llm_service import LLMService

logger = logging.getLogger(__name__)


async def draft_offer(
    context: DealContext,
    llm: LLMService,
    policy: DealPolicy | None = None,
) -> OfferDraft:
    """Resolve the deal, then have the LLM write it up. Falls back to a templated draft if the call fails."""
    strategy = compute_deal_strategy(context.seller, context.buyer, policy)
    prompt = build_deal_prompt(context, strategy)
    llm.reset_logs()

    try:
        text = await llm.text_completion(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=prompt,
            step_name="draft_offer",
        )
    except Exception as e:
        logger.warning(f"Offer drafting failed, using fallback draft: {e}")
        return OfferDraft(
            text=fallback_offer_text(context, strategy),
            generated_by="fallback",
            strategy=strategy,
            prompt=prompt,
            error=str(e),
            llm_call_logs=list(llm.call_logs),
        )

    if not text:
        logger.warning("Offer drafting returned empty text, using fallback draft")
        return OfferDraft(
            text=fallback_offer_text(context, strategy),
            generated_by="fallback",
            strategy=strategy,
            prompt=prompt,
            error="empty completion",
            llm_call_logs=list(llm.call_logs),
        )

    return OfferDraft(
        text=text,
        generated_by="llm",
        strategy=strategy,
        prompt=prompt,
        llm_call_logs=list(llm.call_logs),
    )


def fallback_offer_text(context: DealContext, strategy: DealStrategy) -> str:
    """Plain templated offer used when the LLM is unavailable."""
    terms = strategy.recommended
    parts = [f"Offer for {context.seller.title}"]
    if strategy.offer is not None:
        parts.append(f"Purchase price: {money(strategy.offer)} (asking {money(strategy.ask)})")
    else:
        parts.append(f"Purchase price: {money(strategy.ask)}")
    parts.append(f"Cash down at close: {money(terms.cash_down_at_close)}")
    parts.append(f"Seller note: {money(terms.note_principal)} at {terms.interest_pct:g}%")

    payment = strategy_monthly_payment(strategy, context.seller.seller_financing.term_years)
    if strategy.structure == "bridgeBalloon":
        parts.append(
            f"Interest-only for {terms.bridge_months} months ({money(payment)}/mo), "
            f"balloon at month {terms.balloon_at_month} via bank refinance"
        )
    else:
        parts.append(f"Amortizing over {terms.term_years:g} years ({money(payment)}/mo)")

    credit = equity_credit_clause(strategy)
    if credit:
        parts.append(credit)
    parts.extend(f"- {s}" for s in strategy.suggestions)
    return "\n".join(parts)
