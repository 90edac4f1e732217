import itertools

from dealdesk.deals.strategy import (
    BRIDGE, COVENANT_REMINDER, STANDARD, classify_gap, compute_deal_strategy, compute_deal_strategy_for,
)
from dealdesk.models.deal import DEFAULT_POLICY, BuyerContext, DealContext, SellerContext, SellerFinancing


def _seller(ask=500000, down_pct=20, rate=None, term=None):
    return SellerContext(
        asking_price=ask,
        seller_financing=SellerFinancing(down_payment_pct=down_pct, interest_rate_pct=rate, term_years=term),
    )


def _buyer(capital=None, offer=None):
    return BuyerContext(available_capital=capital, target_purchase_price=offer)


def test_full_down_at_ask_is_standard_note():
    s = compute_deal_strategy(_seller(), _buyer(capital=100000, offer=500000))
    assert s.gap_pct == 0
    assert s.gap_bucket == "near"
    assert s.required_down == 100000
    assert s.down_ok is True
    assert s.down_short == 0
    assert s.structure == STANDARD
    assert s.recommended.cash_down_at_close == 100000
    assert s.recommended.cash_down_pct == 20
    assert s.recommended.note_principal == 400000
    assert s.recommended.term_years == 4
    assert s.recommended.interest_pct == 10
    assert s.recommended.bridge_months == 0
    assert s.recommended.balloon_at_month is None
    assert s.recommended.equity_credit_monthly == 0


def test_short_capital_far_offer_bridges_with_equity_credit():
    s = compute_deal_strategy(_seller(), _buyer(capital=40000, offer=350000))
    assert s.gap_pct == 30
    assert s.gap_bucket == "far"
    assert s.down_ok is False
    assert s.down_short == 60000
    assert s.structure == BRIDGE
    assert s.recommended.bridge_months == 24
    assert s.recommended.balloon_at_month == 24
    assert s.recommended.term_years is None
    assert s.recommended.cash_down_at_close == 40000
    assert s.recommended.note_principal == 460000
    assert s.recommended.equity_credit_cap == 60000
    assert s.recommended.equity_credit_monthly == 2500


def test_shortfall_suggestion_quotes_amount():
    s = compute_deal_strategy(_seller(), _buyer(capital=40000, offer=350000))
    assert any("short of the required down by ~$60,000" in line for line in s.suggestions)
    assert s.suggestions[-1] == COVENANT_REMINDER


def test_everything_unknown():
    s = compute_deal_strategy()
    assert s.gap_pct is None
    assert s.gap_bucket == "unknown"
    assert s.required_down is None
    assert s.down_ok is None
    assert s.structure == STANDARD
    assert s.recommended.cash_down_at_close is None
    assert s.recommended.note_principal is None
    assert s.recommended.term_years == 4
    assert s.recommended.interest_pct == 10
    assert s.suggestions == [COVENANT_REMINDER]


def test_moderate_gap_with_enough_capital_uses_default_bridge():
    s = compute_deal_strategy(_seller(), _buyer(capital=200000, offer=400000))
    assert s.gap_bucket == "moderate"
    assert s.down_ok is True
    assert s.structure == BRIDGE
    assert s.recommended.bridge_months == 18
    assert s.recommended.equity_credit_monthly == 0


def test_near_gap_small_shortfall_shortens_bridge():
    s = compute_deal_strategy(_seller(), _buyer(capital=80000, offer=480000))
    assert s.gap_bucket == "near"
    assert s.down_short == 20000
    assert s.recommended.bridge_months == 12
    assert s.recommended.cash_down_at_close == 80000
    assert s.recommended.equity_credit_cap == 20000
    assert s.recommended.equity_credit_monthly == 1667


def test_far_gap_without_capital_still_extends_bridge():
    s = compute_deal_strategy(_seller(), _buyer(offer=300000))
    assert s.gap_bucket == "far"
    assert s.down_ok is None
    assert s.structure == BRIDGE
    assert s.recommended.bridge_months == 24
    assert s.recommended.cash_down_at_close is None


def test_equity_credit_skipped_above_cap():
    s = compute_deal_strategy(_seller(down_pct=30), _buyer(capital=30000, offer=500000))
    assert s.down_short == 120000
    assert s.structure == BRIDGE
    assert s.recommended.bridge_months == 24
    assert s.recommended.equity_credit_monthly == 0
    assert s.recommended.equity_credit_cap == 0


def test_offer_over_ask_gives_negative_gap():
    gap_pct, bucket = classify_gap(500000, 560000)
    assert gap_pct == -12
    assert bucket == "moderate"


def test_min_cash_floor_applies_even_beyond_capital():
    s = compute_deal_strategy(_seller(), _buyer(capital=10000, offer=500000))
    assert s.recommended.cash_down_at_close == 25000
    assert s.recommended.note_principal == 475000


def test_no_down_pct_uses_all_capital():
    s = compute_deal_strategy(_seller(down_pct=None), _buyer(capital=150000, offer=500000))
    assert s.required_down is None
    assert s.down_ok is None
    assert s.structure == STANDARD
    assert s.recommended.cash_down_at_close == 150000
    assert s.recommended.cash_down_pct == 30
    assert s.recommended.note_principal == 350000


def test_capital_above_ask_caps_cash_down():
    s = compute_deal_strategy(_seller(ask=100000, down_pct=None), _buyer(capital=500000))
    assert s.recommended.cash_down_at_close == 100000
    assert s.recommended.note_principal == 0


def test_seller_terms_flow_through():
    s = compute_deal_strategy(_seller(rate=7.5, term=6), _buyer(capital=100000, offer=500000))
    assert s.recommended.interest_pct == 7.5
    assert s.recommended.term_years == 6


def test_policy_override_changes_bucket():
    policy = DEFAULT_POLICY.with_overrides({"near_gap_pct": 5})
    s = compute_deal_strategy(_seller(), _buyer(capital=100000, offer=460000), policy)
    assert s.gap_pct == 8
    assert s.gap_bucket == "moderate"
    assert s.structure == BRIDGE
    assert s.policy.near_gap_pct == 5


def test_policy_override_ignores_garbage():
    policy = DEFAULT_POLICY.with_overrides({"near_gap_pct": "abc", "bogus": 1, "short_bridge_months": "9"})
    assert policy.near_gap_pct == DEFAULT_POLICY.near_gap_pct
    assert policy.short_bridge_months == 9
    assert DEFAULT_POLICY.with_overrides(None) is DEFAULT_POLICY


def test_string_inputs_are_coerced():
    seller = SellerContext(
        asking_price="500,000",
        seller_financing=SellerFinancing(down_payment_pct="20"),
    )
    s = compute_deal_strategy(seller, BuyerContext(available_capital="lots", target_purchase_price="500000"))
    assert s.ask == 500000
    assert s.required_down == 100000
    assert s.buyer_capital is None
    assert s.down_ok is None


def test_context_wrapper_matches():
    ctx = DealContext(seller=_seller(), buyer=_buyer(capital=40000, offer=350000))
    assert compute_deal_strategy_for(ctx) == compute_deal_strategy(ctx.seller, ctx.buyer)


def test_repeatable():
    a = compute_deal_strategy(_seller(), _buyer(capital=40000, offer=350000))
    b = compute_deal_strategy(_seller(), _buyer(capital=40000, offer=350000))
    assert a.model_dump_json() == b.model_dump_json()


def test_structure_invariants_hold_across_inputs():
    asks = [None, 0, 100000, 500000, 1250000]
    offers = [None, 250000, 480000, 500000, 700000]
    capitals = [None, 0, 20000, 100000, 2000000]
    down_pcts = [None, 0, 10, 20, 50]
    for ask, offer, capital, down in itertools.product(asks, offers, capitals, down_pcts):
        s = compute_deal_strategy(_seller(ask=ask, down_pct=down), _buyer(capital=capital, offer=offer))
        terms = s.recommended
        if s.structure == STANDARD:
            assert terms.bridge_months == 0
            assert terms.balloon_at_month is None
        else:
            assert terms.term_years is None
            assert terms.bridge_months >= 1
            assert terms.balloon_at_month == terms.bridge_months
        if ask and terms.cash_down_at_close is not None:
            assert terms.cash_down_at_close <= ask
            assert terms.note_principal == ask - terms.cash_down_at_close
        assert terms.equity_credit_monthly >= 0
