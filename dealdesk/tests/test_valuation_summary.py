import pytest

from dealdesk.models.request import ValuationRequest
from dealdesk.valuation.blender import DISCLAIMER, build_valuation_summary, compute_sde
from dealdesk.valuation.dcf import calculate_dcf


def _request(**overrides):
    fields = dict(
        business_name="Green Acres Lawn",
        city="Austin",
        state_or_province="TX",
        industry="Landscaping",
        annual_revenue=600000,
        annual_expenses=500000,
        owner_salary_addback=60000,
        growth_rate_pct=5,
    )
    fields.update(overrides)
    return ValuationRequest(**fields)


def test_compute_sde():
    assert compute_sde(_request()) == 160000
    assert compute_sde(_request(annual_expenses=900000)) == 0


def test_sde_band_uses_adjusted_industry_multiples():
    summary = build_valuation_summary(_request())
    assert summary.industry == "landscaping"
    assert summary.industry_multiples == (2.0, 2.7, 3.5)
    assert summary.adjustments.total == 0
    assert summary.sde_used == 160000
    assert summary.sde_multiple_values.low == pytest.approx(320000)
    assert summary.sde_multiple_values.base == pytest.approx(432000)
    assert summary.sde_multiple_values.high == pytest.approx(560000)
    assert summary.recommended_method == "SDE base"
    assert summary.recommended_value == summary.sde_multiple_values.base
    assert summary.disclaimer == DISCLAIMER


def test_sde_override_wins():
    summary = build_valuation_summary(_request(sde_override=100000))
    assert summary.sde_computed == 160000
    assert summary.sde_used == 100000


def test_custom_multiples_win():
    summary = build_valuation_summary(_request(industry_multiples=(1.0, 2.0, 3.0)))
    assert summary.effective_multiples == (1.0, 2.0, 3.0)
    assert summary.sde_multiple_values.base == pytest.approx(320000)


def test_adjustments_shift_multiples():
    summary = build_valuation_summary(_request(risk_score=1, owner_dependency_score=1, seller_carry_allowed=True))
    assert summary.adjustments.total == 0.75
    assert summary.effective_multiples == pytest.approx((2.75, 3.45, 4.25))


def test_optional_methods():
    assert build_valuation_summary(_request()).ebitda_values is None
    summary = build_valuation_summary(_request(include_ebitda_revenue_methods=True))
    assert summary.ebitda_values.base == pytest.approx(160000 * 4.0)
    assert summary.revenue_values.base == pytest.approx(600000 * 1.0)


def test_dcf_matches_scalar():
    summary = build_valuation_summary(_request(working_capital=20000))
    expected = calculate_dcf(160000, 5, 22, 3, False, 20000)
    assert summary.dcf.present_value == pytest.approx(expected)
    assert summary.working_capital_applied == 20000


def test_deltas_vs_asking():
    summary = build_valuation_summary(_request(asking_price=400000))
    base = summary.sde_multiple_values.base
    assert set(summary.deltas_vs_asking) == {"sde_low", "sde_base", "sde_high", "dcf"}
    assert summary.deltas_vs_asking["sde_base"].amount == pytest.approx(base - 400000)
    assert summary.deltas_vs_asking["sde_base"].percent == pytest.approx((base - 400000) / 400000 * 100)
    assert build_valuation_summary(_request()).deltas_vs_asking is None
    assert build_valuation_summary(_request(asking_price=0)).asking_price is None


def test_summary_text():
    text = build_valuation_summary(_request(asking_price=400000)).summary_text
    assert text.startswith("Valuation Summary for Green Acres Lawn")
    assert "Austin, TX" in text
    assert "SDE used: $160,000" in text
    assert "Your target asking price: $400,000" in text
    assert "Seller carry NO." in text


def test_garbage_inputs_degrade():
    summary = build_valuation_summary(
        ValuationRequest(industry="", annual_revenue="abc", risk_score="", owner_dependency_score=None)
    )
    assert summary.industry == "fallback"
    assert summary.sde_used == 0
    assert summary.sde_multiple_values.base == 0
    assert summary.dcf.present_value == 0
    assert "Risk 3/5" in summary.summary_text


def test_repeatable():
    a = build_valuation_summary(_request(asking_price=400000))
    b = build_valuation_summary(_request(asking_price=400000))
    assert a.model_dump_json() == b.model_dump_json()
