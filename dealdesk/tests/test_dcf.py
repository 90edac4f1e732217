import pytest

from dealdesk.valuation.dcf import calculate_dcf, compute_dcf_valuation


def _hand_dcf(sde, g, r, tm):
    pv = 0.0
    cf = sde
    for t in range(1, 6):
        cf *= 1 + g
        pv += cf / (1 + r) ** t
    return pv + cf * tm / (1 + r) ** 5


def test_basic_dcf():
    value = calculate_dcf(sde=100000, growth_rate_pct=5, discount_rate_pct=22, terminal_multiple=3)
    assert value > 0
    assert value == pytest.approx(_hand_dcf(100000, 0.05, 0.22, 3), abs=0.01)


def test_repeatable():
    a = calculate_dcf(100000, 5, 22, 3)
    b = calculate_dcf(100000, 5, 22, 3)
    assert a == b


def test_seller_carry_lowers_discount_rate():
    carried = calculate_dcf(100000, 5, 22, 3, seller_carry_allowed=True)
    assert carried == pytest.approx(calculate_dcf(100000, 5, 20, 3))
    assert carried > calculate_dcf(100000, 5, 22, 3)


def test_seller_carry_discount_floor():
    assert calculate_dcf(100000, 5, 11, 3, seller_carry_allowed=True) == pytest.approx(
        calculate_dcf(100000, 5, 10, 3)
    )


def test_carry_constants_are_overridable():
    value = calculate_dcf(100000, 5, 22, 3, seller_carry_allowed=True, carry_reduction_pct=5)
    assert value == pytest.approx(calculate_dcf(100000, 5, 17, 3))


def test_working_capital_floor():
    assert calculate_dcf(10000, 0, 22, 3, working_capital=1_000_000) == 0
    gross = calculate_dcf(100000, 5, 22, 3)
    assert calculate_dcf(100000, 5, 22, 3, working_capital=50000) == pytest.approx(gross - 50000)


def test_zero_sde():
    assert calculate_dcf(0, 5, 22, 3) == 0


def test_breakdown_matches_scalar():
    result = compute_dcf_valuation(sde=100000, growth_rate_pct=5, discount_rate_pct=22, terminal_multiple=3)
    assert result.present_value == pytest.approx(calculate_dcf(100000, 5, 22, 3))
    assert len(result.projected_cash_flows) == 5
    assert len(result.discounted_cash_flows) == 5
    assert result.projected_cash_flows[0] == pytest.approx(105000)
    assert result.terminal_value == pytest.approx(result.projected_cash_flows[-1] * 3)
    assert sum(result.discounted_cash_flows) + result.discounted_terminal_value == pytest.approx(
        result.present_value
    )
    assert result.discount_rate == pytest.approx(0.22)
    assert result.growth_rate == pytest.approx(0.05)


def test_sensitivity_table():
    result = compute_dcf_valuation(sde=100000, growth_rate_pct=5, discount_rate_pct=22, terminal_multiple=3)
    assert len(result.sensitivity_table) == 25
    base = [
        c for c in result.sensitivity_table
        if abs(c.discount_rate - 0.22) < 1e-9 and abs(c.terminal_multiple - 3.0) < 1e-9
    ]
    assert len(base) == 1
    assert base[0].present_value == pytest.approx(result.present_value, abs=0.01)
    # Higher discount rate, lower value
    by_rate = sorted(
        (c for c in result.sensitivity_table if abs(c.terminal_multiple - 3.0) < 1e-9),
        key=lambda c: c.discount_rate,
    )
    values = [c.present_value for c in by_rate]
    assert values == sorted(values, reverse=True)


def test_string_inputs():
    assert calculate_dcf("100,000", "5", "22", "3") == pytest.approx(calculate_dcf(100000, 5, 22, 3))
