from dealdesk.models.fields import MultipleTriplet
from dealdesk.models.valuations import AdjustmentResult, OpsAdjustment
from dealdesk.valuation.numeric import clamp, to_number

MAX_TOTAL_ADJUSTMENT = 0.75
MULTIPLE_FLOOR = 0.5
GROWTH_PIVOT_PCT = 5.0
CARRY_BUMP = 0.20
MAX_OPS_BUMP = 0.30

# (flag, bump) pairs for the operational sellability checklist.
OPS_BUMPS: tuple[tuple[str, float], ...] = (
    ("has_manager", 0.08),
    ("staff_can_run", 0.07),
    ("documented_sops", 0.06),
    ("systems_in_place", 0.05),
    ("recurring_contracts", 0.05),
    ("diversified_customers", 0.05),
    ("clean_books", 0.05),
)


def compute_adjustments(
    growth_rate_pct: float | None = 4,
    risk_score: float | None = 3,
    owner_dep_score: float | None = 3,
    seller_carry_allowed: bool = False,
) -> AdjustmentResult:
    """Turn qualitative inputs into an additive adjustment to the multiple triplet.

    Scores run 1 (best) to 5 (worst); 3 is neutral. Growth pivots at 5%/yr.
    """
    risk = clamp(to_number(risk_score, 3.0), 1, 5)
    owner = clamp(to_number(owner_dep_score, 3.0), 1, 5)
    g = to_number(growth_rate_pct)

    adjust_risk = (3 - risk) * 0.20  # [-0.40, +0.40]
    adjust_owner = (3 - owner) * 0.15  # [-0.30, +0.30]
    adjust_growth = clamp(((g - GROWTH_PIVOT_PCT) / 10) * 0.50, -0.50, 0.50)
    adjust_carry = CARRY_BUMP if seller_carry_allowed else 0.0

    total = adjust_risk + adjust_owner + adjust_growth + adjust_carry
    total = clamp(total, -MAX_TOTAL_ADJUSTMENT, MAX_TOTAL_ADJUSTMENT)

    return AdjustmentResult(
        risk=adjust_risk,
        owner_dependency=adjust_owner,
        growth=adjust_growth,
        carry=adjust_carry,
        total=total,
    )


def effective_multiples(
    base: MultipleTriplet = (2.5, 3.0, 3.5),
    total_adj: float = 0.0,
) -> MultipleTriplet:
    lo, mid, hi = base
    return (
        max(lo + total_adj, MULTIPLE_FLOOR),
        max(mid + total_adj, MULTIPLE_FLOOR),
        max(hi + total_adj, MULTIPLE_FLOOR),
    )


def compute_ops_adjustment(
    has_manager: bool = False,
    staff_can_run: bool = False,
    documented_sops: bool = False,
    systems_in_place: bool = False,
    recurring_contracts: bool = False,
    diversified_customers: bool = False,
    clean_books: bool = False,
) -> OpsAdjustment:
    """Sellability bump for businesses that can run without the owner."""
    flags = {
        "has_manager": has_manager,
        "staff_can_run": staff_can_run,
        "documented_sops": documented_sops,
        "systems_in_place": systems_in_place,
        "recurring_contracts": recurring_contracts,
        "diversified_customers": diversified_customers,
        "clean_books": clean_books,
    }
    bump = sum(weight for name, weight in OPS_BUMPS if flags[name])
    return OpsAdjustment(
        ops_bump=clamp(bump, 0, MAX_OPS_BUMP),
        ops_score=sum(1 for value in flags.values() if value),
        ops_max=len(OPS_BUMPS),
    )
