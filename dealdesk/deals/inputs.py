"""Normalize marketplace listing and buyer rows into the contexts the deal resolver reads."""
from typing import Any, Mapping

from dealdesk.models.deal import BuyerContext, DealContext, SellerContext, SellerFinancing
from dealdesk.valuation.numeric import to_optional_number


def _first_number(row: Mapping[str, Any], *keys: str) -> float | None:
    for key in keys:
        value = to_optional_number(row.get(key))
        if value is not None:
            return value
    return None


def _as_id(value: Any) -> str | None:
    return None if value is None else str(value)


def _listing_title(row: Mapping[str, Any]) -> str:
    name = row.get("business_name")
    if name and not row.get("hide_business_name"):
        return name
    industry = row.get("industry")
    if isinstance(industry, str) and industry:
        return f"{industry[0].upper()}{industry[1:]} Business"
    return "Business for Sale"


def to_seller_context(row: Mapping[str, Any] | None = None) -> SellerContext:
    """Map a `sellers` listing row to a SellerContext."""
    row = row or {}
    location = (
        row.get("location")
        or ", ".join(p for p in (row.get("location_city"), row.get("location_state")) if p)
        or None
    )
    if row.get("description_choice") == "ai":
        description = row.get("ai_description") or ""
    else:
        description = row.get("business_description") or ""

    return SellerContext(
        listing_id=_as_id(row.get("id")),
        title=_listing_title(row),
        industry=row.get("industry"),
        location=location,
        asking_price=row.get("asking_price"),
        sde=row.get("sde"),
        annual_revenue=row.get("annual_revenue"),
        annual_profit=row.get("annual_profit"),
        monthly_lease=row.get("monthly_lease"),
        employees=row.get("employees"),
        includes_inventory=bool(row.get("includes_inventory")),
        includes_building=bool(row.get("includes_building")),
        financing_preference=row.get("financing_type") or row.get("financing_preference"),
        seller_financing=SellerFinancing(
            considered=row.get("seller_financing_considered"),
            down_payment_pct=row.get("down_payment"),
            interest_rate_pct=_first_number(row, "interest_rate", "seller_financing_interest_rate"),
            term_years=row.get("term_length"),
        ),
        description=description,
    )


def validate_seller_context(seller: SellerContext) -> list[str]:
    """Fields that are missing or strongly recommended for a useful deal write-up."""
    missing: list[str] = []
    if not seller.asking_price:
        missing.append("asking_price")
    if not seller.sde and not seller.annual_profit and not seller.annual_revenue:
        missing.append("sde|annual_profit|annual_revenue (need one)")
    if not seller.industry:
        missing.append("industry")
    if not seller.location:
        missing.append("location")
    if not seller.financing_preference and not seller.seller_financing.considered:
        missing.append("financing_preference|seller_financing.considered (need one)")
    return missing


def to_buyer_context(row: Mapping[str, Any] | None = None) -> BuyerContext:
    """Map a `buyers` row (or a loose form payload) to a BuyerContext."""
    row = row or {}
    return BuyerContext(
        buyer_id=_as_id(row.get("id")),
        available_capital=_first_number(row, "available_capital", "availableCapital", "capital"),
        target_purchase_price=_first_number(
            row, "target_purchase_price", "purchase_price", "offer_price", "targetPrice",
        ),
        preferred_financing=row.get("preferred_financing") or row.get("financing_preference"),
    )


def to_deal_context(seller: SellerContext, buyer: BuyerContext) -> DealContext:
    return DealContext(seller=seller, buyer=buyer)
