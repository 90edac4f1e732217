from dealdesk.deals.inputs import to_buyer_context, to_deal_context, to_seller_context, validate_seller_context
from dealdesk.models.deal import SellerContext


def _listing_row(**overrides):
    row = {
        "id": 42,
        "business_name": "Green Acres Lawn",
        "hide_business_name": False,
        "industry": "landscaping",
        "location_city": "Austin",
        "location_state": "TX",
        "asking_price": "450,000",
        "sde": 150000,
        "annual_revenue": "620000",
        "employees": 6,
        "includes_inventory": True,
        "financing_type": "seller-financing",
        "seller_financing_considered": "yes",
        "down_payment": "20",
        "seller_financing_interest_rate": 8,
        "term_length": 5,
        "description_choice": "owner",
        "business_description": "Established residential lawn care route.",
        "ai_description": "AI-written description.",
    }
    row.update(overrides)
    return row


def test_seller_row_mapping():
    seller = to_seller_context(_listing_row())
    assert seller.listing_id == "42"
    assert seller.title == "Green Acres Lawn"
    assert seller.location == "Austin, TX"
    assert seller.asking_price == 450000
    assert seller.annual_revenue == 620000
    assert seller.includes_inventory is True
    assert seller.includes_building is False
    assert seller.financing_preference == "seller-financing"
    assert seller.seller_financing.down_payment_pct == 20
    assert seller.seller_financing.interest_rate_pct == 8
    assert seller.seller_financing.term_years == 5
    assert seller.description == "Established residential lawn care route."


def test_hidden_name_uses_industry_title():
    seller = to_seller_context(_listing_row(hide_business_name=True))
    assert seller.title == "Landscaping Business"
    seller = to_seller_context(_listing_row(hide_business_name=True, industry=None))
    assert seller.title == "Business for Sale"


def test_location_and_description_choices():
    seller = to_seller_context(_listing_row(location="Round Rock, TX", description_choice="ai"))
    assert seller.location == "Round Rock, TX"
    assert seller.description == "AI-written description."
    seller = to_seller_context(_listing_row(location_city=None, location_state=None))
    assert seller.location is None


def test_interest_rate_prefers_primary_column():
    seller = to_seller_context(_listing_row(interest_rate="7.5"))
    assert seller.seller_financing.interest_rate_pct == 7.5
    seller = to_seller_context(_listing_row(interest_rate=""))
    assert seller.seller_financing.interest_rate_pct == 8


def test_empty_row():
    seller = to_seller_context(None)
    assert seller.title == "Business for Sale"
    assert seller.asking_price is None
    assert seller.listing_id is None


def test_validate_seller_context():
    assert validate_seller_context(to_seller_context(_listing_row())) == []
    missing = validate_seller_context(SellerContext())
    assert len(missing) == 5
    assert missing[0] == "asking_price"


def test_buyer_aliases():
    buyer = to_buyer_context({"id": 7, "capital": "75000", "offer_price": 300000})
    assert buyer.buyer_id == "7"
    assert buyer.available_capital == 75000
    assert buyer.target_purchase_price == 300000


def test_buyer_blank_primary_falls_through():
    buyer = to_buyer_context({"available_capital": "", "availableCapital": 50000, "targetPrice": "410,000"})
    assert buyer.available_capital == 50000
    assert buyer.target_purchase_price == 410000
    assert to_buyer_context(None).available_capital is None


def test_to_deal_context():
    ctx = to_deal_context(to_seller_context(_listing_row()), to_buyer_context({"capital": 90000}))
    assert ctx.seller.asking_price == 450000
    assert ctx.buyer.available_capital == 90000
