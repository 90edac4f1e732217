import logging

from fastapi import APIRouter, Depends

from dealdesk.api.dependencies import get_llm_service
from dealdesk.deals.offer import draft_offer
from dealdesk.deals.prompt import build_deal_prompt
from dealdesk.deals.strategy import compute_deal_strategy
from dealdesk.models.deal import DEFAULT_POLICY, DealContext, DealPolicy, DealStrategy
from dealdesk.models.projection import GrowthProjection
from dealdesk.models.report import OfferDraft
from dealdesk.models.request import (
    BuyerEconomicsRequest, DCFRequest, DealRequest, GrowthRequest, ValuationRequest,
)
from dealdesk.models.valuations import BuyerEconomicsResult, DCFResult, ValuationSummary
from dealdesk.services.llm_service import LLMService
from dealdesk.valuation.blender import build_valuation_summary
from dealdesk.valuation.buyer import compute_buyer_economics
from dealdesk.valuation.dcf import compute_dcf_valuation
from dealdesk.valuation.growth import project_growth
from dealdesk.valuation.industry import INDUSTRY_MULTIPLES

logger = logging.getLogger(__name__)

valuations_router = APIRouter(prefix="/api/valuations", tags=["valuations"])
growth_router = APIRouter(prefix="/api/growth", tags=["growth"])
deals_router = APIRouter(prefix="/api/deals", tags=["deals"])


def _policy(body: DealRequest) -> DealPolicy:
    return DEFAULT_POLICY.with_overrides(body.policy_overrides)


@valuations_router.post("", response_model=ValuationSummary)
async def create_valuation(request: ValuationRequest):
    """Run every valuation method over the owner's inputs."""
    return build_valuation_summary(request)


@valuations_router.post("/dcf", response_model=DCFResult)
async def dcf_valuation(request: DCFRequest):
    return compute_dcf_valuation(**request.model_dump())


@valuations_router.post("/buyer-economics", response_model=BuyerEconomicsResult)
async def buyer_economics(request: BuyerEconomicsRequest):
    """Debt service, DSCR and payback at a given price, plus the price caps for the targets."""
    return compute_buyer_economics(**request.model_dump())


@valuations_router.get("/industries")
async def list_industries():
    """Static SDE multiple table, keyed by normalized industry."""
    return {
        key: {"low": lo, "mid": mid, "high": hi}
        for key, (lo, mid, hi) in INDUSTRY_MULTIPLES.items()
    }


@growth_router.post("", response_model=GrowthProjection)
async def growth_projection(request: GrowthRequest):
    return project_growth(**request.model_dump())


@deals_router.post("/strategy", response_model=DealStrategy)
async def deal_strategy(body: DealRequest):
    return compute_deal_strategy(body.seller, body.buyer, _policy(body))


@deals_router.post("/prompt")
async def deal_prompt(body: DealRequest):
    """The offer-letter prompt exactly as it would be sent to the LLM."""
    context = DealContext(seller=body.seller, buyer=body.buyer)
    strategy = compute_deal_strategy(body.seller, body.buyer, _policy(body))
    return {"prompt": build_deal_prompt(context, strategy), "strategy": strategy}


@deals_router.post("/offer", response_model=OfferDraft)
async def deal_offer(
    body: DealRequest,
    llm: LLMService = Depends(get_llm_service),
):
    """Resolve the deal structure and draft a seller-facing offer summary."""
    context = DealContext(seller=body.seller, buyer=body.buyer)
    draft = await draft_offer(context, llm, _policy(body))
    logger.info(f"Offer drafted for '{body.seller.title}' via {draft.generated_by}")
    return draft
