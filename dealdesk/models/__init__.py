from dealdesk.models.fields import LooseNumber, Number, MultipleTriplet
from dealdesk.models.valuations import (
    EarningsBasis, AdjustmentResult, OpsAdjustment, ValuationBand, SensitivityCell,
    DCFResult, PriceDelta, BuyerEconomicsResult, ANAVResult, ValuationSummary,
)
from dealdesk.models.projection import ProjectionRow, GrowthProjection
from dealdesk.models.deal import (
    SellerFinancing, SellerContext, BuyerContext, DealContext,
    DealPolicy, DEFAULT_POLICY, RecommendedTerms, DealStrategy,
)
from dealdesk.models.request import (
    ValuationRequest, DCFRequest, GrowthRequest, BuyerEconomicsRequest, DealRequest,
)
from dealdesk.models.report import LLMCallLog, OfferDraft

__all__ = [
    "LooseNumber", "Number", "MultipleTriplet",
    "EarningsBasis", "AdjustmentResult", "OpsAdjustment", "ValuationBand", "SensitivityCell",
    "DCFResult", "PriceDelta", "BuyerEconomicsResult", "ANAVResult", "ValuationSummary",
    "ProjectionRow", "GrowthProjection",
    "SellerFinancing", "SellerContext", "BuyerContext", "DealContext",
    "DealPolicy", "DEFAULT_POLICY", "RecommendedTerms", "DealStrategy",
    "ValuationRequest", "DCFRequest", "GrowthRequest", "BuyerEconomicsRequest", "DealRequest",
    "LLMCallLog", "OfferDraft",
]
