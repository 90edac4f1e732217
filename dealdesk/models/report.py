from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from dealdesk.models.deal import DealStrategy


class LLMCallLog(BaseModel):
    step_name: str
    model: str
    system_prompt: str
    user_prompt: str
    response: str
    tokens_used: Optional[int] = None
    duration_ms: Optional[float] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class OfferDraft(BaseModel):
    text: str
    generated_by: str = Field("llm", description="'llm' or 'fallback'")
    strategy: DealStrategy
    prompt: str
    error: Optional[str] = Field(None, description="Why the fallback draft was used, if it was")
    llm_call_logs: list[LLMCallLog] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
