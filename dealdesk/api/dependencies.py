from functools import lru_cache

from dealdesk.services.llm_service import LLMService


@lru_cache
def get_llm_service() -> LLMService:
    return LLMService()
