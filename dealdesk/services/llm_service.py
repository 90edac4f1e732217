import asyncio
import logging
import os
import time

from dotenv import load_dotenv
from openai import OpenAI

from dealdesk.models.report import LLMCallLog

load_dotenv()
logger = logging.getLogger(__name__)

# Offer letters should read naturally but stick to the figures they are given.
DEFAULT_TEMPERATURE = 0.4


class LLMService:
    """Thin OpenAI chat wrapper that records every call for the offer audit trail."""

    def __init__(self, client: OpenAI | None = None, model: str | None = None):
        self.client = client or OpenAI(api_key=os.getenv("OPENAI_API_KEY"))
        self.model = model or os.getenv("OPENAI_MODEL", "gpt-4o")
        self.max_tokens = int(os.getenv("OPENAI_MAX_TOKENS", "600"))
        self.call_logs: list[LLMCallLog] = []

    def reset_logs(self) -> None:
        self.call_logs = []

    @property
    def tokens_used(self) -> int:
        return sum(log.tokens_used or 0 for log in self.call_logs)

    async def text_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        step_name: str,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> str:
        """Free-text completion (offer summaries). Runs the blocking client in a worker thread."""
        return await asyncio.to_thread(
            self._complete, system_prompt, user_prompt, step_name, temperature,
        )

    def _complete(self, system_prompt: str, user_prompt: str, step_name: str, temperature: float) -> str:
        start = time.time()
        response = self.client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        duration_ms = (time.time() - start) * 1000

        choice = response.choices[0]
        text = (choice.message.content or "").strip()
        tokens = response.usage.total_tokens if response.usage else None
        if choice.finish_reason == "length":
            logger.warning(f"[{step_name}] completion hit max_tokens={self.max_tokens}; draft may be cut off")

        logger.info(f"[{step_name}] {self.model}: {tokens} tokens in {duration_ms:.0f}ms")
        logger.debug(f"[{step_name}] completion: {text[:500]}")

        self.call_logs.append(LLMCallLog(
            step_name=step_name,
            model=self.model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response=text,
            tokens_used=tokens,
            duration_ms=duration_ms,
        ))
        return text
