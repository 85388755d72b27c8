import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from google import genai
from google.genai import types
from ratelimit import limits, RateLimitException

from sommelier import config
from sommelier.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class LLMService(ABC):
    """A remote text-generation capability: instructions + payload + question -> text."""

    def __init__(
        self,
        rate_limit_calls: int = config.RATE_LIMIT_CALLS,
        rate_limit_period: int = config.RATE_LIMIT_PERIOD,
    ):
        self.rate_limit_calls = rate_limit_calls
        self.rate_limit_period = rate_limit_period  # seconds

    @abstractmethod
    async def generate(
        self,
        instructions: str,
        payload: str,
        question: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """Return the model's text answer. Any failure raises UpstreamError."""
        raise NotImplementedError


def build_contents(payload: str, question: str) -> str:
    """Assemble the user turn: the JSON payload followed by the question."""
    return "\n".join([
        "Here is the wine data in JSON:",
        payload,
        "",
        "Customer question:",
        question,
    ])


class GeminiService(LLMService):
    """LLMService backed by the Gemini API through google-genai."""

    TEMPERATURE = 1
    TOP_P = 0.95
    TOP_K = 40

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = config.MODEL_NAME,
        timeout: float = config.TIMEOUT_SECONDS,
        max_output_tokens: int = config.MAX_OUTPUT_TOKENS,
        rate_limit_calls: int = config.RATE_LIMIT_CALLS,
        rate_limit_period: int = config.RATE_LIMIT_PERIOD,
    ):
        super().__init__(rate_limit_calls, rate_limit_period)
        self.api_key = api_key if api_key else config.GOOGLE_API_KEY
        self.model = model
        self.timeout = timeout
        self.max_output_tokens = max_output_tokens
        self.client = self.set_client()
        # Raises RateLimitException instead of sleeping, so the event loop never blocks
        self._enforce_rate_limit = limits(
            calls=self.rate_limit_calls, period=self.rate_limit_period
        )(lambda: None)

    def set_client(self):
        return genai.Client(api_key=self.api_key)

    def build_config(self, instructions: str, max_output_tokens: Optional[int] = None) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=instructions,
            temperature=self.TEMPERATURE,
            top_p=self.TOP_P,
            top_k=self.TOP_K,
            max_output_tokens=max_output_tokens or self.max_output_tokens,
            response_mime_type="text/plain",
        )

    async def generate(
        self,
        instructions: str,
        payload: str,
        question: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        try:
            self._enforce_rate_limit()
        except RateLimitException as e:
            raise UpstreamError(
                f"Completion budget of {self.rate_limit_calls} calls per "
                f"{self.rate_limit_period}s exhausted ({e.period_remaining:.1f}s remaining)"
            ) from e

        logger.info(f"Requesting completion from {self.model}")
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=build_contents(payload, question),
                    config=self.build_config(instructions, max_output_tokens),
                ),
                timeout=self.timeout,
            )
            text = response.text
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Completion timed out after {self.timeout}s") from e
        except Exception as e:
            raise UpstreamError(f"Completion failed: {e}") from e

        if not text or not text.strip():
            raise UpstreamError("Completion returned no text")
        logger.info("Received completion from model.")
        return text
