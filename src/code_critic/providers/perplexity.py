# src/code_critic/providers/perplexity.py
import logging
import openai
from openai import AsyncOpenAI
from .base import LLMProvider
from code_critic.errors import UpstreamServiceError


logger = logging.getLogger(__name__)


class PerplexityProvider(LLMProvider):
    BASE_URL = "https://api.perplexity.ai"
    TEMPERATURE = 0.7
    MAX_TOKENS = 2000

    def __init__(self, api_key: str, model: str = "sonar-pro", timeout: float = 60.0):
        self.model = model
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.BASE_URL,
            timeout=timeout,
            max_retries=0,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_TOKENS,
            )
        except openai.APIStatusError as e:
            raise UpstreamServiceError(
                f"Perplexity API Error: {e.status_code} {e.response.text}",
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except openai.APIConnectionError as e:
            raise UpstreamServiceError(f"Perplexity API unreachable: {e}") from e

        text = response.choices[0].message.content or ""
        logger.info(f"Perplexity response length: {len(text)} chars")
        return text
