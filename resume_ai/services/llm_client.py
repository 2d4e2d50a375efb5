"""OpenAI chat-completions client exposing the pipeline's ``invoke(system, user)`` contract."""

from typing import Optional

from openai import AsyncOpenAI

from resume_ai.config import LLM_MAX_TOKENS, LLM_TEMPERATURE, LLM_TIMEOUT_SECONDS, MODEL_NAME, OPENAI_API_KEY
from resume_ai.errors import AI_PROCESSING_FAILED, ExtractionFailure
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAIModelClient:
    """
    One blocking completion per call, no retry. API errors and empty completions
    surface as ExtractionFailure(AI_PROCESSING_FAILED).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = MODEL_NAME,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = LLM_MAX_TOKENS,
        timeout: float = LLM_TIMEOUT_SECONDS,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or AsyncOpenAI(api_key=api_key or OPENAI_API_KEY, timeout=timeout, max_retries=0)

    async def invoke(self, system_message: str, user_prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_message},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.exception("Model call failed (%s): %s", self.model, e)
            raise ExtractionFailure(AI_PROCESSING_FAILED, f"Model call failed: {e}") from e

        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            logger.warning("Model %s returned an empty completion", self.model)
            raise ExtractionFailure(AI_PROCESSING_FAILED, "Model returned an empty completion")
        return choice.message.content

    async def __call__(self, system_message: str, user_prompt: str) -> str:
        return await self.invoke(system_message, user_prompt)
