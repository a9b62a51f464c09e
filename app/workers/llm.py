from __future__ import annotations

from typing import Optional

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.litellm import LiteLLMProvider
from pydantic_ai.settings import ModelSettings

from app.config import get_settings
from app.exceptions import ConnectivityError
from app.infra.logging_config import get_logger

logger = get_logger("llm")


class LLMRunner:
    """Single prompt in, single completion out. No tools, no history."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: float = 30.0,
        temperature: float = 0.1,
        top_p: float = 0.9,
    ) -> None:
        provider = LiteLLMProvider(api_key=api_key, api_base=api_base)
        model = OpenAIChatModel(model_name, provider=provider)
        logger.info(f"Initializing LLM runner with model {model_name}")
        self._agent = Agent(
            model,
            model_settings=ModelSettings(
                temperature=temperature,
                top_p=top_p,
                timeout=timeout,
                extra_body={"response_format": {"type": "json_object"}},
            ),
        )

    def complete(self, prompt: str) -> str:
        """
        Run the prompt synchronously and return the raw completion text.

        Raises:
            ConnectivityError: the model service could not be reached or
                failed to answer.
        """
        try:
            result = self._agent.run_sync(prompt)
        except Exception as e:
            logger.warning("LLM call failed: %s", e)
            raise ConnectivityError(f"Language model unavailable: {e}") from e
        return str(result.output)


def build_llm_runner_from_env() -> LLMRunner:
    settings = get_settings()
    logger.info(
        "LLM runner config: model=%s, api_key=%s, api_base=%s",
        settings.llm_model,
        "set" if settings.litellm_api_key else "not set",
        settings.litellm_api_base or "(default)",
    )

    return LLMRunner(
        model_name=settings.llm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        timeout=settings.llm_timeout_seconds,
        temperature=settings.llm_temperature,
        top_p=settings.llm_top_p,
    )
