import json
import os
import logging
from typing import Any, Dict, List, Optional
import openai
from openai import OpenAI
from pydantic import ValidationError
from ..schemas.recipe import RecipeContent, recipe_response_format
from ..utils.constants import LLMDefaults
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)


class OpenRouterError(Exception):
    """Base exception for LLM completion errors"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class OpenRouterAuthError(OpenRouterError):
    pass


class OpenRouterRateLimitError(OpenRouterError):
    pass


class OpenRouterNetworkError(OpenRouterError):
    pass


class OpenRouterServerError(OpenRouterError):
    pass


class OpenRouterClientError(OpenRouterError):
    pass


class OpenRouterParseError(OpenRouterError):
    """Completion content was empty, not JSON, or did not match the schema"""

    pass


class OpenRouterService:
    """Chat completions against OpenRouter through its OpenAI-compatible API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ):
        self.api_key = api_key or os.getenv("OPENROUTER_API_KEY")
        self.model = model or os.getenv("OPENROUTER_MODEL", LLMDefaults.MODEL)
        self.base_url = os.getenv("OPENROUTER_BASE_URL", LLMDefaults.BASE_URL)
        self.timeout = float(os.getenv("OPENROUTER_TIMEOUT", LLMDefaults.TIMEOUT_SECONDS))
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise OpenRouterAuthError(
                    "Invalid or missing API key. Please check your OPENROUTER_API_KEY."
                )
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def complete(
        self,
        messages: List[Dict[str, str]],
        response_format: Optional[Dict[str, Any]] = None,
        temperature: float = LLMDefaults.TEMPERATURE,
        max_tokens: int = LLMDefaults.MAX_TOKENS,
    ) -> str:
        """Run a chat completion and return the message content"""
        if not messages:
            raise OpenRouterClientError("At least one message is required")

        sanitized = [
            {**m, "content": ValidationHelpers.sanitize_prompt_text(m["content"]).strip()}
            if m["role"] == "user"
            else m
            for m in messages
        ]

        kwargs = {
            "model": self.model,
            "messages": sanitized,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if response_format:
            kwargs["response_format"] = response_format

        try:
            response = self.client.chat.completions.create(**kwargs)
        except openai.AuthenticationError as e:
            raise OpenRouterAuthError(
                "Invalid or missing API key. Please check your OPENROUTER_API_KEY.", 401
            ) from e
        except openai.RateLimitError as e:
            raise OpenRouterRateLimitError(
                "Rate limit exceeded. Please try again later.", 429
            ) from e
        except openai.APIConnectionError as e:
            # Includes timeouts
            raise OpenRouterNetworkError(f"Could not reach OpenRouter: {e}") from e
        except openai.APIStatusError as e:
            if e.status_code >= 500:
                raise OpenRouterServerError(
                    f"OpenRouter server error ({e.status_code})", e.status_code
                ) from e
            raise OpenRouterClientError(str(e), e.status_code) from e

        if not response.choices or not response.choices[0].message.content:
            raise OpenRouterParseError("Completion returned no content")

        return response.choices[0].message.content

    def generate_recipe(self, system_prompt: str, user_prompt: str) -> RecipeContent:
        """Ask for a recipe constrained by the recipe JSON schema and validate it"""
        content = self.complete(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format=recipe_response_format(),
        )

        try:
            return RecipeContent.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Recipe completion did not match schema: {e}")
            raise OpenRouterParseError(f"Invalid recipe returned by model: {e}") from e
