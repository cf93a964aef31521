"""
API Utilities Module
Handles chat-completion calls against an OpenAI-compatible inference service.
"""

import time
import random
import logging
from typing import Optional, Dict, Any

import openai
from openai import OpenAI

from ..exceptions import NetworkError, UpstreamError, EmptyResponseError

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.siliconflow.cn/v1"
DEFAULT_MODEL = "Qwen/Qwen2.5-7B-Instruct"


class InferenceClient:
    """Issues single-shot chat-completion requests and maps failures to pipeline errors.

    No retries happen here; the SDK's own retry loop is disabled so every
    failure surfaces to the caller exactly once.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        max_tokens: int = 2000,
        temperature: float = 0.7,
        timeout: float = 60.0
    ):
        """Initialize the inference client.

        Args:
            api_key: Bearer token for the inference service
            model: Model identifier to request
            base_url: Base URL of the OpenAI-compatible API
            max_tokens: Maximum tokens in each completion
            temperature: Sampling temperature
            timeout: Per-request timeout in seconds
        """
        if not api_key or not isinstance(api_key, str):
            raise ValueError("API key must be a non-empty string")

        self.model = model
        self.base_url = base_url
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        """Send one prompt as a user message and return the completion text.

        Args:
            prompt: Prompt text
            max_tokens: Override for the completion length

        Returns:
            str: The message content of the first choice

        Raises:
            NetworkError: The service was unreachable or the call timed out
            UpstreamError: The service returned a non-success status
            EmptyResponseError: The response carried no message content
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens or self.max_tokens,
                temperature=self.temperature
            )
        except openai.APIConnectionError as e:
            # APITimeoutError is a subclass of APIConnectionError
            logger.debug(f"{type(e).__name__} calling {self.base_url}: {e}")
            raise NetworkError(f"Inference request failed: {e}") from e
        except openai.APIStatusError as e:
            body = _response_text(e)
            logger.debug(f"Inference service returned HTTP {e.status_code}")
            raise UpstreamError("Inference request rejected", status_code=e.status_code, body=body) from e
        except openai.APIError as e:
            raise UpstreamError(f"Inference request failed: {e}") from e

        choices = getattr(response, "choices", None)
        if not choices:
            raise EmptyResponseError("Inference response contained no choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not content or not content.strip():
            raise EmptyResponseError("Inference response content was empty")

        return content

    def test_connection(self) -> Dict[str, Any]:
        """Check that the service accepts our credentials and model.

        Returns:
            Dict with 'success' and, on failure, an 'error' message
        """
        try:
            self.generate('Reply with "connection ok".', max_tokens=10)
            return {"success": True, "error": None}
        except (NetworkError, UpstreamError, EmptyResponseError) as e:
            logger.warning(f"Connection test failed: {e}")
            return {"success": False, "error": str(e)}

    def get_provider_info(self) -> Dict[str, Any]:
        """Get information about the current client configuration."""
        return {
            "model": self.model,
            "base_url": self.base_url,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "timeout": self.timeout,
        }


class RetryingInferenceClient:
    """Wraps an inference client and retries transient network failures.

    Only NetworkError is retried; upstream rejections and empty responses are
    returned to the caller immediately. The pipeline never installs this on
    its own, callers opt in by passing it as the client.
    """

    def __init__(self, client, max_retries: int = 2, base_delay: float = 0.5, sleep=time.sleep):
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        self.client = client
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep

    def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        for attempt in range(self.max_retries + 1):
            try:
                return self.client.generate(prompt, max_tokens=max_tokens)
            except NetworkError as e:
                if attempt >= self.max_retries:
                    logger.error(f"All {self.max_retries + 1} attempts failed: {e}")
                    raise
                # Exponential backoff with jitter
                sleep_time = (2 ** attempt) * self.base_delay + random.uniform(0, self.base_delay)
                logger.warning(f"Attempt {attempt + 1} failed, retrying in {sleep_time:.2f}s: {e}")
                self._sleep(sleep_time)

    def test_connection(self) -> Dict[str, Any]:
        return self.client.test_connection()


def _response_text(error: openai.APIStatusError) -> Optional[str]:
    """Best-effort diagnostic body for a rejected request."""
    response = getattr(error, "response", None)
    text = getattr(response, "text", None)
    if text:
        return text
    if error.body is not None:
        return str(error.body)
    return None
