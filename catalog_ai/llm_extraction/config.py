"""
Processor Configuration
Immutable settings for the content processor, loaded from the environment.
"""

import os
import logging
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from .utils.api_utils import DEFAULT_BASE_URL, DEFAULT_MODEL

logger = logging.getLogger(__name__)

MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 10
MIN_DELAY_MS = 500


@dataclass(frozen=True)
class ProcessorConfig:
    """Settings for one AIContentProcessor.

    Instances are immutable; with_batch_size() and with_delay() return clamped
    copies so a running batch never sees its settings change underneath it.
    """
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    batch_size: int = 3
    delay_ms: int = 1500
    max_tokens: int = 2000
    temperature: float = 0.7
    timeout: float = 60.0
    recognize_content: bool = True

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def with_batch_size(self, size: int) -> "ProcessorConfig":
        """Copy with batch size clamped to [1, 10]."""
        return replace(self, batch_size=max(MIN_BATCH_SIZE, min(int(size), MAX_BATCH_SIZE)))

    def with_delay(self, ms: int) -> "ProcessorConfig":
        """Copy with inter-batch delay floored at 500 ms."""
        return replace(self, delay_ms=max(MIN_DELAY_MS, int(ms)))

    @classmethod
    def from_env(cls, **overrides) -> "ProcessorConfig":
        """Build a config from environment variables (and a .env file if present).

        Keyword overrides take precedence over the environment.
        """
        load_dotenv()

        config = cls(
            api_key=os.getenv("SILICON_FLOW_API_KEY"),
            model=os.getenv("AI_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("AI_BASE_URL", DEFAULT_BASE_URL),
            max_tokens=int(os.getenv("AI_MAX_TOKENS", "2000")),
            temperature=float(os.getenv("AI_TEMPERATURE", "0.7")),
            timeout=float(os.getenv("AI_TIMEOUT", "60")),
            recognize_content=os.getenv("AI_RECOGNIZE_CONTENT", "1").lower() not in ("0", "false", "no"),
        )
        config = config.with_batch_size(int(os.getenv("AI_BATCH_SIZE", "3")))
        config = config.with_delay(int(os.getenv("AI_DELAY_MS", "1500")))

        batch_size = overrides.pop("batch_size", None)
        delay_ms = overrides.pop("delay_ms", None)
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if overrides:
            config = replace(config, **overrides)
        if batch_size is not None:
            config = config.with_batch_size(batch_size)
        if delay_ms is not None:
            config = config.with_delay(delay_ms)

        if not config.api_key:
            logger.warning("SILICON_FLOW_API_KEY is not set")
        return config
