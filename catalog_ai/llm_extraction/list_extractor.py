"""
Game List Extractor
Turns a free-text blob into an ordered list of single-game descriptions.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .prompt_builder import PromptBuilder

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """Split on line breaks, trim each line and drop empty ones."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


@dataclass
class ListExtractionAttempt:
    """Outcome of asking the model for a game list: either lines or the error."""
    lines: Optional[List[str]] = None
    error: Optional[Exception] = None

    @property
    def successful(self) -> bool:
        return self.error is None and self.lines is not None


class GameListExtractor:
    """Extracts one game entry per line, falling back to a plain line split.

    When the inference call fails for any reason, the original text is split
    line by line instead. extract_list() never raises for inference failures.
    """

    def __init__(self, client, prompt_builder: Optional[PromptBuilder] = None):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()

    def attempt_inference(self, text: str) -> ListExtractionAttempt:
        """Ask the model for a deduplicated list; capture any failure in the result."""
        try:
            response = self.client.generate(self.prompt_builder.build_list_prompt(text))
            return ListExtractionAttempt(lines=split_lines(response))
        except Exception as e:
            return ListExtractionAttempt(error=e)

    def extract_list(self, text: str) -> List[str]:
        """Return the ordered list of item descriptions found in text."""
        attempt = self.attempt_inference(text)
        if attempt.successful:
            logger.info(f"Model extracted {len(attempt.lines)} entries from input text")
            return attempt.lines

        # Degraded mode: split the original input directly
        logger.warning(f"List extraction via model failed, splitting input by line: {attempt.error}")
        return split_lines(text)
