"""
AI Content Processor
Composes list extraction, per-item parsing and batch dispatch into the
end-to-end game import pipeline.
"""

import logging
import threading
import time
from typing import Callable, List, Optional, Sequence

from ..models.game_model import BatchResult, GameRecord
from .batch_processor import BatchDispatcher, ProgressCallback
from .config import ProcessorConfig
from .exceptions import EmptyExtractionError
from .list_extractor import GameListExtractor
from .prompt_builder import ContentRecognitionMode, PromptBuilder
from .utils.api_utils import InferenceClient
from .utils.result_parser import ResultParser

logger = logging.getLogger(__name__)


class AIContentProcessor:
    """
    Extracts structured game records from free text using an LLM.

    Holds an immutable ProcessorConfig; set_batch_size() and set_delay() swap
    in a clamped copy, and each batch run reads the config once at start.
    """

    def __init__(
        self,
        client=None,
        config: Optional[ProcessorConfig] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        parser: Optional[ResultParser] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            client: Object with generate(prompt) -> str; built from config when omitted
            config: Processor settings, defaults to ProcessorConfig()
            prompt_builder: Prompt source, defaults to PromptBuilder()
            parser: Response parser, defaults to ResultParser()
            sleep: Sleep function used between batches
        """
        self.config = config or ProcessorConfig()
        self.client = client or InferenceClient(
            api_key=self.config.api_key,
            model=self.config.model,
            base_url=self.config.base_url,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            timeout=self.config.timeout
        )
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = parser or ResultParser()
        self.list_extractor = GameListExtractor(self.client, self.prompt_builder)
        self._sleep = sleep

    def set_batch_size(self, size: int) -> None:
        self.config = self.config.with_batch_size(size)

    def set_delay(self, ms: int) -> None:
        self.config = self.config.with_delay(ms)

    def extract_game_list(self, text: str) -> List[str]:
        """Split free text into one entry per game. Never raises on inference failure."""
        return self.list_extractor.extract_list(text)

    def recognize_content_type(self, item: str) -> ContentRecognitionMode:
        """Classify an item so a more specific prompt can be used.

        Best effort: any failure yields MIXED_CONTENT.
        """
        try:
            response = self.client.generate(self.prompt_builder.build_recognition_prompt(item))
        except Exception as e:
            logger.warning(f"Content recognition failed, using mixed_content mode: {e}")
            return ContentRecognitionMode.MIXED_CONTENT

        answer = response.strip().lower()
        for mode in (
            ContentRecognitionMode.TITLE_ONLY,
            ContentRecognitionMode.TITLE_WITH_DESCRIPTION,
            ContentRecognitionMode.FULL_GAME_INFO,
        ):
            if mode.value in answer:
                return mode
        return ContentRecognitionMode.MIXED_CONTENT

    def parse_game_info(
        self,
        item: str,
        mode: Optional[ContentRecognitionMode] = None,
        index: Optional[int] = None
    ) -> GameRecord:
        """Extract one GameRecord from a single item description.

        Raises:
            NetworkError, UpstreamError, EmptyResponseError: inference failed
            MalformedResponseError: the response held no usable JSON
        """
        if mode is None:
            if self.config.recognize_content:
                mode = self.recognize_content_type(item)
            else:
                mode = ContentRecognitionMode.MIXED_CONTENT

        response = self.client.generate(self.prompt_builder.build_parsing_prompt(item, mode))
        return self.parser.parse(response, source_index=index)

    def process_batch(
        self,
        items: Sequence[str],
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
        config: Optional[ProcessorConfig] = None
    ) -> BatchResult:
        """Parse every item, concurrently within each batch, and aggregate the outcomes."""
        config = config or self.config
        dispatcher = BatchDispatcher(
            worker=lambda item, index: self.parse_game_info(item, index=index),
            batch_size=config.batch_size,
            inter_batch_delay=config.delay_seconds,
            sleep=self._sleep
        )
        return dispatcher.dispatch(items, on_progress=on_progress, cancel_event=cancel_event)

    def process(
        self,
        text: str,
        on_progress: Optional[ProgressCallback] = None,
        batch_size: Optional[int] = None,
        delay_ms: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> BatchResult:
        """Run the full pipeline on free text.

        Args:
            text: Free text mentioning one or more games
            on_progress: Called with (processed, total) after every item
            batch_size: Per-call batch size override (clamped to [1, 10])
            delay_ms: Per-call inter-batch delay override (floored at 500 ms)
            cancel_event: Optional stop signal, honoured between batches

        Raises:
            EmptyExtractionError: no items could be extracted from the text
        """
        items = self.extract_game_list(text)
        if not items:
            raise EmptyExtractionError("No game entries could be extracted from the input text")

        config = self.config
        if batch_size is not None:
            config = config.with_batch_size(batch_size)
        if delay_ms is not None:
            config = config.with_delay(delay_ms)

        logger.info(f"Extracted {len(items)} entries, starting batch processing")
        return self.process_batch(items, on_progress=on_progress, cancel_event=cancel_event, config=config)

    def generate_game_content(self, record: GameRecord) -> str:
        """Generate a long-form HTML introduction article for a record."""
        return self.client.generate(self.prompt_builder.build_article_prompt(record))

    def test_connection(self):
        return self.client.test_connection()


def create_ai_content_processor(
    api_key: str,
    model: Optional[str] = None,
    batch_size: Optional[int] = None,
    delay_ms: Optional[int] = None
) -> AIContentProcessor:
    """Convenience factory building a processor for one API key."""
    config = ProcessorConfig(api_key=api_key)
    if model:
        config = ProcessorConfig(api_key=api_key, model=model)
    if batch_size is not None:
        config = config.with_batch_size(batch_size)
    if delay_ms is not None:
        config = config.with_delay(delay_ms)
    return AIContentProcessor(config=config)
