"""
LLM Extraction Package
Handles LLM-based extraction of game records from free text.
"""

from .exceptions import (
    ContentProcessingError,
    NetworkError,
    UpstreamError,
    EmptyResponseError,
    MalformedResponseError,
    EmptyExtractionError,
)
from .config import ProcessorConfig
from .prompt_builder import PromptBuilder, ContentRecognitionMode
from .list_extractor import GameListExtractor, ListExtractionAttempt, split_lines
from .batch_processor import BatchDispatcher
from .content_processor import AIContentProcessor, create_ai_content_processor

__all__ = [
    'ContentProcessingError', 'NetworkError', 'UpstreamError', 'EmptyResponseError',
    'MalformedResponseError', 'EmptyExtractionError',
    'ProcessorConfig', 'PromptBuilder', 'ContentRecognitionMode',
    'GameListExtractor', 'ListExtractionAttempt', 'split_lines',
    'BatchDispatcher', 'AIContentProcessor', 'create_ai_content_processor',
]
