"""
catalog_ai
Batch extraction of structured game records from free text using an LLM.
"""

from .llm_extraction import AIContentProcessor, ProcessorConfig, create_ai_content_processor
from .models import GameRecord, FailureEntry, BatchResult, GameCategory

__all__ = [
    'AIContentProcessor', 'ProcessorConfig', 'create_ai_content_processor',
    'GameRecord', 'FailureEntry', 'BatchResult', 'GameCategory',
]
