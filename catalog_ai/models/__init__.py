"""
Models Package
Data structures shared across the extraction pipeline.
"""

from .game_model import (
    GameCategory,
    GamePayload,
    GameRecord,
    FailureEntry,
    BatchResult,
    UNKNOWN_TITLE,
    MAX_TAGS,
)

__all__ = [
    'GameCategory', 'GamePayload', 'GameRecord', 'FailureEntry', 'BatchResult',
    'UNKNOWN_TITLE', 'MAX_TAGS',
]
