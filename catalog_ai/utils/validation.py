"""
Record Validation Module
Provides functions for checking completeness of game records and combining them.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Tuple, Union

from ..models.game_model import GameRecord, MAX_TAGS

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ['title']
RECOMMENDED_FIELDS = ['description', 'category', 'tags']


def validate_game_info(record: GameRecord) -> Tuple[bool, List[str]]:
    """Check a record for missing required and recommended fields.

    Args:
        record: GameRecord to check

    Returns:
        Tuple[bool, List[str]]: (is_valid, list of missing field names)
    """
    missing_required = [name for name in REQUIRED_FIELDS if not getattr(record, name, None)]
    missing_recommended = [name for name in RECOMMENDED_FIELDS if not getattr(record, name, None)]

    return len(missing_required) == 0, missing_required + missing_recommended


def merge_game_info(base: GameRecord, update: Union[GameRecord, Dict[str, Any]]) -> GameRecord:
    """Return a copy of base with every non-None field from update applied."""
    if isinstance(update, GameRecord):
        changes = {
            name: getattr(update, name)
            for name in list(GameRecord.FIELD_KEYS) + ['source_index']
            if getattr(update, name) is not None
        }
    else:
        known = set(GameRecord.FIELD_KEYS) | {'source_index'}
        unknown = [key for key in update if key not in known]
        if unknown:
            logger.debug(f"Ignoring unknown fields in update: {unknown}")
        changes = {key: value for key, value in update.items() if key in known and value is not None}

    return replace(base, **changes)


def format_tags(tags: List[Any]) -> List[str]:
    """Trim tags, drop empty ones and keep at most five."""
    cleaned = [str(tag).strip() for tag in tags if tag is not None]
    return [tag for tag in cleaned if tag][:MAX_TAGS]
