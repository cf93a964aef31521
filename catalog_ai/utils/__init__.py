"""
Utilities Package
Helpers for checking and combining game records.
"""

from .validation import validate_game_info, merge_game_info, format_tags

__all__ = ['validate_game_info', 'merge_game_info', 'format_tags']
