"""
Output Generation Package
Handles writing imported game records and failure reports.
"""

from .game_writer import GameWriter, generate_id, assign_ids

__all__ = ['GameWriter', 'generate_id', 'assign_ids']
