"""
Game Writer Module
Assigns stable identifiers to imported game records and writes them, together
with any failed entries, to flat files.
"""

import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import pandas as pd

from ..models.game_model import FailureEntry, GameCategory, GameRecord

logger = logging.getLogger(__name__)

MAX_ID_LENGTH = 50
COVER_PLACEHOLDER = '/placeholder.svg'
DOWNLOAD_PLACEHOLDER = '#'


def generate_id(title: str) -> str:
    """Slugify a title: lowercase, non-word runs to '-', trimmed, at most 50 chars."""
    slug = re.sub(r'[^\w\u4e00-\u9fa5]+', '-', (title or '').lower())
    slug = slug.strip('-')[:MAX_ID_LENGTH]
    return slug or 'game'


def assign_ids(records: Iterable[GameRecord], existing_ids: Iterable[str] = ()) -> List[str]:
    """Generate one unique id per record, suffixing -1, -2, ... on collisions."""
    taken: Set[str] = set(existing_ids)
    ids = []
    for record in records:
        base_id = generate_id(record.title)
        final_id = base_id
        counter = 1
        while final_id in taken:
            final_id = f"{base_id}-{counter}"
            counter += 1
        taken.add(final_id)
        ids.append(final_id)
    return ids


class GameWriter:
    """Appends imported games to a JSON game list and reports failures as CSV."""

    def __init__(self, games_file: str = "data/games.json"):
        self.games_file = Path(games_file)

    def load_existing(self) -> List[Dict]:
        """Load the current game list, or an empty list if there is none yet."""
        if not self.games_file.exists():
            return []
        with open(self.games_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{self.games_file} does not contain a JSON list")
        return data

    def build_entries(self, records: List[GameRecord], existing: List[Dict]) -> List[Dict]:
        """Turn records into storable entries with ids unique against existing."""
        ids = assign_ids(records, (game.get('id') for game in existing))
        today = date.today().isoformat()

        entries = []
        for game_id, record in zip(ids, records):
            entries.append({
                'id': game_id,
                'title': record.title,
                'description': record.description or '',
                'category': record.category or GameCategory.default().value,
                'tags': list(record.tags),
                'platform': record.platform,
                'release_year': record.release_year,
                'developer': record.developer,
                'publisher': record.publisher,
                'genre': record.genre,
                'rating': record.rating,
                'cover_image': record.cover_image or COVER_PLACEHOLDER,
                'download_link': record.download_link or DOWNLOAD_PLACEHOLDER,
                'published_at': today,
                'status': 'draft',
                'content': record.description or '',
            })
        return entries

    def write_games(self, records: List[GameRecord]) -> Dict[str, int]:
        """Append records to the games file.

        Returns:
            Dict[str, int]: game count per category across the whole file
        """
        existing = self.load_existing()
        new_entries = self.build_entries(records, existing)
        all_games = existing + new_entries

        self.games_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.games_file, 'w', encoding='utf-8') as f:
            json.dump(all_games, f, indent=2, ensure_ascii=False)

        logger.info(f"Written {len(new_entries)} new games to {self.games_file} ({len(all_games)} total)")

        counts = pd.Series([game.get('category') for game in all_games], dtype=object).value_counts()
        return {str(category): int(count) for category, count in counts.items()}

    def write_failures(self, failures: List[FailureEntry], csv_path: str) -> Optional[str]:
        """Write failed entries to CSV for manual retry. Returns the path, or None if nothing failed."""
        if not failures:
            return None

        path = Path(csv_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame([failure.to_dict() for failure in failures], columns=['index', 'input', 'error'])
        df.sort_values('index', na_position='last').to_csv(path, index=False)

        logger.info(f"Written {len(failures)} failed entries to {path}")
        return str(path)
