"""
Game Data Model
Provides the data structures that flow through the batch extraction pipeline.
Includes the strict payload schema returned by the LLM, the normalized game
record handed to callers, and the aggregated batch result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, ClassVar

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class GameCategory(str, Enum):
    """The six canonical game categories. PLATFORMER is the default."""
    PLATFORMER = "Platformer"
    RACING = "Racing"
    ROLE_PLAYING = "Role-Playing"
    PARTY = "Party"
    MOTION_SPORTS = "Motion Sports"
    PUZZLE = "Puzzle"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def default(cls) -> "GameCategory":
        return cls.PLATFORMER


UNKNOWN_TITLE = "Unknown Game"
MAX_TAGS = 5


class GamePayload(BaseModel):
    """Schema for the 12-key JSON object the LLM is asked to return.

    Every field is optional and loosely typed; normalization happens in the
    ResultParser, this model only guarantees we received a JSON object.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: Optional[Any] = Field(None, description="Game title")
    description: Optional[Any] = Field(None, description="Short game description")
    category: Optional[Any] = Field(None, description="One of the six canonical categories")
    tags: Optional[Any] = Field(None, description="Keyword tags, at most five")
    platform: Optional[Any] = Field(None, description="Game platform")
    release_year: Optional[Any] = Field(None, alias="releaseYear", description="Release year")
    developer: Optional[Any] = Field(None, description="Developer")
    publisher: Optional[Any] = Field(None, description="Publisher")
    genre: Optional[Any] = Field(None, description="Genre")
    rating: Optional[Any] = Field(None, description="Rating")
    download_link: Optional[Any] = Field(None, alias="downloadLink", description="Always left empty")
    cover_image: Optional[Any] = Field(None, alias="coverImage", description="Always left empty")


@dataclass
class GameRecord:
    """
    A normalized game record produced by the extraction pipeline.

    download_link and cover_image are never filled in here; they are populated
    later by whoever persists the record.
    """
    title: str = UNKNOWN_TITLE
    description: Optional[str] = None
    category: str = GameCategory.PLATFORMER.value
    tags: List[str] = field(default_factory=list)

    platform: Optional[Any] = None
    release_year: Optional[Any] = None
    developer: Optional[Any] = None
    publisher: Optional[Any] = None
    genre: Optional[Any] = None
    rating: Optional[Any] = None

    download_link: Optional[str] = None
    cover_image: Optional[str] = None

    # Position of the source item in the dispatched input sequence
    source_index: Optional[int] = None

    # Mapping between dataclass attributes and payload (camelCase) keys
    FIELD_KEYS: ClassVar[Dict[str, str]] = {
        'title': 'title',
        'description': 'description',
        'category': 'category',
        'tags': 'tags',
        'platform': 'platform',
        'release_year': 'releaseYear',
        'developer': 'developer',
        'publisher': 'publisher',
        'genre': 'genre',
        'rating': 'rating',
        'download_link': 'downloadLink',
        'cover_image': 'coverImage',
    }

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a payload-shaped dictionary."""
        data = {key: getattr(self, attr) for attr, key in self.FIELD_KEYS.items()}
        data['tags'] = list(self.tags)
        if self.source_index is not None:
            data['sourceIndex'] = self.source_index
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRecord":
        """Create a GameRecord from a payload-shaped or attribute-shaped dictionary."""
        kwargs = {}
        for attr, key in cls.FIELD_KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]
        if kwargs.get('tags') is None:
            kwargs['tags'] = []
        if kwargs.get('title') is None:
            kwargs['title'] = UNKNOWN_TITLE
        if kwargs.get('category') is None:
            kwargs['category'] = GameCategory.PLATFORMER.value
        source_index = data.get('sourceIndex', data.get('source_index'))
        return cls(**kwargs, source_index=source_index)


@dataclass
class FailureEntry:
    """An item that could not be turned into a GameRecord."""
    input: str
    error: str
    index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'input': self.input, 'error': self.error, 'index': self.index}


@dataclass
class BatchResult:
    """
    Aggregated outcome of a batch run.

    success and failed are in completion order, not input order. Use
    ordered_success() / ordered_failed() when positional order matters.
    """
    success: List[GameRecord] = field(default_factory=list)
    failed: List[FailureEntry] = field(default_factory=list)
    total: int = 0
    processed: int = 0
    cancelled: bool = False

    @property
    def is_complete(self) -> bool:
        return self.processed == self.total

    def ordered_success(self) -> List[GameRecord]:
        return sorted(self.success, key=lambda r: (r.source_index is None, r.source_index or 0))

    def ordered_failed(self) -> List[FailureEntry]:
        return sorted(self.failed, key=lambda f: (f.index is None, f.index or 0))

    def summary(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'processed': self.processed,
            'succeeded': len(self.success),
            'failed': len(self.failed),
            'cancelled': self.cancelled,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the result into one row per outcome, ordered by input position."""
        rows = []
        for record in self.success:
            row = record.to_dict()
            row['tags'] = ', '.join(str(tag) for tag in record.tags)
            row['index'] = record.source_index
            row['status'] = 'success'
            row['error'] = None
            rows.append(row)
        for failure in self.failed:
            rows.append({
                'index': failure.index,
                'input': failure.input,
                'status': 'failed',
                'error': failure.error,
            })

        if not rows:
            return pd.DataFrame(columns=['index', 'status', 'title', 'category', 'error'])

        df = pd.DataFrame(rows)
        df = df.drop(columns=['sourceIndex'], errors='ignore')
        return df.sort_values('index', na_position='last').reset_index(drop=True)
