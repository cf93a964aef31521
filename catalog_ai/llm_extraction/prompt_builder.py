"""
Prompt Builder Module

Generates the prompts sent to the inference service: list extraction, content
type recognition, structured game extraction and article generation.
"""

from enum import Enum
from typing import Dict

from ..models.game_model import GameCategory, GameRecord, MAX_TAGS


class ContentRecognitionMode(str, Enum):
    """What kind of text a single item is, used to pick a prompt variant."""
    TITLE_ONLY = "title_only"
    TITLE_WITH_DESCRIPTION = "title_desc"
    FULL_GAME_INFO = "full_info"
    MIXED_CONTENT = "mixed_content"


MODE_INSTRUCTIONS: Dict[ContentRecognitionMode, str] = {
    ContentRecognitionMode.TITLE_ONLY: (
        "This is a game title. Infer the game information from the title. "
        "If it is a well-known game, fill in what you know about it."
    ),
    ContentRecognitionMode.TITLE_WITH_DESCRIPTION: (
        "This contains a game title and a description. Extract the information "
        "and complete the related fields."
    ),
    ContentRecognitionMode.FULL_GAME_INFO: (
        "This is complete game information. Extract every available field."
    ),
    ContentRecognitionMode.MIXED_CONTENT: (
        "This is mixed-format content. Do your best to extract game-related "
        "information. It may mention several games or be loosely formatted."
    ),
}


class PromptBuilder:
    """
    Builds prompt text for every inference call the pipeline makes.

    The structured-extraction prompt embeds the fixed 12-key JSON contract
    that ResultParser expects back.
    """

    def __init__(self, categories=None):
        """
        Initialize the prompt builder.

        Args:
            categories: Category names offered to the model, defaults to the canonical six
        """
        self.categories = list(categories or GameCategory.values())

    def build_list_prompt(self, text: str) -> str:
        """Prompt asking for one game per line, deduplicated, in order of first appearance."""
        return f"""Extract every game mentioned in the following text, one game per line.

Text:
{text}

Requirements:
1. One game per line
2. Keep each entry's original wording
3. Ignore content that is not about a game
4. If a game appears more than once, keep only the first occurrence
5. List games in the order they first appear

Return only the list, one game per line, with no explanation."""

    def build_recognition_prompt(self, item: str) -> str:
        """Prompt asking the model to classify an item into a ContentRecognitionMode."""
        return f"""Analyze the following text and decide what kind of game information it contains.

Text:
{item}

Answer with exactly one of these identifiers:
- {ContentRecognitionMode.TITLE_ONLY.value}: only a game title
- {ContentRecognitionMode.TITLE_WITH_DESCRIPTION.value}: a title and a short description
- {ContentRecognitionMode.FULL_GAME_INFO.value}: full game information (title, description, category, tags, ...)
- {ContentRecognitionMode.MIXED_CONTENT.value}: mixed or irregular content

Return only the identifier."""

    def build_format_instructions(self) -> str:
        category_list = " / ".join(self.categories)
        return f"""Return a JSON object with exactly these fields (use null when the information is missing):
{{
  "title": "game title",
  "description": "game description",
  "category": "game category ({category_list})",
  "tags": ["tag1", "tag2"],
  "platform": "platform",
  "releaseYear": "release year",
  "developer": "developer",
  "publisher": "publisher",
  "genre": "genre",
  "rating": "rating",
  "downloadLink": null,
  "coverImage": null
}}

Rules:
1. Extract the title exactly, do not add anything to it
2. The category must be the single best match from the {len(self.categories)} categories listed above
3. Tags are short keywords, at most {MAX_TAGS}
4. For Mario-related games include "Mario" in the tags
5. Return only the JSON, with no other explanation"""

    def build_parsing_prompt(self, item: str, mode: ContentRecognitionMode = ContentRecognitionMode.MIXED_CONTENT) -> str:
        """Structured-extraction prompt for one item, specialised by content mode."""
        instruction = MODE_INSTRUCTIONS.get(mode, MODE_INSTRUCTIONS[ContentRecognitionMode.MIXED_CONTENT])
        return f"""You are an expert at extracting video game information. Extract the game information from the text below and return it as JSON.

Input:
{item}

{instruction}

{self.build_format_instructions()}"""

    def build_article_prompt(self, record: GameRecord) -> str:
        """Prompt asking for a long-form HTML introduction article for a game."""
        tags = ", ".join(str(tag) for tag in record.tags) or "none"
        return f"""Write a detailed introduction article for the following game.

Game information:
- Title: {record.title}
- Description: {record.description or 'none'}
- Category: {record.category}
- Tags: {tags}
- Platform: {record.platform or 'none'}
- Release year: {record.release_year or 'none'}
- Developer: {record.developer or 'none'}

Write 800-1200 words covering:
1. Overview
2. Key features
3. Gameplay
4. Highlights
5. Why we recommend it

The article should be lively, highlight what makes the game special, suit fans of Mario games, and use HTML with appropriate heading and paragraph tags."""
