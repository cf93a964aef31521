"""
Result Parser Module
Handles parsing and normalization of LLM responses into game records.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from ...models.game_model import GameCategory, GamePayload, GameRecord, UNKNOWN_TITLE, MAX_TAGS
from ..exceptions import MalformedResponseError

# Configure logging
logger = logging.getLogger(__name__)

PASSTHROUGH_FIELDS = ('description', 'platform', 'release_year', 'developer', 'publisher', 'genre', 'rating')


class ResultParser:
    """Parses LLM responses into normalized GameRecord objects.

    Pure and deterministic: no I/O, no dependency on the inference client.
    """

    @staticmethod
    def strip_code_fences(response: str) -> str:
        """Remove a surrounding markdown code fence (```json ... ```) if present."""
        clean = response.strip()
        if clean.startswith('```'):
            lines = clean.split('\n')
            if len(lines) > 1:
                # Remove first line (```json or ```)
                lines = lines[1:]
                # Remove last line if it's just ```
                if lines and lines[-1].strip() == '```':
                    lines = lines[:-1]
                clean = '\n'.join(lines)
        return clean.strip('` \n\r\t')

    @staticmethod
    def find_json_object(text: str) -> Optional[str]:
        """Return the first top-level balanced {...} span in text, or None.

        Braces inside JSON string literals are ignored.
        """
        start = text.find('{')
        while start != -1:
            depth = 0
            in_string = False
            escaped = False
            for pos in range(start, len(text)):
                char = text[pos]
                if in_string:
                    if escaped:
                        escaped = False
                    elif char == '\\':
                        escaped = True
                    elif char == '"':
                        in_string = False
                    continue
                if char == '"':
                    in_string = True
                elif char == '{':
                    depth += 1
                elif char == '}':
                    depth -= 1
                    if depth == 0:
                        return text[start:pos + 1]
            # Unbalanced from this brace; try the next opening brace
            start = text.find('{', start + 1)
        return None

    @staticmethod
    def greedy_json_span(text: str) -> Optional[str]:
        """Span from the first '{' to the last '}', or None."""
        start = text.find('{')
        end = text.rfind('}')
        if start == -1 or end <= start:
            return None
        return text[start:end + 1]

    def parse_payload(self, response: str) -> GamePayload:
        """Deserialize the structured payload embedded in a model response.

        Raises:
            MalformedResponseError: no JSON object could be located or validated
        """
        if not response or not response.strip():
            raise MalformedResponseError("Empty response, no JSON found", raw_text=response)

        candidates: List[str] = []
        clean = self.strip_code_fences(response)
        if clean.startswith('{'):
            candidates.append(clean)
        for span in (self.find_json_object(response), self.greedy_json_span(response)):
            if span and span not in candidates:
                candidates.append(span)

        if not candidates:
            raise MalformedResponseError("No JSON found in AI response", raw_text=response)

        last_error: Optional[Exception] = None
        for candidate in candidates:
            try:
                return GamePayload.model_validate_json(candidate)
            except ValidationError as e:
                logger.debug(f"JSON candidate rejected: {e.error_count()} validation error(s)")
                last_error = e

        logger.warning(f"Failed to parse JSON from response: {response[:100]}...")
        raise MalformedResponseError(
            f"Failed to deserialize AI response: {last_error}", raw_text=response
        ) from last_error

    def parse(self, response: str, source_index: Optional[int] = None) -> GameRecord:
        """Parse a raw model response into a normalized GameRecord.

        Args:
            response: Raw text returned by the model, possibly with prose around the JSON
            source_index: Position of the originating item, carried onto the record

        Returns:
            GameRecord: Normalized record

        Raises:
            MalformedResponseError: if no structured payload can be extracted
        """
        payload = self.parse_payload(response)
        record = self.normalize(payload)
        record.source_index = source_index
        return record

    @classmethod
    def normalize(cls, data: Union[GamePayload, GameRecord, Mapping[str, Any]]) -> GameRecord:
        """Apply the normalization rules to a payload, mapping, or existing record.

        Normalizing an already-normalized record returns an equal record.
        """
        if isinstance(data, GameRecord):
            fields = {attr: getattr(data, attr) for attr in GameRecord.FIELD_KEYS}
            source_index = data.source_index
        elif isinstance(data, GamePayload):
            fields = data.model_dump()
            source_index = None
        else:
            fields = GamePayload.model_validate(dict(data)).model_dump()
            source_index = data.get('sourceIndex', data.get('source_index'))

        return GameRecord(
            title=cls.normalize_title(fields.get('title')),
            category=cls.validate_category(fields.get('category')),
            tags=cls.normalize_tags(fields.get('tags')),
            download_link=None,
            cover_image=None,
            source_index=source_index,
            **{name: cls._passthrough(fields.get(name)) for name in PASSTHROUGH_FIELDS}
        )

    @staticmethod
    def normalize_title(title: Any) -> str:
        if isinstance(title, str) and title.strip():
            return title
        return UNKNOWN_TITLE

    @staticmethod
    def validate_category(category: Any) -> str:
        """Return category if it names a canonical category, else the default."""
        if not isinstance(category, str):
            return GameCategory.default().value
        normalized = category.strip()
        if normalized in GameCategory.values():
            return normalized
        return GameCategory.default().value

    @staticmethod
    def normalize_tags(tags: Any) -> List[Any]:
        if isinstance(tags, (list, tuple)):
            return list(tags[:MAX_TAGS])
        return []

    @staticmethod
    def _passthrough(value: Any) -> Any:
        if value is None or value == '':
            return None
        return value
