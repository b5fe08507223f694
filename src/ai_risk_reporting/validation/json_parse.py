"""
Parse raw generated text into a JSON object.

Models frequently wrap JSON in markdown code fences even when told not to,
so a single surrounding fence is stripped before parsing.
"""

import json
import re

import structlog

from .exceptions import JSONParseError

logger = structlog.get_logger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?\s*```$", re.DOTALL | re.IGNORECASE)


def strip_code_fences(content: str) -> str:
    """Remove one surrounding ``` or ```json fence, if present."""
    text = content.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


class JSONResponseParser:
    """
    Parse generated text into a dict.

    Raises JSONParseError on empty, malformed or non-object content.
    """

    def parse(self, content: str) -> dict:
        """
        Parse JSON content from a generation response.

        Args:
            content: Raw text returned by the generation capability

        Returns:
            Parsed dict representation

        Raises:
            JSONParseError: If content is not a JSON object
        """
        if not content or not content.strip():
            raise JSONParseError(
                "Response content is empty or whitespace-only",
                raw_content=content,
                parse_error="Empty content"
            )

        text = strip_code_fences(content)

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise JSONParseError(
                f"Failed to parse response as JSON: {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}"
            ) from e

        if not isinstance(parsed, dict):
            raise JSONParseError(
                f"Response is not a JSON object (got {type(parsed).__name__})",
                raw_content=content,
                parse_error=f"Expected object, got {type(parsed).__name__}"
            )

        logger.debug("Parsed JSON response", top_level_keys=len(parsed))
        return parsed
