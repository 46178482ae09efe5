"""Parser for the operator-edited city to department mapping setting.

The setting is JSON-like text that may contain ``//`` and ``/* */`` comments
and trailing commas. Values are either ``{"departmentId": ..., "optionNumber": ...}``
objects or, in the legacy shorthand, a bare department id string.
"""

import json
import re

from pydantic import ValidationError

from fulfillment.logging_config import get_logger
from fulfillment.schemas.fulfillment import CityMapping
from fulfillment.services.result import NO_MAPPING, PARSE_ERROR, Result

logger = get_logger("mapping_parser")

# Quoted strings are matched first and kept; only group 1 (a comment) is dropped.
COMMENT_PATTERN = re.compile(r'\\"|"(?:\\"|[^"])*"|(//.*|/\*[\s\S]*?\*/)')
TRAILING_COMMA_PATTERN = re.compile(r",(?!\s*?[{\[\"'\w])")


def strip_comments(text: str) -> str:
    return COMMENT_PATTERN.sub(lambda m: "" if m.group(1) else m.group(0), text)


def strip_trailing_commas(text: str) -> str:
    return TRAILING_COMMA_PATTERN.sub("", text)


def escape_backslashes(text: str) -> str:
    return text.replace("\\", "\\\\")


def normalize_relaxed_json(text: str) -> str:
    return escape_backslashes(strip_trailing_commas(strip_comments(text)))


def _to_city_mapping(value) -> CityMapping:
    if isinstance(value, str):
        return CityMapping(departmentId=value)
    if isinstance(value, dict):
        return CityMapping(**value)
    raise ValueError(f"Unsupported mapping value: {value!r}")


def parse_mapping(raw_text: str | None) -> Result[dict[str, CityMapping]]:
    """Parse mapping text. Never raises.

    Empty input, ``null`` or ``false`` give a ``no_mapping`` failure; text that
    is not an object gives ``parse_error``. Malformed entries are skipped, so a
    lookup of that city misses.
    """
    if not raw_text or not raw_text.strip():
        return Result.failure("Mapping setting is empty", NO_MAPPING)

    try:
        data = json.loads(normalize_relaxed_json(raw_text))
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals and deep nesting.
        logger.error(
            "Error occurred while parsing the mapping data",
            extra={"context": {"error": str(e)}},
        )
        return Result.failure(f"Invalid mapping data: {e}", PARSE_ERROR)

    if data is None or data is False:
        return Result.failure("Mapping setting is empty", NO_MAPPING)

    if not isinstance(data, dict):
        logger.error(
            "Mapping data is not an object",
            extra={"context": {"type": type(data).__name__}},
        )
        return Result.failure("Mapping data must be an object keyed by city", PARSE_ERROR)

    mappings: dict[str, CityMapping] = {}
    for city, value in data.items():
        try:
            mappings[city] = _to_city_mapping(value)
        except (TypeError, ValueError, ValidationError) as e:
            logger.warning(
                "Skipping invalid mapping record",
                extra={"context": {"city": city, "error": str(e)}},
            )

    return Result.success(mappings)
