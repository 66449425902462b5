"""
Record codec for the keyword column.

Keywords are stored in a single TEXT column as a JSON array of strings.
``encode`` and ``decode`` are the only two functions that touch that
format; they must always change together.
"""

import json
from collections.abc import Sequence

from quicknote.utils.exceptions import CorruptRecordError, ValidationError


def encode(keywords: Sequence[str]) -> str:
    """
    Serialize a keyword sequence for storage.

    Order and duplicates are preserved; the empty sequence encodes as ``"[]"``.

    Args:
        keywords: Keywords to encode

    Returns:
        JSON array text

    Raises:
        ValidationError: If keywords is a bare string or holds a non-string item
    """
    if isinstance(keywords, str):
        raise ValidationError("Keywords must be a sequence of strings, not a string")

    items = list(keywords)
    for index, item in enumerate(items):
        if not isinstance(item, str):
            raise ValidationError(
                f"Keyword at position {index} is not a string",
                context={"index": index, "type": type(item).__name__},
            )

    return json.dumps(items, ensure_ascii=False)


def decode(raw: str) -> list[str]:
    """
    Parse a stored keyword column back into a list.

    Args:
        raw: Column text produced by ``encode``

    Returns:
        The exact keyword list that was encoded

    Raises:
        CorruptRecordError: If raw is not a JSON array of strings
    """
    if not isinstance(raw, str):
        raise CorruptRecordError(
            "Keyword column is not text",
            context={"type": type(raw).__name__},
        )

    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptRecordError(
            f"Keyword column is not valid JSON: {e.msg}",
            context={"raw": raw[:100], "position": e.pos},
        ) from e

    if not isinstance(value, list):
        raise CorruptRecordError(
            "Keyword column is not a JSON array",
            context={"raw": raw[:100]},
        )

    if not all(isinstance(item, str) for item in value):
        raise CorruptRecordError(
            "Keyword column contains a non-string element",
            context={"raw": raw[:100]},
        )

    return value
