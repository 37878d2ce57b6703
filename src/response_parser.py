"""
Reads adventure batches out of raw model output.

The model is asked for bare JSON but often wraps it in prose or markdown
fences. We accept the whole text as JSON, or else the first bracketed
object inside it. Nothing else is repaired.
"""

import json
import logging
import re
from typing import Any, Iterator

from pydantic import TypeAdapter, ValidationError

from errors import MalformedResponse
from models import Adventure

logger = logging.getLogger(__name__)

_ADVENTURES = TypeAdapter(list[Adventure])
_decoder = json.JSONDecoder()


def _candidates(raw_text: str) -> Iterator[Any]:
    """Yield every JSON value we can read, most literal first."""
    try:
        yield json.loads(raw_text)
    except (ValueError, RecursionError):
        pass

    start = raw_text.find("{")
    if start == -1:
        return

    # Object starting at the first brace and ending at its matching one
    try:
        value, _ = _decoder.raw_decode(raw_text, start)
        yield value
    except (ValueError, RecursionError):
        pass

    # Widest span: first "{" to last "}"
    json_match = re.search(r'\{[\s\S]*\}', raw_text)
    if json_match:
        try:
            yield json.loads(json_match.group())
        except (ValueError, RecursionError):
            pass


def parse_adventures(raw_text: str) -> list[Adventure]:
    """
    Parse model output into a validated batch of adventures.

    A single invalid adventure rejects the whole batch, so callers never
    render a partial list.

    Args:
        raw_text: Raw model output

    Returns:
        List of Adventure objects (possibly empty)

    Raises:
        MalformedResponse: if no adventures payload can be read
    """
    payload = next(
        (
            value for value in _candidates(raw_text)
            if isinstance(value, dict) and "adventures" in value
        ),
        None
    )

    if payload is None:
        raise MalformedResponse("No adventures object in model output")

    if not isinstance(payload["adventures"], list):
        raise MalformedResponse("'adventures' is not a list")

    try:
        adventures = _ADVENTURES.validate_python(payload["adventures"])
    except ValidationError as e:
        logger.warning(
            f"Rejecting batch with {e.error_count()} invalid field(s)"
        )
        raise MalformedResponse(f"Invalid adventure data: {e}") from e

    logger.debug(f"Parsed {len(adventures)} adventures")
    return adventures
