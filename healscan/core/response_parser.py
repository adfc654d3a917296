"""
Response parsing for HealScan AI.

Turns the free-form text returned by the vision model into a validated
WoundAssessment. The model is asked for JSON only but is untrusted: it
may wrap the JSON in prose or code fences, omit fields, or return
values of the wrong type. Individual bad fields fall back to defaults;
only a missing or unparseable JSON block is an error.
"""

import json
import math
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from healscan.core.errors import MalformedResponse, NoJsonFound
from healscan.models.schemas import (
    MAX_LIST_ITEMS,
    HealingStage,
    WoundAssessment,
    WoundType,
)
from healscan.utils.logger import get_logger

logger = get_logger("response_parser")

SEVERITY_MIN = 0
SEVERITY_MAX = 100


def extract_json_block(text: str) -> Optional[str]:
    """
    Return the span from the first '{' to the last '}' in text.

    This is a greedy heuristic, not a parser: anything between the two
    braces is returned as-is. Returns None when no such span exists.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def parse_model_response(text: str) -> WoundAssessment:
    """
    Extract, parse and normalize the JSON payload of a model reply.

    Raises:
        NoJsonFound: no {...} block in the reply
        MalformedResponse: the block is not valid JSON
    """
    block = extract_json_block(text or "")
    if block is None:
        logger.warning("Model reply contained no JSON", length=len(text or ""))
        raise NoJsonFound("Model returned no JSON")

    try:
        payload = json.loads(block)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and over-long integer literals
        logger.warning("Model reply contained malformed JSON", error=str(e)[:200])
        raise MalformedResponse("Model returned malformed JSON") from e

    if not isinstance(payload, dict):
        raise MalformedResponse("Model returned JSON that is not an object")

    return normalize_assessment(payload)


def normalize_assessment(payload: Dict[str, Any]) -> WoundAssessment:
    """Normalize each field of a parsed payload independently."""
    return WoundAssessment(
        type=_to_vocabulary(payload.get("type"), WoundType, WoundType.OTHER),
        stage=_to_vocabulary(payload.get("stage"), HealingStage, HealingStage.UNKNOWN),
        severity=normalize_severity(payload.get("severity")),
        precautions=normalize_list(payload.get("precautions")),
        meds=normalize_list(payload.get("meds")),
    )


def normalize_severity(value: Any) -> int:
    """Coerce to a number (0 when not numeric), clamp to [0, 100], round half up."""
    number = _to_number(value)
    clamped = clamp(number, SEVERITY_MIN, SEVERITY_MAX)
    return int(math.floor(clamped + 0.5))


def normalize_list(value: Any) -> List[str]:
    """
    Keep the first four non-empty entries of a list-like value as strings.

    Anything that is not a list or tuple yields an empty list.
    """
    if not isinstance(value, (list, tuple)):
        return []

    items = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            items.append(text)
        if len(items) == MAX_LIST_ITEMS:
            break
    return items


def clamp(value: Union[int, float], low: float, high: float) -> Union[int, float]:
    return max(low, min(high, value))


def _to_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        # kept as int: arbitrarily large JSON integers do not fit a float
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0

    if math.isnan(number):
        return 0.0
    return number


def _to_vocabulary(value: Any, vocabulary: Type[Enum], default: Enum) -> Enum:
    """Match a label case-insensitively against an enum's values."""
    if value is None:
        return default

    label = str(value).strip()
    if not label:
        return default

    for member in vocabulary:
        if member.value.lower() == label.lower():
            return member

    logger.info("Unrecognized label, using default", label=label, default=default.value)
    return default
