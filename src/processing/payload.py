"""
Best-effort decoding of the JSON payload returned by a remote browser agent.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Union

RAW_EXCERPT_LENGTH = 2000

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class DecodedPayload:
    data: Dict[str, Any]


@dataclass(frozen=True)
class MalformedPayload:
    raw_excerpt: str
    reason: str


PayloadResult = Union[DecodedPayload, MalformedPayload]


def _extract_json(content: str) -> str:
    """
    Pull the JSON object out of agent output, stripping markdown fences
    and any surrounding prose.
    """
    candidate = content.strip()

    fence_match = _FENCE_PATTERN.search(content)
    if fence_match:
        candidate = fence_match.group(1).strip()

    if not candidate.startswith("{"):
        object_match = _OBJECT_PATTERN.search(content)
        if object_match:
            candidate = object_match.group(0)

    return candidate


def decode_payload(content: str) -> PayloadResult:
    raw_excerpt = content[:RAW_EXCERPT_LENGTH]

    try:
        data = json.loads(_extract_json(content))
    except json.JSONDecodeError as e:
        return MalformedPayload(raw_excerpt=raw_excerpt, reason=str(e))

    if not isinstance(data, dict):
        return MalformedPayload(
            raw_excerpt=raw_excerpt,
            reason=f"expected a JSON object, got {type(data).__name__}",
        )

    return DecodedPayload(data=data)
