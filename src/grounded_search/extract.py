"""Recover a JSON object from free-form model output.

Grounded model responses often wrap the requested object in markdown fences,
surround it with prose, inject citation markers such as ``[1]`` or leave
trailing commas behind. ``extract_json`` takes the span from the first ``{`` to
the last ``}`` and parses it, sanitizing only when the untouched span fails.

Known limitation: the span is the longest one, so two sibling top-level
objects in one response are taken together and fail to parse (or, with
something between them that happens to make valid JSON, mis-extract).
"""

import json
import logging
import re
from typing import Any

from grounded_search.errors import ExtractionError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json\s?|```")
_CITATION_RE = re.compile(r"\[\d+\]")
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def sanitize(candidate: str) -> str:
    """Drop ``[n]`` citation markers and commas directly before ``}``/``]``."""
    without_citations = _CITATION_RE.sub("", candidate)
    return _TRAILING_COMMA_RE.sub(r"\1", without_citations)


def extract_json(raw_text: str | None) -> dict[str, Any]:
    """Parse the JSON object embedded in *raw_text*.

    Args:
        raw_text: Raw model output.

    Returns:
        The parsed object.

    Raises:
        ExtractionError: If the text is empty, contains no ``{...}`` span, or
            the span does not parse even after sanitizing.
    """
    if not raw_text:
        raise ExtractionError("AIからの応答が空でした。")

    cleaned = _FENCE_RE.sub("", raw_text).strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end < start:
        logger.warning("No JSON object found in model output")
        logger.debug("Raw model output: %r", raw_text)
        raise ExtractionError("有効なデータが見つかりませんでした。")

    candidate = cleaned[start : end + 1]
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        try:
            parsed = json.loads(sanitize(candidate))
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse JSON from model output: %s", e)
            logger.debug("Candidate span: %r", candidate)
            raise ExtractionError("情報の解析に失敗しました。") from e

    if not isinstance(parsed, dict):
        raise ExtractionError("応答がJSONオブジェクトではありません。")
    return parsed
