"""
Quiz JSON Parser

The quiz prompt asks Gemini for a bare JSON object, but the model
sometimes wraps it in prose ("Here is your quiz: {...} Good luck!").

parse_quiz_json:
1. json.loads the whole text; if that works, return it untouched.
2. Otherwise take everything from the first "{" to the last "}" and
   parse that.
3. Nothing to take, or it still doesn't parse -> QuizParseError.

Only JSON validity is guaranteed; the caller checks the shape.

Known limitation: the span is greedy, so braces inside surrounding
prose end up in the captured text. This is kept as-is.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


class QuizParseError(ValueError):
    """No structured result could be recovered from the generated text."""


def parse_quiz_json(raw_text: str) -> Any:
    try:
        return json.loads(raw_text)
    except (json.JSONDecodeError, TypeError):
        pass

    match = _JSON_SPAN.search(raw_text or "")
    if match is None:
        logger.warning(f"No JSON object in generated quiz: {(raw_text or '')[:200]!r}")
        raise QuizParseError("No JSON found in response")

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Could not salvage quiz JSON: {e}")
        raise QuizParseError("No structured result could be recovered") from e
