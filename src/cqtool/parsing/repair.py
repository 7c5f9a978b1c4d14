"""One bounded repair pass over JSON-ish text that failed to parse.

Two textual fixes are applied, in order, exactly once:

- drop commas that sit directly before a closing ``}`` or ``]``
- if the text opens with ``{`` or ``[`` but does not end with the matching
  closer, append that one closer (a dangling comma at the end goes first)

Both are idempotent and leave valid JSON untouched, so
``repair_json_text(repair_json_text(s)) == repair_json_text(s)``.
"""

from __future__ import annotations

import json
import logging

from cqtool.parsing.extractor import ExtractionResult, Parsed, Unparseable

logger = logging.getLogger(__name__)

EXCERPT_LIMIT = 500

_MATCHING = {"{": "}", "[": "]"}


def strip_trailing_commas(text: str) -> str:
    """Remove commas (and comma runs) that precede a closing bracket.

    Commas inside string literals are left alone.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    n = len(text)
    for i, ch in enumerate(text):
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < n and (text[j].isspace() or text[j] == ","):
                j += 1
            if j < n and text[j] in "}]":
                continue
        out.append(ch)
    return "".join(out)


def complete_closing_bracket(text: str) -> str:
    """Append the closer matching the first character, if it is missing."""
    stripped = text.strip()
    if not stripped or stripped[0] not in _MATCHING:
        return stripped
    closer = _MATCHING[stripped[0]]
    if stripped.endswith(closer):
        return stripped
    while stripped.endswith(","):
        stripped = stripped[:-1].rstrip()
    return stripped + closer


def repair_json_text(text: str) -> str:
    """Apply the repair pass once and return the repaired text."""
    return complete_closing_bracket(strip_trailing_commas(text.strip()))


def recover(result: ExtractionResult) -> ExtractionResult:
    """Give an ``Unparseable`` result one repair attempt.

    ``Parsed`` values pass through. On failure the returned ``Unparseable``
    keeps the original text and carries the repaired candidate.
    """
    if isinstance(result, Parsed):
        return result

    source = result.candidate or result.raw_text
    repaired = repair_json_text(source)
    try:
        value = json.loads(repaired)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.warning("JSON repair failed after %s: %s", result.reason, exc)
        return Unparseable(
            raw_text=result.raw_text,
            reason=f"{result.reason}; repair failed",
            candidate=repaired,
        )

    logger.warning("Model output needed repair (%s)", result.reason)
    return Parsed(value, "repaired")


def excerpt(text: str, limit: int = EXCERPT_LIMIT) -> str:
    """Return at most ``limit`` characters of ``text`` for diagnostics."""
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
