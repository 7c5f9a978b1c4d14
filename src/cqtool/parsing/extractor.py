"""Locate and parse the JSON payload inside free-form model text.

Attempts run in order and the first success wins:

1. the whole (trimmed) text
2. the first ```json fenced block
3. the first fenced block with any (or no) tag
4. the first balanced ``{...}`` / ``[...]`` span that parses, found with a scanner
   that ignores brackets inside string literals

``extract`` never raises; failure is an ``Unparseable`` value carrying the
original text and the best candidate substring for the repair pass.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

logger = logging.getLogger(__name__)

Shape = Literal["object", "array"]

_JSON_FENCE = re.compile(r"```[ \t]*json[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[^\n`]*\r?\n?(.*?)```", re.DOTALL)
# An opened fence that never closes (truncated output)
_OPEN_FENCE = re.compile(r"```[^\n`]*\r?\n(.*)\Z", re.DOTALL)

_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = {"}": "{", "]": "["}


@dataclass(frozen=True)
class Parsed:
    """A successfully decoded JSON value and the stage that produced it."""

    value: Any
    stage: str


@dataclass(frozen=True)
class Unparseable:
    """Extraction failed.

    ``raw_text`` is the untouched model output, ``candidate`` the substring
    most likely to be the intended JSON, ``reason`` names the last stage tried.
    """

    raw_text: str
    reason: str
    candidate: str = ""


ExtractionResult = Parsed | Unparseable


def _loads(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return False, None


def scan_balanced(text: str, start: int) -> int | None:
    """Return the index just past the bracket matching ``text[start]``.

    Brackets inside double-quoted strings (including escaped quotes) are
    ignored. Returns ``None`` when the span is unbalanced or truncated.
    """
    stack: list[str] = []
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _OPENERS:
            stack.append(ch)
        elif ch in _CLOSERS:
            if not stack or stack[-1] != _CLOSERS[ch]:
                return None
            stack.pop()
            if not stack:
                return i + 1
    return None


def _scan_spans(source: str, expect: Shape) -> Parsed | tuple[str, str] | None:
    """Try each top-level balanced span in ``source`` until one parses.

    Only the expected bracket is scanned for, unless ``source`` has none.
    A span that fails to parse is skipped whole, so values nested inside
    it are never returned. An unbalanced span ends the scan. On failure
    the longest failed span is returned with its reason; ``None`` means
    there was no opener at all.
    """
    preferred, other = ("{", "[") if expect == "object" else ("[", "{")
    opener = preferred if preferred in source else other
    start = source.find(opener)
    if start < 0:
        return None

    failure: tuple[str, str] = ("", "")
    while start >= 0:
        end = scan_balanced(source, start)
        if end is None:
            # Unbalanced: hand everything from the opener on to the repairer.
            span, reason = source[start:], "unbalanced brackets"
            start = -1
        else:
            ok, value = _loads(source[start:end])
            if ok:
                return Parsed(value, "span")
            span, reason = source[start:end], "bracketed span is not valid JSON"
            start = source.find(opener, end)
        if len(span) > len(failure[0]):
            failure = (span, reason)
    return failure


def extract(text: str, *, expect: Shape = "object") -> ExtractionResult:
    """Extract a JSON value from ``text``.

    ``expect`` picks which bracket the span scan looks for first: objects
    for most analyses, arrays for list-shaped ones (test cases,
    improvements).
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return Unparseable(raw_text=text or "", reason="empty response", candidate="")

    # 1. Whole text
    ok, value = _loads(trimmed)
    if ok:
        return Parsed(value, "direct")

    # 2 + 3. Fenced blocks; only the first block of each kind is used.
    candidate = trimmed
    reason = "direct parse failed"
    json_fence = _JSON_FENCE.search(trimmed)
    if json_fence:
        interior = json_fence.group(1).strip()
        ok, value = _loads(interior)
        if ok:
            return Parsed(value, "json-fence")
        candidate, reason = interior, "json-fenced block is not valid JSON"

    any_fence = _ANY_FENCE.search(trimmed)
    if any_fence and (not json_fence or any_fence.start() != json_fence.start()):
        interior = any_fence.group(1).strip()
        ok, value = _loads(interior)
        if ok:
            return Parsed(value, "fence")
        if not json_fence:
            candidate, reason = interior, "fenced block is not valid JSON"

    if not json_fence and not any_fence:
        open_fence = _OPEN_FENCE.search(trimmed)
        if open_fence:
            candidate = open_fence.group(1).strip()

    # 4. Balanced span, searched in the candidate first, then the whole text
    for source in dict.fromkeys((candidate, trimmed)):
        found = _scan_spans(source, expect)
        if found is None:
            continue
        if isinstance(found, Parsed):
            return found
        candidate, reason = found
        break
    else:
        reason = "no JSON object or array found"

    logger.debug("Extraction failed (%s); %d chars of model output", reason, len(trimmed))
    return Unparseable(raw_text=text, reason=reason, candidate=candidate)

