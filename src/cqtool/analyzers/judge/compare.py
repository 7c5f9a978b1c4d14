"""Local output comparison for the judge.

The model reports what the program printed; whether that matches the
expected output is decided here, deterministically, with the same modes
the prompt describes.
"""

from __future__ import annotations

import math
import re

from cqtool.schemas.request import NormalizeOptions

DEFAULT_TOLERANCE = 1e-6

_INTERNAL_WHITESPACE = re.compile(r"[ \t]+")


def normalize_output(text: str, options: NormalizeOptions) -> str:
    """Apply the normalization flags in a fixed order."""
    if options.unify_newlines_to_lf:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")
    if options.trim_line_trailing_space:
        lines = [line.rstrip(" \t") for line in lines]
    if options.collapse_internal_whitespace:
        lines = [_INTERNAL_WHITESPACE.sub(" ", line).strip() for line in lines]
    if options.trim_outer_blank_lines:
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
    text = "\n".join(lines)
    if options.lowercase:
        text = text.lower()
    return text


def _as_float(token: str) -> float | None:
    try:
        number = float(token)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _tokens_close(actual: list[str], expected: list[str], tolerance: float) -> bool:
    if len(actual) != len(expected):
        return False
    for a, e in zip(actual, expected):
        if a == e:
            continue
        fa, fe = _as_float(a), _as_float(e)
        if fa is None or fe is None or abs(fa - fe) > tolerance:
            return False
    return True


def outputs_match(
    actual: str,
    expected: str,
    *,
    mode: str = "exact",
    normalize: NormalizeOptions | None = None,
    tolerance: float | None = None,
) -> bool:
    """Compare program output against the expected output.

    Modes:
    - ``exact``: identical after normalization
    - ``case_insensitive``: identical ignoring case
    - ``token``: same whitespace-separated tokens in the same order
    - ``lineset``: same set of non-blank lines, order ignored
    - ``float_tolerance``: same tokens, numbers equal within ``tolerance``

    Unknown modes compare exactly.
    """
    options = (normalize or NormalizeOptions()).resolved(mode)
    a = normalize_output(actual, options)
    e = normalize_output(expected, options)

    if mode == "case_insensitive":
        return a.casefold() == e.casefold()
    if mode == "token":
        return a.split() == e.split()
    if mode == "lineset":
        return {line.strip() for line in a.splitlines() if line.strip()} == {
            line.strip() for line in e.splitlines() if line.strip()
        }
    if mode == "float_tolerance":
        return _tokens_close(a.split(), e.split(), DEFAULT_TOLERANCE if tolerance is None else tolerance)
    return a == e
