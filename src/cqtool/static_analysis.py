"""Regex heuristics over source text: loops, nesting, recursion, allocations.

These are cheap guesses, not a parser. They feed the complexity prompt as
hints and stand in for the model when it cannot be reached.
"""

from __future__ import annotations

import re

from cqtool.schemas.base import Diagnostic
from cqtool.schemas.complexity import ComplexityOutput, SpaceComplexity, StaticMetrics, TimeComplexity

_LOOP_PATTERNS = [
    re.compile(r"\bfor\s*\("),
    re.compile(r"\bwhile\b"),
    re.compile(r"\bdo\s*\{"),
    re.compile(r"\.forEach\s*\("),
    re.compile(r"\.map\s*\("),
    re.compile(r"\.filter\s*\("),
    re.compile(r"\.reduce\s*\("),
    re.compile(r"\bfor\s+\w+(?:\s*,\s*\w+)*\s+in\s+"),  # Python / shell
    re.compile(r"\bfor\s*\w+\s*:=\s*range\b|\bfor\s+\w+\s*:=|\bfor\s*\{"),  # Go
]

_ALLOC_PATTERNS = [
    re.compile(r"new\s+(?:Array|ArrayList|Vector|List|HashMap|HashSet|TreeMap|TreeSet|Map|Set)\b"),
    re.compile(r"\[\s*\]"),
    re.compile(r"\{\s*\}"),
    re.compile(r"\bdict\s*\("),
    re.compile(r"\blist\s*\("),
    re.compile(r"\bset\s*\("),
]

_FUNCTION_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    "javascript": [
        re.compile(r"function\s+(\w+)\s*\("),
        re.compile(r"(\w+)\s*=\s*function\b"),
        re.compile(r"(\w+)\s*=\s*\([^)]*\)\s*=>"),
    ],
    "python": [re.compile(r"\bdef\s+(\w+)\s*\(")],
    "java": [re.compile(r"(?:public|private|protected|static|\s)+[\w<>\[\]]+\s+(\w+)\s*\([^)]*\)\s*(?:throws[\w\s,]+)?\{")],
    "cpp": [re.compile(r"\w+\s+(\w+)\s*\([^)]*\)\s*(?:const\s*)?\{")],
    "csharp": [re.compile(r"(?:public|private|protected|internal|static|\s)+[\w<>\[\]]+\s+(\w+)\s*\([^)]*\)\s*\{")],
    "go": [re.compile(r"\bfunc\s+(?:\([^)]*\)\s*)?(\w+)\s*\(")],
    "rust": [re.compile(r"\bfn\s+(\w+)\s*[<(]")],
    "ruby": [re.compile(r"\bdef\s+(?:self\.)?(\w+)")],
}
_LANGUAGE_ALIASES = {
    "typescript": "javascript",
    "nodejs": "javascript",
    "js": "javascript",
    "ts": "javascript",
    "python3": "python",
    "py": "python",
    "c": "cpp",
    "c++": "cpp",
    "c#": "csharp",
    "kotlin": "java",
    "scala": "java",
}
_INDENT_LANGUAGES = {"python"}
_KEYWORDS = {"if", "for", "while", "switch", "catch", "return", "function", "else"}

_SORTING = re.compile(r"\.sort\s*\(|Arrays\.sort|Collections\.sort|\bsorted\s*\(", re.IGNORECASE)
_BINARY_SEARCH = re.compile(r"binary.*search|while.*mid|left.*right.*middle", re.IGNORECASE)


def _family(language: str) -> str:
    key = language.strip().lower()
    return _LANGUAGE_ALIASES.get(key, key)


def _is_loop(line: str) -> bool:
    return any(p.search(line) for p in _LOOP_PATTERNS)


def count_loops(code: str) -> int:
    return sum(len(p.findall(code)) for p in _LOOP_PATTERNS)


def max_loop_depth(code: str, language: str) -> int:
    """Deepest loop nesting.

    Indentation decides scope for Python; elsewhere a line containing
    ``}`` closes the innermost open loop.
    """
    lines = [line for line in code.splitlines() if line.strip()]
    max_depth = 0
    if _family(language) in _INDENT_LANGUAGES:
        open_loops: list[int] = []  # indentation of each enclosing loop header
        for line in lines:
            indent = len(line) - len(line.lstrip())
            while open_loops and indent <= open_loops[-1]:
                open_loops.pop()
            if _is_loop(line):
                open_loops.append(indent)
                max_depth = max(max_depth, len(open_loops))
        return max_depth

    depth = 0
    for line in lines:
        stripped = line.strip()
        if _is_loop(stripped):
            depth += 1
            max_depth = max(max_depth, depth)
        if "}" in stripped and depth > 0:
            depth -= 1
    return max_depth


def function_names(code: str, language: str) -> list[str]:
    """Names of functions defined in ``code``, in order, without duplicates."""
    patterns = _FUNCTION_PATTERNS.get(_family(language), _FUNCTION_PATTERNS["javascript"])
    names: dict[str, None] = {}
    for pattern in patterns:
        for match in pattern.finditer(code):
            if match.group(1) not in _KEYWORDS:
                names[match.group(1)] = None
    return list(names)


def count_recursive_functions(code: str, language: str) -> int:
    """Functions whose own body (up to the next definition) calls them."""
    patterns = _FUNCTION_PATTERNS.get(_family(language), _FUNCTION_PATTERNS["javascript"])
    definitions = sorted(
        (m for p in patterns for m in p.finditer(code) if m.group(1) not in _KEYWORDS),
        key=lambda m: m.start(),
    )
    recursive: set[str] = set()
    for i, match in enumerate(definitions):
        body_end = definitions[i + 1].start() if i + 1 < len(definitions) else len(code)
        body = code[match.end():body_end]
        if re.search(rf"\b{re.escape(match.group(1))}\s*\(", body):
            recursive.add(match.group(1))
    return len(recursive)


def count_allocations(code: str) -> int:
    return sum(len(p.findall(code)) for p in _ALLOC_PATTERNS)


def analyze_source(code: str, language: str) -> StaticMetrics:
    """Run every heuristic over ``code``."""
    return StaticMetrics(
        loops=count_loops(code),
        nested_loops=max_loop_depth(code, language),
        recursive_calls=count_recursive_functions(code, language),
        data_structure_allocations=count_allocations(code),
    )


def estimate_complexity(code: str, language: str, reason: str = "") -> ComplexityOutput:
    """Non-LLM complexity estimate built from the static metrics alone."""
    metrics = analyze_source(code, language)

    time_notation = "O(1)"
    if metrics.nested_loops >= 3:
        time_notation = "O(n³)"
    elif metrics.nested_loops >= 2:
        time_notation = "O(n²)"
    elif metrics.loops > 0 or metrics.recursive_calls > 0:
        time_notation = "O(n)"

    if _SORTING.search(code) and time_notation == "O(n)":
        time_notation = "O(n log n)"
    if _BINARY_SEARCH.search(code) and time_notation == "O(1)":
        time_notation = "O(log n)"

    space_notation = "O(1)"
    if metrics.recursive_calls > 0 or metrics.data_structure_allocations > 0:
        space_notation = "O(n)"

    diagnostics = [Diagnostic(kind="upstream-error", message=reason)] if reason else []
    return ComplexityOutput(
        time_complexity=TimeComplexity(
            notation=time_notation,
            best_case=time_notation,
            average_case=time_notation,
            worst_case=time_notation,
            explanation=f"Estimated from static analysis. Loop nesting depth {metrics.nested_loops}.",
            factors=[f"{metrics.loops} loops", f"{metrics.recursive_calls} recursive functions"],
            confidence=60,
        ),
        space_complexity=SpaceComplexity(
            notation=space_notation,
            auxiliary=space_notation,
            total=space_notation,
            explanation="Estimated from data structure allocations and recursion.",
            factors=[
                f"{metrics.data_structure_allocations} data structures",
                f"{metrics.recursive_calls} recursive functions",
            ],
            confidence=55,
        ),
        algorithm_type="Unknown",
        data_structures=["Array"] if metrics.data_structure_allocations else [],
        optimization_suggestions=[
            "Consider reducing nested loops if possible",
            "Use more efficient data structures",
            "Consider iterative approaches instead of recursion",
        ],
        static_analysis=metrics,
        diagnostics=diagnostics,
    )
