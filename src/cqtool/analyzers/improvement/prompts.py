"""Prompts for improvement suggestions."""

SYSTEM_PROMPT = """\
You are a code quality assistant and professional code reviewer. Focus on \
correctness, readability, maintainability, and efficiency. Return only a \
JSON array.
"""

LANGUAGE_HINTS = {
    "python": "Prefer idiomatic constructs (comprehensions, context managers, f-strings) and PEP 8 naming.",
    "javascript": "Prefer const/let, strict equality, async/await over nested callbacks.",
    "typescript": "Prefer precise types over any, readonly where possible, discriminated unions.",
    "java": "Prefer try-with-resources, immutable value objects, and the standard collections API.",
}

PROMPT_TEMPLATE = """\
Review the following {language} code and suggest the top {count} improvements.

Rules:
- Return only a JSON array.
- Each suggestion must contain: "type" (critical/high/medium/low), "category", "title", "description", "impact".
- Prioritize critical and high issues first.
- Each description should be concise (1-2 sentences), specific, and context-aware. Avoid generic advice.
- {hint}

Code:
{code}

Example format:
[
  {{
    "type": "critical",
    "category": "Reliability",
    "title": "Handle missing input",
    "description": "input() may raise EOFError when stdin is empty; catch it and report a usage message",
    "impact": "Prevents crashes on empty input"
  }}
]"""
