"""Prompts for the comprehensive analysis."""

SYSTEM_PROMPT = """\
You are a senior software engineer and security expert. Analyze code \
thoroughly and respond with valid JSON only. Be precise and practical in \
your assessments.
"""

OUTPUT_SCHEMA = """\
{
  "complexity": {
    "cyclomaticComplexity": <number 1-50>,
    "timeComplexity": "<Big O notation like O(1), O(n), O(n²)>",
    "spaceComplexity": "<Big O notation>",
    "maintainabilityIndex": <number 0-100>,
    "readabilityScore": <number 0-100>
  },
  "quality": {
    "overallScore": <number 0-100>,
    "codeSmells": [
      {"type": "<smell type>", "severity": "<low|medium|high|critical>",
       "description": "<detailed description>", "line": <line number if applicable>,
       "suggestion": "<how to fix>"}
    ],
    "violations": [
      {"category": "<violation category>", "severity": "<minor|major>",
       "description": "<what's wrong>", "line": <line number if applicable>,
       "impact": "<why it matters>"}
    ]
  },
  "security": [
    {"issue": "<security issue>", "severity": "<low|medium|high|critical>",
     "description": "<detailed explanation>", "recommendation": "<how to fix>",
     "line": <line number if applicable>}
  ],
  "performance": [
    {"issue": "<performance issue>", "impact": "<low|medium|high>",
     "description": "<what's inefficient>", "optimization": "<how to optimize>",
     "line": <line number if applicable>}
  ],
  "recommendations": {
    "immediate": ["<quick fixes>"],
    "shortTerm": ["<1-2 day improvements>"],
    "longTerm": ["<major refactoring suggestions>"]
  },
  "summary": {
    "strengths": ["<what the code does well>"],
    "weaknesses": ["<main problems>"],
    "priorityLevel": "<low|medium|high|critical>",
    "estimatedFixTime": "<time estimate>"
  }
}"""

LANGUAGE_HINTS = {
    "python": "PEP 8 style, mutable default arguments, broad except clauses, injection through eval/exec or subprocess with shell=True.",
    "javascript": "== vs ===, unhandled promise rejections, prototype pollution, innerHTML/XSS sinks, var hoisting.",
    "typescript": "Use of any, non-null assertions, unchecked casts, plus the usual JavaScript pitfalls.",
    "java": "Resource leaks without try-with-resources, swallowed exceptions, SQL built by string concatenation, mutable statics.",
    "c": "Buffer overflows, unchecked malloc, format-string bugs, integer overflow, use after free.",
    "cpp": "Raw owning pointers, missing RAII, iterator invalidation, undefined behaviour, buffer overflows.",
    "go": "Ignored error returns, goroutine leaks, data races on shared maps, defer in loops.",
    "php": "SQL injection, unescaped output, include of user-controlled paths, weak comparisons.",
}

PROMPT_TEMPLATE = """\
As an expert software engineer, perform a comprehensive analysis of the following {language} code.

IMPORTANT: Respond with a valid JSON object following this exact structure:

{schema}

Code to analyze:
{code}

Focus on:
- Accurate complexity analysis
- Real security vulnerabilities
- Performance bottlenecks
- Code maintainability
- Best practices for {language}: {hint}
- Realistic time estimates

Provide specific, actionable recommendations with line numbers where possible."""
