"""Prompts for the syntax check."""

SYSTEM_PROMPT = """\
You are an expert code analyzer and syntax checker with IntelliSense-like \
capabilities. Provide accurate, actionable syntax analysis in JSON format.
"""

OUTPUT_SCHEMA = """\
{
  "errors": [
    {"line": <1-based line>, "column": <1-based column>, "message": "<description of error>",
     "severity": "error", "type": "<syntax|semantic>", "code": "<ERROR_CODE>", "quickFix": "<suggested fix>"}
  ],
  "warnings": [
    {"line": <1-based line>, "column": <1-based column>, "message": "<description of warning>",
     "severity": "warning", "type": "<syntax|semantic|style>", "code": "<WARNING_CODE>", "quickFix": "<suggested fix>"}
  ],
  "suggestions": [
    {"line": <1-based line>, "column": <1-based column>, "message": "<style or best practice suggestion>",
     "severity": "info", "type": "style", "code": "<SUGGESTION_CODE>", "quickFix": "<suggested improvement>"}
  ]
}"""

LANGUAGE_HINTS = {
    "javascript": """\
- Missing semicolons and proper statement termination
- Incorrect use of == vs ===
- Variable hoisting issues with var vs let/const
- Missing break statements in switch cases
- Unclosed template literals and strings
- Assignment in conditional expressions
- Unreachable code after return statements""",
    "typescript": """\
- All JavaScript issues plus:
- Type annotations and interface compliance
- Missing return type declarations
- Incorrect generic usage
- Access modifier usage (public/private/protected)""",
    "python": """\
- Indentation errors (critical in Python)
- Missing colons after control structures
- Invalid variable names starting with numbers
- Incorrect function/class definitions
- Import statement issues
- Mixed tabs and spaces""",
    "java": """\
- Missing semicolons (required in Java)
- Class naming conventions (PascalCase)
- Missing public static void main method
- Import statement syntax
- Bracket matching for methods and classes""",
    "css": """\
- Missing closing braces
- Invalid property syntax
- Missing semicolons after property values
- Incorrect selector syntax""",
    "html": """\
- Unclosed HTML tags
- Invalid attribute syntax
- Missing DOCTYPE declaration
- Incorrect nesting of elements""",
}

PROMPT_TEMPLATE = """\
Analyze the following {language} code for syntax errors, warnings, and suggestions.

Respond with a valid JSON object following this exact structure:

{schema}

Focus on detecting:
1. **Syntax Errors**: Missing semicolons, unclosed brackets/braces, invalid variable names, unclosed strings
2. **Semantic Issues**: Undefined variables, unreachable code, assignment in conditions
3. **Style Issues**: Code formatting, best practices, performance optimizations

For {language}, pay special attention to:
{hint}

Be precise with line and column numbers.

Code to analyze:
{code}

Return ONLY the JSON object without any additional text."""
