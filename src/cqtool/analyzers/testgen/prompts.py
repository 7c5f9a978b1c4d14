"""Prompts for test case generation."""

SYSTEM_PROMPT = """\
You are an advanced test case generation AI with deep code analysis \
capabilities. Your test cases must be deterministic and accurately reflect \
the code's behavior. Return only a raw JSON array.
"""

LANGUAGE_HINTS = {
    "java": """\
- Analyze class structure, method signatures, and exception handling
- Consider Scanner input patterns and System.out.println output formats
- Account for checked exceptions (IOException, etc.) and runtime exceptions
- For input with Scanner, format as space or newline separated values""",
    "python": """\
- Analyze function definitions, control flow, and exception handling
- Consider input() patterns and print() output formats
- Account for both raised exceptions and assertion errors
- For input with input(), provide each value on a separate line""",
    "javascript": """\
- Analyze function definitions, control flow, and error handling
- Consider console.log output formats and process.argv input patterns
- Account for thrown errors and rejected promises""",
    "typescript": """\
- Analyze function definitions, control flow, and error handling
- Consider console.log output formats and process.argv input patterns
- Account for thrown errors and rejected promises""",
}

EXAMPLE = """\
[
  {
    "input": "5 7",
    "expectedOutput": "Sum: 12",
    "executionDetails": "Basic addition with positive integers",
    "expectedExceptionType": null,
    "expectedExceptionMessage": null
  },
  {
    "input": "abc def",
    "expectedOutput": "",
    "executionDetails": "Invalid non-numeric input",
    "expectedExceptionType": "NumberFormatException",
    "expectedExceptionMessage": "For input string: \\"abc\\""
  }
]"""

PROMPT_TEMPLATE = """\
First, analyze this {language} code by:
1. Identifying input mechanisms (Scanner, input(), args, etc.)
2. Tracing control flow through conditionals, loops, and function calls
3. Detecting exception/error handling patterns
4. Determining boundary conditions and edge cases
5. Understanding the expected output format

{hint}

Then, generate a JSON array with {count} test cases. Each test case contains:
- "input": the stdin given to the program, as a string
- "expectedOutput": the EXACT output the program would produce, including formatting
- "executionDetails": what the test case is checking
- "expectedExceptionType": the exception type if one is expected, otherwise null
- "expectedExceptionMessage": the exception message if one is expected, otherwise null

Cover: a happy path, an edge case, a boundary case, an error case, and a case
exercising multiple code paths.

Code:
{code}

Do NOT return any explanation or comments. Only the raw JSON array, for example:
{example}"""
