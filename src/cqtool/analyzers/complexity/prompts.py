"""Prompts for the complexity analysis."""

SYSTEM_PROMPT = """\
You are an expert software engineer specializing in algorithm analysis and \
computational complexity. Respond with a single JSON object only.
"""

OUTPUT_SCHEMA = """\
{
  "timeComplexity": {
    "notation": "O(n log n)",
    "bestCase": "O(n)",
    "averageCase": "O(n log n)",
    "worstCase": "O(n²)",
    "explanation": "Detailed explanation of why this complexity applies...",
    "factors": ["Array iteration", "Sorting operation"],
    "confidence": 95
  },
  "spaceComplexity": {
    "notation": "O(n)",
    "auxiliary": "O(log n)",
    "total": "O(n)",
    "explanation": "Detailed explanation of memory usage...",
    "factors": ["Input array storage", "Stack space for recursion"],
    "confidence": 90
  },
  "algorithmType": "Divide and Conquer",
  "dataStructures": ["Array", "Stack"],
  "optimizationSuggestions": ["..."]
}"""

LANGUAGE_HINTS = {
    "python": "Account for hidden costs: list slicing copies, `in` on lists is O(n), string concatenation in loops, sorted() is O(n log n).",
    "javascript": "Account for hidden costs: Array.prototype.includes/indexOf are O(n), spread and slice copy, sort is O(n log n).",
    "typescript": "Account for hidden costs: Array.prototype.includes/indexOf are O(n), spread and slice copy, sort is O(n log n).",
    "java": "Account for hidden costs: ArrayList.remove(0) is O(n), String concatenation in loops, Collections.sort is O(n log n).",
    "cpp": "Account for hidden costs: vector::erase at the front is O(n), std::map is O(log n) per operation, std::sort is O(n log n).",
}

PROMPT_TEMPLATE = """\
Analyze the following {language} code and provide a comprehensive complexity analysis.

Code to analyze:
{code}

Static Analysis Results:
- Total loops: {loops}
- Nested loop depth: {nested_loops}
- Recursive functions: {recursive_calls}
- Data structure allocations: {allocations}

Provide the analysis in the following JSON format:

{schema}

Rules for analysis:
1. Be precise with Big O notation
2. Consider best, average, and worst cases for time complexity
3. Distinguish between auxiliary and total space complexity
4. Provide confidence scores (0-100) based on code clarity
5. Include realistic optimization suggestions
6. Consider the actual algorithm being implemented, not just loop counting
7. {hint}

Respond ONLY with the JSON object, no additional text."""
