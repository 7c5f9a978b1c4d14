"""Markdown report builder — renders any StructuredAnalysis for the terminal."""

from __future__ import annotations

from cqtool.schemas.base import AnalysisOutput
from cqtool.schemas.complexity import ComplexityOutput
from cqtool.schemas.comprehensive import ComprehensiveOutput
from cqtool.schemas.improvement import ImprovementOutput
from cqtool.schemas.judge import JudgeOutput
from cqtool.schemas.recommendation import RecommendationOutput
from cqtool.schemas.request import AnalysisKind
from cqtool.schemas.simulation import SimulationOutput
from cqtool.schemas.syntax import SyntaxIssue, SyntaxOutput
from cqtool.schemas.testgen import TestGenOutput

_SEVERITY_ICON = {
    "critical": "🔴", "high": "🔴", "error": "🔴", "major": "🔴",
    "medium": "🟡", "warning": "🟡",
    "low": "🟢", "minor": "🟢", "info": "🔵",
}


def _icon(severity: str) -> str:
    return _SEVERITY_ICON.get(severity.lower(), "⚪")


def render_markdown(kind: AnalysisKind, analysis: AnalysisOutput, *, title: str = "") -> str:
    """Render one analysis result into a Markdown string."""
    sections: list[str] = [f"# {title or kind.value.replace('-', ' ').title()}\n"]

    if analysis.diagnostics:
        sections.append("> **Degraded result** — the model answer could not be used as-is.")
        for diag in analysis.diagnostics:
            sections.append(f"> - `{diag.kind}`: {diag.message}")
        sections.append("")

    renderer = _RENDERERS.get(kind)
    if renderer is not None:
        sections.extend(renderer(analysis))
    return "\n".join(sections).rstrip() + "\n"


def _render_comprehensive(result: ComprehensiveOutput) -> list[str]:
    sections: list[str] = []
    c = result.complexity
    sections.append("## Metrics\n")
    sections.append("| Metric | Value |")
    sections.append("|--------|-------|")
    sections.append(f"| Overall score | {result.quality.overall_score}/100 |")
    sections.append(f"| Cyclomatic complexity | {c.cyclomatic_complexity} |")
    sections.append(f"| Time complexity | {c.time_complexity} |")
    sections.append(f"| Space complexity | {c.space_complexity} |")
    sections.append(f"| Maintainability index | {c.maintainability_index} |")
    sections.append(f"| Readability score | {c.readability_score} |")
    sections.append("")

    if result.quality.code_smells:
        sections.append("## Code Smells\n")
        for smell in result.quality.code_smells:
            where = f" (line {smell.line})" if smell.line else ""
            sections.append(f"- {_icon(smell.severity)} **{smell.type}**{where}: {smell.description}")
            if smell.suggestion:
                sections.append(f"  - Suggestion: {smell.suggestion}")
        sections.append("")

    if result.quality.violations:
        sections.append("## Violations\n")
        for v in result.quality.violations:
            sections.append(f"- {_icon(v.severity)} **{v.category}**: {v.description}")
        sections.append("")

    if result.security:
        sections.append("## Security\n")
        for finding in result.security:
            sections.append(f"- {_icon(finding.severity)} **{finding.issue}**: {finding.description}")
            if finding.recommendation:
                sections.append(f"  - Fix: {finding.recommendation}")
        sections.append("")

    if result.performance:
        sections.append("## Performance\n")
        for finding in result.performance:
            sections.append(f"- {_icon(finding.impact)} **{finding.issue}**: {finding.description}")
            if finding.optimization:
                sections.append(f"  - Optimization: {finding.optimization}")
        sections.append("")

    recs = result.recommendations
    for heading, items in (("Immediate", recs.immediate), ("Short term", recs.short_term), ("Long term", recs.long_term)):
        if items:
            sections.append(f"### {heading}\n")
            sections.extend(f"- {item}" for item in items)
            sections.append("")

    s = result.summary
    if s.strengths or s.weaknesses:
        sections.append("## Summary\n")
        sections.append(f"**Priority:** {s.priority_level} | **Estimated fix time:** {s.estimated_fix_time or 'N/A'}\n")
        sections.extend(f"- ✅ {item}" for item in s.strengths)
        sections.extend(f"- ⚠️ {item}" for item in s.weaknesses)
    return sections


def _issue_line(issue: SyntaxIssue) -> str:
    code = f" `{issue.code}`" if issue.code else ""
    line = f"- {_icon(issue.severity)} L{issue.line}:{issue.column}{code} {issue.message}"
    if issue.quick_fix:
        line += f" (fix: {issue.quick_fix})"
    return line


def _render_syntax(result: SyntaxOutput) -> list[str]:
    status = "valid" if result.is_valid else "invalid"
    sections = [f"**Status:** {status} | **Errors:** {result.total_errors} | **Warnings:** {result.total_warnings}\n"]
    for heading, issues in (("Errors", result.errors), ("Warnings", result.warnings), ("Suggestions", result.suggestions)):
        if issues:
            sections.append(f"## {heading}\n")
            sections.extend(_issue_line(issue) for issue in issues)
            sections.append("")
    return sections


def _render_complexity(result: ComplexityOutput) -> list[str]:
    t, s, m = result.time_complexity, result.space_complexity, result.static_analysis
    sections = [
        f"**Algorithm:** {result.algorithm_type}\n",
        "| | Notation | Confidence |",
        "|--|----------|------------|",
        f"| Time | {t.notation} | {t.confidence}% |",
        f"| Space | {s.notation} | {s.confidence}% |",
        "",
    ]
    if t.explanation:
        sections.append(f"**Time:** {t.explanation}\n")
    if s.explanation:
        sections.append(f"**Space:** {s.explanation}\n")
    sections.append(
        f"*Static analysis: {m.loops} loops, nesting depth {m.nested_loops}, "
        f"{m.recursive_calls} recursive functions, {m.data_structure_allocations} allocations*\n"
    )
    if result.optimization_suggestions:
        sections.append("## Optimization Suggestions\n")
        sections.extend(f"- {item}" for item in result.optimization_suggestions)
    return sections


def _render_testgen(result: TestGenOutput) -> list[str]:
    sections: list[str] = []
    for i, case in enumerate(result.test_cases, 1):
        sections.append(f"## Test {i}: {case.execution_details}\n")
        sections.append(f"**Input:**\n```\n{case.input}\n```")
        if case.expected_exception_type:
            sections.append(f"**Raises:** `{case.expected_exception_type}`: {case.expected_exception_message or ''}\n")
        else:
            sections.append(f"**Expected output:**\n```\n{case.expected_output}\n```\n")
    return sections


def _render_improvement(result: ImprovementOutput) -> list[str]:
    sections: list[str] = []
    for i, imp in enumerate(result.improvements, 1):
        sections.append(f"## {i}. {_icon(imp.type)} {imp.title} ({imp.category})\n")
        sections.append(f"{imp.description}\n")
        if imp.impact:
            sections.append(f"*Impact: {imp.impact}*\n")
    return sections


def _render_simulation(result: SimulationOutput) -> list[str]:
    label = "**Runtime error**" if result.runtime_error else "**Output:**"
    return [label, f"```\n{result.output}\n```"]


def _render_judge(result: JudgeOutput) -> list[str]:
    icon = "✅" if result.status == "Pass" else "❌"
    sections = [
        f"**Verdict:** {icon} {result.status} ({result.compare_mode}) | **Exit code:** {result.exit_code}"
        f" | **Runtime:** {result.runtime_ms} ms\n",
    ]
    if result.verdict_message:
        sections.append(f"{result.verdict_message}\n")
    sections.append(f"**Expected output:**\n```\n{result.expected_output}\n```")
    sections.append(f"**Actual output:**\n```\n{result.actual_output}\n```")
    if result.stderr:
        sections.append(f"**stderr:**\n```\n{result.stderr}\n```")
    return sections


def _render_recommendation(result: RecommendationOutput) -> list[str]:
    if not result.suggestions:
        return [result.text]
    return [f"{i}. {item}" for i, item in enumerate(result.suggestions, 1)]


_RENDERERS = {
    AnalysisKind.COMPREHENSIVE: _render_comprehensive,
    AnalysisKind.SYNTAX: _render_syntax,
    AnalysisKind.COMPLEXITY: _render_complexity,
    AnalysisKind.TESTGEN: _render_testgen,
    AnalysisKind.IMPROVEMENT: _render_improvement,
    AnalysisKind.EXECUTION_SIMULATION: _render_simulation,
    AnalysisKind.JUDGE: _render_judge,
    AnalysisKind.RECOMMENDATION: _render_recommendation,
}
