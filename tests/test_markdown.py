"""Tests for Markdown report generation."""

from __future__ import annotations

import pytest

from cqtool.output.markdown import render_markdown
from cqtool.schemas.base import Diagnostic
from cqtool.schemas.complexity import ComplexityOutput
from cqtool.schemas.comprehensive import CodeSmell, ComprehensiveOutput, QualityReport, SecurityFinding
from cqtool.schemas.improvement import Improvement, ImprovementOutput
from cqtool.schemas.judge import JudgeOutput
from cqtool.schemas.recommendation import RecommendationOutput
from cqtool.schemas.request import AnalysisKind
from cqtool.schemas.simulation import SimulationOutput
from cqtool.schemas.syntax import SyntaxIssue, SyntaxOutput
from cqtool.schemas.testgen import TestCase, TestGenOutput
from cqtool.static_analysis import estimate_complexity


class TestRenderMarkdown:
    def test_title(self) -> None:
        md = render_markdown(AnalysisKind.EXECUTION_SIMULATION, SimulationOutput(output="42"))
        assert md.startswith("# Execution Simulation\n")
        assert "```\n42\n```" in md

    def test_custom_title(self) -> None:
        md = render_markdown(AnalysisKind.SYNTAX, SyntaxOutput(), title="main.py")
        assert md.startswith("# main.py\n")

    def test_comprehensive(self) -> None:
        result = ComprehensiveOutput(
            quality=QualityReport(
                overall_score=72,
                code_smells=[CodeSmell(type="Long method", severity="medium", description="Too long", line=4)],
            ),
            security=[SecurityFinding(issue="eval", severity="critical", description="eval on input",
                                      recommendation="Use ast.literal_eval")],
        )
        md = render_markdown(AnalysisKind.COMPREHENSIVE, result)
        assert "| Overall score | 72/100 |" in md
        assert "**Long method** (line 4): Too long" in md
        assert "🔴 **eval**" in md
        assert "Fix: Use ast.literal_eval" in md

    def test_syntax(self) -> None:
        result = SyntaxOutput(errors=[SyntaxIssue(line=3, column=7, message="Expected ':'", code="E001",
                                                  quick_fix="Add ':'")])
        md = render_markdown(AnalysisKind.SYNTAX, result)
        assert "**Status:** invalid | **Errors:** 1" in md
        assert "L3:7 `E001` Expected ':' (fix: Add ':')" in md

    def test_complexity(self) -> None:
        md = render_markdown(AnalysisKind.COMPLEXITY, estimate_complexity("for x in xs:\n    pass\n", "python"))
        assert "| Time | O(n) | 60% |" in md
        assert "1 loops, nesting depth 1" in md
        assert "## Optimization Suggestions" in md

    def test_testgen_exception_case(self) -> None:
        result = TestGenOutput(test_cases=[
            TestCase(input="1 2", expected_output="3", execution_details="Adds"),
            TestCase(input="x", execution_details="Bad input", expected_exception_type="ValueError",
                     expected_exception_message="invalid literal"),
        ])
        md = render_markdown(AnalysisKind.TESTGEN, result)
        assert "## Test 1: Adds" in md
        assert "**Raises:** `ValueError`: invalid literal" in md

    def test_improvements(self) -> None:
        result = ImprovementOutput(improvements=[Improvement(type="high", category="Safety", title="Validate input",
                                                             description="Check ranges.", impact="Fewer crashes")])
        md = render_markdown(AnalysisKind.IMPROVEMENT, result)
        assert "## 1. 🔴 Validate input (Safety)" in md
        assert "*Impact: Fewer crashes*" in md

    def test_runtime_error(self) -> None:
        md = render_markdown(AnalysisKind.EXECUTION_SIMULATION, SimulationOutput(output="Runtime Error",
                                                                                 runtime_error=True))
        assert "**Runtime error**" in md

    def test_judge_verdict(self) -> None:
        result = JudgeOutput(expected_output="2", actual_output="3", status="Fail", compare_mode="token",
                             exit_code=0, runtime_ms=12, verdict_message="Output does not match expected output.")
        md = render_markdown(AnalysisKind.JUDGE, result)
        assert "**Verdict:** ❌ Fail (token) | **Exit code:** 0 | **Runtime:** 12 ms" in md
        assert "**Expected output:**\n```\n2\n```" in md
        assert "**Actual output:**\n```\n3\n```" in md
        assert "stderr" not in md

    def test_judge_stderr_shown(self) -> None:
        md = render_markdown(AnalysisKind.JUDGE, JudgeOutput(status="Fail", stderr="Traceback"))
        assert "**stderr:**\n```\nTraceback\n```" in md

    def test_recommendations_numbered(self) -> None:
        md = render_markdown(AnalysisKind.RECOMMENDATION, RecommendationOutput(text="x", suggestions=["One", "Two"]))
        assert "1. One\n2. Two" in md

    def test_recommendation_text_without_items(self) -> None:
        md = render_markdown(AnalysisKind.RECOMMENDATION, RecommendationOutput(text="No suggestions generated."))
        assert md.endswith("No suggestions generated.\n")

    @pytest.mark.parametrize("kind", list(AnalysisKind))
    def test_defaults_render(self, kind: AnalysisKind) -> None:
        from cqtool.analyzers.registry import get_analyzer

        md = render_markdown(kind, get_analyzer(kind).output_model())
        assert md.endswith("\n")

    def test_diagnostics_shown(self) -> None:
        result = SyntaxOutput(diagnostics=[Diagnostic(kind="parse-error", message="Could not parse")])
        md = render_markdown(AnalysisKind.SYNTAX, result)
        assert "**Degraded result**" in md
        assert "`parse-error`: Could not parse" in md
