"""Tests for prompt building and per-kind output parsing."""

from __future__ import annotations

import json

import pytest
from pydantic import Field

from cqtool.analyzers.base import GENERIC_HINT, fence, language_hint
from cqtool.analyzers.complexity.analyzer import ComplexityAnalyzer
from cqtool.analyzers.comprehensive.analyzer import ComprehensiveAnalyzer
from cqtool.analyzers.improvement.analyzer import ImprovementAnalyzer
from cqtool.analyzers.recommendation.analyzer import RecommendationAnalyzer, split_suggestions
from cqtool.analyzers.registry import ANALYZERS, get_analyzer
from cqtool.analyzers.simulation.analyzer import SimulationAnalyzer
from cqtool.analyzers.syntax.analyzer import SyntaxAnalyzer
from cqtool.analyzers.syntax.prompts import LANGUAGE_HINTS as SYNTAX_HINTS
from cqtool.analyzers.testgen.analyzer import TestGenAnalyzer
from cqtool.parsing.repair import EXCERPT_LIMIT
from cqtool.schemas.base import AnalysisOutput
from cqtool.schemas.request import AnalysisKind, AnalysisRequest, ConfigOverrides


def _request(kind: AnalysisKind, code: str = "print('hi')", language: str = "python", **kwargs) -> AnalysisRequest:
    return AnalysisRequest(source_code=code, language=language, kind=kind, **kwargs)


class _BoundedOutput(AnalysisOutput):
    score: int = Field(default=0, ge=0)


class _BoundedSyntaxAnalyzer(SyntaxAnalyzer):
    @property
    def output_model(self) -> type[_BoundedOutput]:
        return _BoundedOutput


class TestHelpers:
    def test_known_language_hint(self) -> None:
        assert language_hint(SYNTAX_HINTS, "Python") == SYNTAX_HINTS["python"]

    def test_unknown_language_gets_generic_hint(self) -> None:
        assert language_hint(SYNTAX_HINTS, "brainfuck") == GENERIC_HINT

    def test_fence(self) -> None:
        assert fence("x = 1", "Python") == "```python\nx = 1\n```"


class TestRegistry:
    def test_every_kind_registered(self) -> None:
        assert set(ANALYZERS) == set(AnalysisKind)

    def test_lookup_by_value(self) -> None:
        assert isinstance(get_analyzer("execution-simulation"), SimulationAnalyzer)

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            get_analyzer("lint")


class TestPromptBuilding:
    @pytest.mark.parametrize("kind", list(AnalysisKind))
    def test_prompt_contains_code(self, kind: AnalysisKind) -> None:
        code = "def add(a, b):\n    return a + b"
        prompt = get_analyzer(kind).build_prompt(_request(kind, code=code))
        assert code in prompt

    @pytest.mark.parametrize(
        "kind", [k for k in AnalysisKind if k not in (AnalysisKind.EXECUTION_SIMULATION, AnalysisKind.RECOMMENDATION)],
    )
    def test_unknown_language_still_builds(self, kind: AnalysisKind) -> None:
        prompt = get_analyzer(kind).build_prompt(_request(kind, code="+++.", language="brainfuck"))
        assert "brainfuck" in prompt
        assert "+++." in prompt

    def test_empty_code_allowed(self) -> None:
        prompt = SyntaxAnalyzer().build_prompt(_request(AnalysisKind.SYNTAX, code=""))
        assert "```python\n\n```" in prompt

    def test_syntax_prompt_has_language_hint(self) -> None:
        prompt = SyntaxAnalyzer().build_prompt(_request(AnalysisKind.SYNTAX))
        assert "Indentation errors" in prompt
        assert '"quickFix"' in prompt

    def test_complexity_prompt_embeds_static_metrics(self) -> None:
        code = "for a in xs:\n    for b in xs:\n        print(a, b)\n"
        prompt = ComplexityAnalyzer().build_prompt(_request(AnalysisKind.COMPLEXITY, code=code))
        assert "Total loops: 2" in prompt
        assert "Nested loop depth: 2" in prompt

    def test_testgen_prompt_asks_for_five(self) -> None:
        prompt = TestGenAnalyzer().build_prompt(_request(AnalysisKind.TESTGEN))
        assert "5 test cases" in prompt

    def test_simulation_includes_stdin(self) -> None:
        request = _request(AnalysisKind.EXECUTION_SIMULATION, code="print(input())", stdin="hello")
        analyzer = SimulationAnalyzer()
        assert "hello" in analyzer.build_prompt(request)
        assert "python" in analyzer.get_system_prompt(request)

    def test_system_prompt_override(self) -> None:
        request = _request(AnalysisKind.SYNTAX, config=ConfigOverrides(system_prompt="Be terse."))
        assert SyntaxAnalyzer().system_prompt_for(request) == "Be terse."

    def test_default_system_prompt(self) -> None:
        request = _request(AnalysisKind.SYNTAX)
        assert "syntax checker" in SyntaxAnalyzer().system_prompt_for(request)


class TestParseOutput:
    def test_syntax_from_fenced_prose(self) -> None:
        raw = 'Sure!\n```json\n{"errors": [{"line": 3, "message": "missing colon"}], "warnings": []}\n```'
        out = SyntaxAnalyzer().parse_output(raw)
        assert out.diagnostics == []
        assert out.total_errors == 1
        assert out.is_valid is False

    def test_syntax_json_after_braced_prose(self) -> None:
        out = SyntaxAnalyzer().parse_output('Checked the {language} code: {"errors": [], "warnings": [{"line": 2}]}')
        assert out.diagnostics == []
        assert out.total_warnings == 1

    def test_syntax_bare_list(self) -> None:
        out = SyntaxAnalyzer().parse_output('[{"line": 1, "message": "oops"}]')
        assert out.total_errors == 1

    def test_syntax_trailing_comma_repaired(self) -> None:
        out = SyntaxAnalyzer().parse_output('{"errors": [], "warnings": [],}')
        assert out.diagnostics == []
        assert out.is_valid is True

    def test_truncated_output_falls_back(self) -> None:
        out = SyntaxAnalyzer().parse_output('{"errors": [')
        assert out.errors == []
        assert len(out.diagnostics) == 1
        assert out.diagnostics[0].kind == "parse-error"
        assert '{"errors": [' in out.diagnostics[0].message

    def test_fallback_excerpt_bounded(self) -> None:
        raw = "no json here " * 200
        message = ComprehensiveAnalyzer().parse_output(raw).diagnostics[0].message
        assert len(message) < EXCERPT_LIMIT + 200

    def test_comprehensive_defaults_fill_gaps(self) -> None:
        out = ComprehensiveAnalyzer().parse_output('{"quality": {"overallScore": 88}}')
        assert out.quality.overall_score == 88
        assert out.complexity.cyclomatic_complexity == 1
        assert out.diagnostics == []

    def test_complexity_static_metrics_overwritten(self) -> None:
        code = "for x in xs:\n    print(x)\n"
        raw = json.dumps({"timeComplexity": {"notation": "O(n)"}, "staticAnalysis": {"loops": 99}})
        out = ComplexityAnalyzer().parse_output(raw, _request(AnalysisKind.COMPLEXITY, code=code))
        assert out.time_complexity.notation == "O(n)"
        assert out.static_analysis.loops == 1

    def test_complexity_static_fallback(self) -> None:
        request = _request(AnalysisKind.COMPLEXITY, code="for x in xs:\n    print(x)\n")
        out = ComplexityAnalyzer().static_fallback(request, "Groq down")
        assert out.time_complexity.notation == "O(n)"
        assert out.diagnostics[0].kind == "upstream-error"

    def test_testgen_wraps_array(self) -> None:
        raw = 'Here are the tests:\n[{"input": 5, "expectedOutput": 25}, {"input": "x"}]'
        out = TestGenAnalyzer().parse_output(raw)
        assert [c.input for c in out.test_cases] == ["5", "x"]
        assert out.test_cases[0].expected_output == "25"
        assert out.test_cases[1].execution_details == "Test case execution"

    def test_testgen_single_object(self) -> None:
        out = TestGenAnalyzer().parse_output('{"input": "1", "expectedOutput": "1"}')
        assert len(out.test_cases) == 1

    def test_improvements_sorted_by_severity(self) -> None:
        raw = json.dumps([
            {"type": "low", "title": "a"},
            {"type": "critical", "title": "b"},
            {"type": "medium", "title": "c"},
            {"type": "high", "title": "d"},
        ])
        out = ImprovementAnalyzer().parse_output(raw)
        assert [i.title for i in out.improvements] == ["b", "d", "c", "a"]

    def test_non_object_items_become_defaults(self) -> None:
        out = ImprovementAnalyzer().parse_output('["not an object"]')
        assert len(out.improvements) == 1
        assert out.improvements[0].type == "medium"
        assert out.diagnostics == []

    @pytest.mark.parametrize("line", ["1e999", "Infinity", '"1e999"', "-Infinity", "NaN"])
    def test_non_finite_numbers_use_defaults(self, line: str) -> None:
        out = SyntaxAnalyzer().parse_output('{"errors": [{"line": %s, "message": "x"}]}' % line)
        assert out.diagnostics == []
        assert out.errors[0].line == 1
        assert out.errors[0].message == "x"

    def test_non_finite_score_uses_default(self) -> None:
        out = ComprehensiveAnalyzer().parse_output('{"quality": {"overallScore": Infinity}}')
        assert out.quality.overall_score == 50
        assert out.diagnostics == []

    def test_schema_error_becomes_diagnostic(self) -> None:
        out = _BoundedSyntaxAnalyzer().parse_output('{"score": -5}')
        assert out.score == 0
        assert out.diagnostics[0].kind == "schema-error"
        assert "-5" in out.diagnostics[0].message


class TestSimulation:
    def test_plain_output(self) -> None:
        out = SimulationAnalyzer().parse_output("hi\n")
        assert out.output == "hi"
        assert out.runtime_error is False

    def test_runtime_error(self) -> None:
        out = SimulationAnalyzer().parse_output('"Runtime Error"')
        assert out.runtime_error is True
        assert out.output == "Runtime Error"

    def test_wrapping_fence_removed(self) -> None:
        out = SimulationAnalyzer().parse_output("```\n1\n2\n```")
        assert out.output == "1\n2"

    def test_empty_output_is_degraded(self) -> None:
        out = SimulationAnalyzer().parse_output("   ")
        assert out.diagnostics[0].message == "Model returned no output"


class TestRecommendation:
    def test_language_in_system_prompt(self) -> None:
        request = _request(AnalysisKind.RECOMMENDATION, language="rust")
        analyzer = RecommendationAnalyzer()
        assert "specializing in rust" in analyzer.get_system_prompt(request)
        assert analyzer.build_prompt(request) == "print('hi')"

    def test_numbered_list(self) -> None:
        out = RecommendationAnalyzer().parse_output("1. Check inputs.\n2) Rename x\n   to total.\n\n3. Add tests.")
        assert out.suggestions == ["Check inputs.", "Rename x to total.", "Add tests."]
        assert out.text.startswith("1. Check inputs.")
        assert out.diagnostics == []

    def test_unnumbered_lines(self) -> None:
        assert split_suggestions("Use constants.\n\nAdd docstrings.") == ["Use constants.", "Add docstrings."]

    def test_preamble_kept_as_item(self) -> None:
        assert split_suggestions("Suggestions:\n1. One\n2. Two") == ["Suggestions:", "One", "Two"]

    def test_wrapping_fence_removed(self) -> None:
        out = RecommendationAnalyzer().parse_output("```\n1. One\n```")
        assert out.suggestions == ["One"]

    def test_empty_answer_is_degraded(self) -> None:
        out = RecommendationAnalyzer().parse_output("  ")
        assert out.text == "No suggestions generated."
        assert out.suggestions == []
        assert out.diagnostics[0].kind == "parse-error"
