"""Tests for locating JSON inside free-form model output."""

from __future__ import annotations

import pytest

from cqtool.parsing.extractor import Parsed, Unparseable, extract, scan_balanced


def _value(text: str, **kwargs) -> object:
    result = extract(text, **kwargs)
    assert isinstance(result, Parsed), result
    return result.value


class TestDirect:
    def test_plain_object(self) -> None:
        result = extract('{"errors": []}')
        assert result == Parsed({"errors": []}, "direct")

    def test_surrounding_whitespace(self) -> None:
        result = extract('\n\n  {"a": 1}  \n')
        assert isinstance(result, Parsed)
        assert result.value == {"a": 1}

    def test_plain_array(self) -> None:
        result = extract('[{"input": "1"}]', expect="array")
        assert result == Parsed([{"input": "1"}], "direct")


class TestFences:
    def test_json_fence_with_prose(self) -> None:
        text = 'Here is the analysis:\n```json\n{"errors": [], "warnings": []}\n```\nHope that helps!'
        result = extract(text)
        assert isinstance(result, Parsed)
        assert result.stage == "json-fence"
        assert result.value == {"errors": [], "warnings": []}

    def test_untagged_fence(self) -> None:
        result = extract('```\n{"ok": true}\n```')
        assert isinstance(result, Parsed)
        assert result.stage == "fence"
        assert result.value == {"ok": True}

    def test_json_fence_preferred_over_earlier_plain_fence(self) -> None:
        text = '```python\nprint(1)\n```\n\n```json\n{"a": 2}\n```'
        result = extract(text)
        assert isinstance(result, Parsed)
        assert result.value == {"a": 2}

    def test_only_first_json_fence_is_used(self) -> None:
        text = '```json\n{"first": 1}\n```\n```json\n{"second": 2}\n```'
        assert _value(text) == {"first": 1}

    def test_uppercase_tag(self) -> None:
        assert _value('```JSON\n{"a": 1}\n```') == {"a": 1}


class TestSpan:
    def test_object_inside_prose(self) -> None:
        result = extract('Sure! {"score": 80} Let me know.')
        assert result == Parsed({"score": 80}, "span")

    def test_braces_inside_strings_ignored(self) -> None:
        text = 'Result: {"message": "use } and { carefully", "line": 3} done'
        result = extract(text)
        assert isinstance(result, Parsed)
        assert result.value == {"message": "use } and { carefully", "line": 3}

    def test_escaped_quote_inside_string(self) -> None:
        text = 'x {"message": "say \\"hi\\" }"} y'
        assert _value(text) == {"message": 'say "hi" }'}

    def test_array_preferred_for_array_shape(self) -> None:
        text = 'Tests: [{"input": "1"}, {"input": "2"}] (two cases)'
        result = extract(text, expect="array")
        assert isinstance(result, Parsed)
        assert result.value == [{"input": "1"}, {"input": "2"}]

    def test_object_shape_falls_back_to_array(self) -> None:
        result = extract("the list is [1, 2, 3]")
        assert isinstance(result, Parsed)
        assert result.value == [1, 2, 3]

    def test_skips_non_json_braces_in_prose(self) -> None:
        result = extract('Checked the {language} code: {"errors": []}')
        assert result == Parsed({"errors": []}, "span")

    def test_skips_non_json_brackets_for_array_shape(self) -> None:
        assert _value('See [note 1]. Cases: [{"input": "1"}]', expect="array") == [{"input": "1"}]

    def test_nested_value_of_invalid_span_not_returned(self) -> None:
        result = extract('{"errors": [{"line": 1}],}')
        assert isinstance(result, Unparseable)
        assert result.candidate == '{"errors": [{"line": 1}],}'

    def test_longest_failed_span_is_candidate(self) -> None:
        result = extract('About {language}: {"errors": [],} done')
        assert isinstance(result, Unparseable)
        assert result.candidate == '{"errors": [],}'
        assert result.reason == "bracketed span is not valid JSON"

    def test_unbalanced_after_prose_span(self) -> None:
        result = extract('The {language} result: {"errors": [')
        assert isinstance(result, Unparseable)
        assert result.reason == "unbalanced brackets"
        assert result.candidate == '{"errors": ['


class TestFailures:
    @pytest.mark.parametrize("text", ["", "   \n\t  "])
    def test_empty(self, text: str) -> None:
        result = extract(text)
        assert isinstance(result, Unparseable)
        assert result.reason == "empty response"

    def test_no_json_at_all(self) -> None:
        result = extract("I cannot analyze this code.")
        assert isinstance(result, Unparseable)
        assert result.reason == "no JSON object or array found"
        assert result.raw_text == "I cannot analyze this code."

    def test_truncated_keeps_candidate_from_opener(self) -> None:
        result = extract('Here you go: {"errors": [')
        assert isinstance(result, Unparseable)
        assert result.reason == "unbalanced brackets"
        assert result.candidate == '{"errors": ['

    def test_invalid_span_keeps_span_as_candidate(self) -> None:
        result = extract('{"a": 1,}')
        assert isinstance(result, Unparseable)
        assert result.candidate == '{"a": 1,}'

    def test_invalid_json_fence_interior_is_candidate(self) -> None:
        result = extract('```json\n{"a": 1,}\n```')
        assert isinstance(result, Unparseable)
        assert result.candidate == '{"a": 1,}'

    def test_unclosed_fence_interior_is_candidate(self) -> None:
        result = extract('```json\n{"a": [1, 2')
        assert isinstance(result, Unparseable)
        assert result.candidate.startswith('{"a"')


class TestScanBalanced:
    def test_nested(self) -> None:
        text = '{"a": [1, {"b": 2}]} trailing'
        assert scan_balanced(text, 0) == text.index(" trailing")

    def test_mismatched_closer(self) -> None:
        assert scan_balanced('{"a": ]', 0) is None

    def test_truncated(self) -> None:
        assert scan_balanced('[{"a": 1}', 0) is None
