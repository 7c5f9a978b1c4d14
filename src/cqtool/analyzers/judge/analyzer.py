"""Judge — runs a submission on the model and compares its output.

The model reports what the program printed; the verdict itself is
recomputed locally with ``outputs_match`` so it never depends on the
model's arithmetic.
"""

from __future__ import annotations

import logging

from cqtool.analyzers.base import BaseAnalyzer
from cqtool.analyzers.judge.compare import outputs_match
from cqtool.analyzers.judge.prompts import (
    PARSE_FAILED_STDERR,
    PARSE_FAILED_VERDICT,
    SYSTEM_PROMPT,
    UNAVAILABLE_VERDICT,
    USER_TEMPLATE,
)
from cqtool.schemas.judge import JudgeNormalize, JudgeOutput
from cqtool.schemas.request import AnalysisKind, AnalysisRequest

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


class JudgeAnalyzer(BaseAnalyzer):
    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.JUDGE

    @property
    def name(self) -> str:
        return "Judge"

    @property
    def output_model(self) -> type[JudgeOutput]:
        return JudgeOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: AnalysisRequest) -> str:
        options = request.judge
        normalize = options.normalize.resolved(options.compare_mode)
        return USER_TEMPLATE.format(
            language=request.language,
            code=request.source_code,
            stdin=request.stdin,
            expected=request.expected_output,
            compare_mode=options.compare_mode,
            trim_line_trailing_space=_flag(normalize.trim_line_trailing_space),
            unify_newlines_to_lf=_flag(normalize.unify_newlines_to_lf),
            trim_outer_blank_lines=_flag(normalize.trim_outer_blank_lines),
            lowercase=_flag(normalize.lowercase),
            collapse_internal_whitespace=_flag(bool(normalize.collapse_internal_whitespace)),
            tolerance="null" if options.tolerance is None else options.tolerance,
            time_limit_ms=options.time_limit_ms,
            memory_limit_kb=options.memory_limit_kb,
        )

    def parse_output(self, raw_text: str, request: AnalysisRequest | None = None) -> JudgeOutput:
        result = super().parse_output(raw_text, request)
        if request is None:
            return result
        if result.diagnostics:
            return self._failed(result, request, stderr=PARSE_FAILED_STDERR, verdict=PARSE_FAILED_VERDICT,
                                raw_text=raw_text)
        return self._rejudge(result, request)

    def static_fallback(self, request: AnalysisRequest, reason: str) -> JudgeOutput:
        result = super().static_fallback(request, reason)
        return self._failed(result, request, stderr=reason, verdict=UNAVAILABLE_VERDICT)

    def _echo_request(self, request: AnalysisRequest) -> dict:
        """Fields the caller supplied; these always win over the model's copy."""
        options = request.judge
        normalize = options.normalize.resolved(options.compare_mode)
        return {
            "input": request.stdin,
            "expected_output": request.expected_output,
            "compare_mode": options.compare_mode,
            "normalize": JudgeNormalize.model_validate(normalize.model_dump()),
            "tolerance": options.tolerance,
        }

    def _rejudge(self, result: JudgeOutput, request: AnalysisRequest) -> JudgeOutput:
        options = request.judge
        passed = result.exit_code == 0 and outputs_match(
            result.actual_output,
            request.expected_output,
            mode=options.compare_mode,
            normalize=options.normalize,
            tolerance=options.tolerance,
        )
        status = "Pass" if passed else "Fail"
        update = self._echo_request(request)
        update["status"] = status
        if status != result.status:
            logger.info("%s: model said %s, local comparison says %s", self.name, result.status, status)
            update["verdict_message"] = (
                "Output matches expected output." if passed else "Output does not match expected output."
            )
        return result.model_copy(update=update)

    def _failed(
        self,
        result: JudgeOutput,
        request: AnalysisRequest,
        *,
        stderr: str,
        verdict: str,
        raw_text: str = "",
    ) -> JudgeOutput:
        update = self._echo_request(request)
        update.update(
            actual_output="",
            actual_output_raw=raw_text,
            stderr=stderr,
            exit_code=1,
            status="Fail",
            verdict_message=verdict,
        )
        return result.model_copy(update=update)
