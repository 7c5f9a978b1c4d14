"""Execution simulation — the model plays interpreter and reports stdout.

The answer is plain text, not JSON, so extraction and repair are skipped.
"""

from __future__ import annotations

import re

from cqtool.analyzers.base import BaseAnalyzer
from cqtool.analyzers.simulation.prompts import RUNTIME_ERROR, SYSTEM_PROMPT_TEMPLATE, USER_TEMPLATE
from cqtool.schemas.base import Diagnostic
from cqtool.schemas.request import AnalysisKind, AnalysisRequest
from cqtool.schemas.simulation import SimulationOutput

# Models sometimes wrap the output in a fence despite the instructions.
_WRAPPING_FENCE = re.compile(r"\A```[^\n]*\n(.*?)\n?```\Z", re.DOTALL)


class SimulationAnalyzer(BaseAnalyzer):
    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.EXECUTION_SIMULATION

    @property
    def name(self) -> str:
        return "Execution Simulation"

    @property
    def output_model(self) -> type[SimulationOutput]:
        return SimulationOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT_TEMPLATE.format(language=request.language)

    def build_prompt(self, request: AnalysisRequest) -> str:
        return USER_TEMPLATE.format(code=request.source_code, stdin=request.stdin)

    def parse_output(self, raw_text: str, request: AnalysisRequest | None = None) -> SimulationOutput:
        text = (raw_text or "").strip()
        match = _WRAPPING_FENCE.match(text)
        if match:
            text = match.group(1)
        if not text:
            return SimulationOutput(
                diagnostics=[Diagnostic(kind="parse-error", message="Model returned no output")],
            )
        if text.strip('"') == RUNTIME_ERROR:
            return SimulationOutput(output=RUNTIME_ERROR, runtime_error=True)
        return SimulationOutput(output=text)
