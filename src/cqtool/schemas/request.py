"""Request-side models: what a caller asks the pipeline to do."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalysisKind(str, Enum):
    """The analyses the service can run, one HTTP endpoint each."""

    COMPREHENSIVE = "comprehensive"
    SYNTAX = "syntax"
    COMPLEXITY = "complexity"
    TESTGEN = "testgen"
    IMPROVEMENT = "improvement"
    EXECUTION_SIMULATION = "execution-simulation"
    JUDGE = "judge"
    RECOMMENDATION = "recommendation"


CompareMode = Literal["exact", "case_insensitive", "token", "lineset", "float_tolerance"]


class ConfigOverrides(BaseModel):
    """Optional per-request tunables. ``None`` means "use the kind default"."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    system_prompt: str | None = None
    model: str | None = None


class NormalizeOptions(BaseModel):
    """How program output is cleaned up before it is compared.

    ``collapse_internal_whitespace`` left as ``None`` follows the compare
    mode: on for ``token``, off otherwise.
    """

    model_config = ConfigDict(frozen=True)

    trim_line_trailing_space: bool = True
    unify_newlines_to_lf: bool = True
    trim_outer_blank_lines: bool = True
    lowercase: bool = False
    collapse_internal_whitespace: bool | None = None

    def resolved(self, compare_mode: str) -> "NormalizeOptions":
        if self.collapse_internal_whitespace is not None:
            return self
        return self.model_copy(update={"collapse_internal_whitespace": compare_mode == "token"})


class JudgeOptions(BaseModel):
    """Comparison settings for the judge."""

    model_config = ConfigDict(frozen=True)

    compare_mode: CompareMode = "exact"
    normalize: NormalizeOptions = NormalizeOptions()
    tolerance: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    time_limit_ms: int = Field(default=2000, gt=0)
    memory_limit_kb: int = Field(default=262144, gt=0)


class AnalysisRequest(BaseModel):
    """One unit of work for the pipeline. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    source_code: str
    language: str
    kind: AnalysisKind
    config: ConfigOverrides = ConfigOverrides()
    # stdin for execution simulation and the judge
    stdin: str = ""
    # judge only
    expected_output: str = ""
    judge: JudgeOptions = JudgeOptions()


class AnalyzeBody(BaseModel):
    """JSON body accepted by every POST endpoint.

    ``code`` and ``language`` default to empty so the handler can answer 400
    with a readable message instead of a schema dump. The judge fields use
    the snake_case names its clients send; ``stdin`` is accepted as an
    alternative to ``input``.
    """

    code: str = ""
    language: str = ""
    config: ConfigOverrides = ConfigOverrides()
    input: str = ""
    stdin: str = ""
    expected_output: str = ""
    compare_mode: CompareMode = "exact"
    normalize: NormalizeOptions = NormalizeOptions()
    tolerance: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    time_limit_ms: int = Field(default=2000, gt=0)
    memory_limit_kb: int = Field(default=262144, gt=0)

    def to_request(self, kind: AnalysisKind) -> AnalysisRequest:
        return AnalysisRequest(
            source_code=self.code,
            language=self.language,
            kind=kind,
            config=self.config,
            stdin=self.input or self.stdin,
            expected_output=self.expected_output,
            judge=JudgeOptions(
                compare_mode=self.compare_mode,
                normalize=self.normalize,
                tolerance=self.tolerance,
                time_limit_ms=self.time_limit_ms,
                memory_limit_kb=self.memory_limit_kb,
            ),
        )
