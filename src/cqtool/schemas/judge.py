"""Pydantic models for the judge verdict."""

from typing import Any

from pydantic import field_validator

from cqtool.schemas.base import AnalysisModel, AnalysisOutput, finite_number


class JudgeNormalize(AnalysisModel):
    """Normalization flags as applied to the outputs."""

    trim_line_trailing_space: bool = True
    unify_newlines_to_lf: bool = True
    trim_outer_blank_lines: bool = True
    lowercase: bool = False
    collapse_internal_whitespace: bool = False


class JudgeOutput(AnalysisOutput):
    """Result of running a submission and comparing its output.

    ``status`` is always "Pass" or "Fail".
    """

    input: str = ""
    expected_output: str = ""
    actual_output: str = ""
    actual_output_raw: str = ""
    stderr: str = ""
    exit_code: int = 0
    runtime_ms: int = 0
    memory_kb: int | None = None
    compare_mode: str = "exact"
    normalize: JudgeNormalize = JudgeNormalize()
    tolerance: float | None = None
    status: str = "Fail"
    verdict_message: str = ""

    @field_validator("memory_kb", mode="before")
    @classmethod
    def whole_kilobytes(cls, value: Any) -> int | None:
        number = finite_number(value)
        if number is None or number < 0:
            return None
        return int(number)

    @field_validator("tolerance", mode="before")
    @classmethod
    def finite_tolerance(cls, value: Any) -> float | None:
        return finite_number(value)

    @field_validator("status", mode="after")
    @classmethod
    def normalize_status(cls, value: str) -> str:
        return "Pass" if value.strip().lower() in ("pass", "passed", "accepted", "ok") else "Fail"
