"""Pydantic models for the syntax check output."""

from pydantic import model_validator

from cqtool.schemas.base import AnalysisModel, AnalysisOutput


class SyntaxIssue(AnalysisModel):
    """A single error, warning or suggestion anchored to a source position."""

    line: int = 1
    column: int = 1
    message: str = ""
    severity: str = "error"  # "error", "warning", "info"
    type: str = "syntax"  # "syntax", "semantic", "style"
    code: str = ""
    quick_fix: str = ""

    @model_validator(mode="after")
    def clamp_position(self) -> "SyntaxIssue":
        self.line = max(1, self.line)
        self.column = max(1, self.column)
        return self


class SyntaxOutput(AnalysisOutput):
    """Full output of the syntax check.

    The totals and ``is_valid`` are recomputed from the lists; the model's
    own counts are not trusted.
    """

    errors: list[SyntaxIssue] = []
    warnings: list[SyntaxIssue] = []
    suggestions: list[SyntaxIssue] = []
    is_valid: bool = True
    total_errors: int = 0
    total_warnings: int = 0

    @model_validator(mode="after")
    def recompute_totals(self) -> "SyntaxOutput":
        self.total_errors = len(self.errors)
        self.total_warnings = len(self.warnings)
        self.is_valid = self.total_errors == 0
        return self
