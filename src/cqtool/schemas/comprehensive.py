"""Pydantic models for the comprehensive analysis output."""

from cqtool.schemas.base import AnalysisModel, AnalysisOutput


class ComplexityMetrics(AnalysisModel):
    cyclomatic_complexity: int = 1
    time_complexity: str = "O(1)"
    space_complexity: str = "O(1)"
    maintainability_index: int = 50  # 0-100
    readability_score: int = 50  # 0-100


class CodeSmell(AnalysisModel):
    type: str = ""
    severity: str = "low"  # "low", "medium", "high", "critical"
    description: str = ""
    line: int = 0  # 0 when the model gave no line
    suggestion: str = ""


class Violation(AnalysisModel):
    category: str = ""
    severity: str = "minor"  # "minor", "major"
    description: str = ""
    line: int = 0
    impact: str = ""


class QualityReport(AnalysisModel):
    overall_score: int = 50  # 0-100, 50 is the neutral default
    code_smells: list[CodeSmell] = []
    violations: list[Violation] = []


class SecurityFinding(AnalysisModel):
    issue: str = ""
    severity: str = "low"
    description: str = ""
    recommendation: str = ""
    line: int = 0


class PerformanceFinding(AnalysisModel):
    issue: str = ""
    impact: str = "low"  # "low", "medium", "high"
    description: str = ""
    optimization: str = ""
    line: int = 0


class Recommendations(AnalysisModel):
    immediate: list[str] = []
    short_term: list[str] = []
    long_term: list[str] = []


class Summary(AnalysisModel):
    strengths: list[str] = []
    weaknesses: list[str] = []
    priority_level: str = "low"  # "low", "medium", "high", "critical"
    estimated_fix_time: str = ""


class ComprehensiveOutput(AnalysisOutput):
    """Full output of the comprehensive analysis."""

    complexity: ComplexityMetrics = ComplexityMetrics()
    quality: QualityReport = QualityReport()
    security: list[SecurityFinding] = []
    performance: list[PerformanceFinding] = []
    recommendations: Recommendations = Recommendations()
    summary: Summary = Summary()
