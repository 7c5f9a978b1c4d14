"""Pydantic models for the complexity analysis output."""

from cqtool.schemas.base import AnalysisModel, AnalysisOutput


class StaticMetrics(AnalysisModel):
    """Counts produced locally by ``cqtool.static_analysis``."""

    loops: int = 0
    nested_loops: int = 0
    recursive_calls: int = 0
    data_structure_allocations: int = 0


class TimeComplexity(AnalysisModel):
    notation: str = "O(1)"
    best_case: str = ""
    average_case: str = ""
    worst_case: str = ""
    explanation: str = ""
    factors: list[str] = []
    confidence: int = 0  # 0-100


class SpaceComplexity(AnalysisModel):
    notation: str = "O(1)"
    auxiliary: str = ""
    total: str = ""
    explanation: str = ""
    factors: list[str] = []
    confidence: int = 0  # 0-100


class ComplexityOutput(AnalysisOutput):
    """Full output of the complexity analysis."""

    time_complexity: TimeComplexity = TimeComplexity()
    space_complexity: SpaceComplexity = SpaceComplexity()
    algorithm_type: str = "Unknown"
    data_structures: list[str] = []
    optimization_suggestions: list[str] = []
    static_analysis: StaticMetrics = StaticMetrics()
