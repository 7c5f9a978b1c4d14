"""Pydantic models for improvement suggestions."""

from cqtool.schemas.base import AnalysisModel, AnalysisOutput


class Improvement(AnalysisModel):
    type: str = "medium"  # "critical", "high", "medium", "low"
    category: str = ""
    title: str = ""
    description: str = ""
    impact: str = ""


class ImprovementOutput(AnalysisOutput):
    """Top suggestions, most severe first. The model answers with a bare array."""

    improvements: list[Improvement] = []
