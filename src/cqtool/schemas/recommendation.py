"""Pydantic model for plain-text review recommendations."""

from cqtool.schemas.base import AnalysisOutput


class RecommendationOutput(AnalysisOutput):
    """The reviewer's answer as text plus its numbered items split out."""

    text: str = ""
    suggestions: list[str] = []
