"""Lookup from analysis kind to its analyzer."""

from __future__ import annotations

from cqtool.analyzers.base import BaseAnalyzer
from cqtool.analyzers.complexity.analyzer import ComplexityAnalyzer
from cqtool.analyzers.comprehensive.analyzer import ComprehensiveAnalyzer
from cqtool.analyzers.improvement.analyzer import ImprovementAnalyzer
from cqtool.analyzers.judge.analyzer import JudgeAnalyzer
from cqtool.analyzers.recommendation.analyzer import RecommendationAnalyzer
from cqtool.analyzers.simulation.analyzer import SimulationAnalyzer
from cqtool.analyzers.syntax.analyzer import SyntaxAnalyzer
from cqtool.analyzers.testgen.analyzer import TestGenAnalyzer
from cqtool.schemas.request import AnalysisKind

ANALYZERS: dict[AnalysisKind, BaseAnalyzer] = {
    analyzer.kind: analyzer
    for analyzer in (
        ComprehensiveAnalyzer(),
        SyntaxAnalyzer(),
        ComplexityAnalyzer(),
        TestGenAnalyzer(),
        ImprovementAnalyzer(),
        SimulationAnalyzer(),
        JudgeAnalyzer(),
        RecommendationAnalyzer(),
    )
}


def get_analyzer(kind: AnalysisKind | str) -> BaseAnalyzer:
    """Return the analyzer for ``kind``. Raises ``ValueError`` for unknown kinds."""
    return ANALYZERS[AnalysisKind(kind)]
