"""Pydantic model for simulated program execution."""

from cqtool.schemas.base import AnalysisOutput


class SimulationOutput(AnalysisOutput):
    """What the program would print for the given stdin."""

    output: str = ""
    runtime_error: bool = False
