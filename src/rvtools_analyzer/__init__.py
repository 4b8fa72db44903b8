"""Sizing statistics for RVTools inventory exports."""

from .analysis import SourceInput, analyze, compare
from .errors import AnalyzerError, EmptyInputError, MalformedInputError, SourceFailure
from .models import AnalysisResult, AnalyzerConfig, ComparisonResult

__version__ = "0.3.0"

__all__ = [
    "SourceInput",
    "analyze",
    "compare",
    "AnalyzerError",
    "EmptyInputError",
    "MalformedInputError",
    "SourceFailure",
    "AnalysisResult",
    "AnalyzerConfig",
    "ComparisonResult",
]
