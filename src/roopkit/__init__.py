"""
roopkit - structural analysis engine for the ROOP task-description DSL

roopkit reconstructs the block structure of ROOP documents line by line and
derives diagnostics, folding ranges, outline symbols, formatting edits and
completion context from it.
"""

from importlib.metadata import version

from roopkit.analysis import AnalysisResult, StructureAnalyzer
from roopkit.core import AnalysisSettings, DocumentSnapshot, KeywordCatalog

__version__ = version("roopkit")

__all__ = [
    "__version__",
    "AnalysisResult",
    "AnalysisSettings",
    "DocumentSnapshot",
    "KeywordCatalog",
    "StructureAnalyzer",
]
