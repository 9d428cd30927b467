"""
Shared test fixtures for the roopkit test suite.
"""

import pytest

from roopkit.analysis import StructureAnalyzer
from roopkit.core.document import DocumentSnapshot
from tests.support import SAMPLE_DOCUMENT


@pytest.fixture
def analyzer():
    """Analyzer with default catalog and settings."""
    return StructureAnalyzer()


@pytest.fixture
def sample_snapshot():
    """A well-formed, correctly indented document exercising every block kind."""
    return DocumentSnapshot.from_text(SAMPLE_DOCUMENT, version=1, uri="file:///sample.roop")
