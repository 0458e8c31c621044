"""
Scam analysis entry point.
"""

from scamcheck.analysis.dispatcher import AnalysisDispatcher
from scamcheck.analysis.models import AnalysisRequest

__all__ = [
    "AnalysisDispatcher",
    "AnalysisRequest",
]
