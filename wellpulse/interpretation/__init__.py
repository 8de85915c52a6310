"""
Survey interpretation boundary for the wellpulse backend.

Design intent:
- Turn ordinal (1-5) survey answers into category scores, warnings and ratings.
- Keep every rule deterministic and table-driven.
- Stay free of I/O so callers own persistence and delivery.
"""

from .aggregate import FleetSummary, summarize_fleet
from .domain import CATEGORIES, DomainConfigError
from .engine import SurveyInterpretation, analyze
from .scoring import CategoryScore, InterpretationError

__all__ = [
    "CATEGORIES",
    "CategoryScore",
    "DomainConfigError",
    "FleetSummary",
    "InterpretationError",
    "SurveyInterpretation",
    "analyze",
    "summarize_fleet",
]
