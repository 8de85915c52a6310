from .config import EngineConfig, load_config
from .contracts import InterpretationSummary, QuestionRef, SurveyAnswer
from .logging_setup import configure_logging

__all__ = [
    "EngineConfig",
    "load_config",
    "configure_logging",
    "InterpretationSummary",
    "QuestionRef",
    "SurveyAnswer",
]
