"""Handler layer exports."""

from .orchestrator import TranscriptionOrchestrator
from .progress_estimator import ProgressEstimator

__all__ = ["TranscriptionOrchestrator", "ProgressEstimator"]
