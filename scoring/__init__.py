from .completion import analyze_completion
from .inference import infer_score, should_require_confirmation
from .service import AutoScoreService
from .validation import calculate_validation_confidence, reconcile_score

__all__ = [
    "analyze_completion",
    "infer_score",
    "should_require_confirmation",
    "AutoScoreService",
    "calculate_validation_confidence",
    "reconcile_score",
]
