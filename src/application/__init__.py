"""Application services for LTE dimensioning.

Exported for simplified imports by the presentation layer.
"""

from .dimensioning import compare_models, evaluate_model, sweep_path_loss

__all__ = ["compare_models", "evaluate_model", "sweep_path_loss"]
