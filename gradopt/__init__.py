"""gradopt - steepest descent and conjugate gradient with a bracketing line search."""

__version__ = "0.1.0"

from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    BracketInterval,
    CountedFunction,
    GradientAlgorithm,
    IterateRecord,
    LineSearchConfig,
    Optimizer,
    PerfDiagnostics,
    Problem,
    Status,
    choose_step_size,
    minimize,
)

__all__ = [
    "__version__",
    "BracketInterval",
    "CountedFunction",
    "GradientAlgorithm",
    "IterateRecord",
    "LineSearchConfig",
    "Optimizer",
    "PerfDiagnostics",
    "Problem",
    "Status",
    "choose_step_size",
    "configure_logging",
    "get_logger",
    "minimize",
    "set_log_level",
]
