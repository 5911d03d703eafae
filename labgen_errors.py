# labgen_errors.py — typed failures raised by the background estimator
from __future__ import annotations


class LaBGenError(RuntimeError):
    """Base class. run.py catches this at the top level."""


class ConfigurationError(LaBGenError):
    """Unknown segmenter name, bad parameter value, conflicting presets."""


class NotReadyError(LaBGenError):
    """Background requested before every region holds at least one candidate."""


class DimensionMismatchError(LaBGenError):
    """A patch does not have the size recorded for its region."""
