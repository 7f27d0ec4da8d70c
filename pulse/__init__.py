"""Pulse auction pricing-curve engine."""

from pulse.engine import (
    CurveLookup,
    PulseCurveEngine,
    build_curve_points,
    compute_ask,
    compute_half_life,
)

__all__ = [
    "CurveLookup",
    "PulseCurveEngine",
    "build_curve_points",
    "compute_ask",
    "compute_half_life",
]
