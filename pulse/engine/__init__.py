"""Pulse curve engine."""

from .curve import (
    ask_at_time,
    build_curve_points,
    compute_ask,
    compute_half_life,
    curve_anchor,
    genesis_premium,
    resolve_u_max,
)
from .lookup import CurveLookup, interpolate_point
from .engine import PulseCurveEngine

__all__ = [
    "ask_at_time",
    "build_curve_points",
    "compute_ask",
    "compute_half_life",
    "curve_anchor",
    "genesis_premium",
    "resolve_u_max",
    "CurveLookup",
    "interpolate_point",
    "PulseCurveEngine",
]
