"""Hover queries over a sampled Pulse curve."""

from typing import List, Optional, Sequence

import numpy as np

from pulse.core.models import CurvePoint


class CurveLookup:
    """
    Interpolating view over precomputed curve samples.

    Price is not linear in ``u``, so answers between samples are a linear
    approximation whose error shrinks as the sampling density grows. Queries
    outside the sampled window clamp to the nearest endpoint.
    """

    def __init__(self, points: Sequence[CurvePoint]):
        self._points: List[CurvePoint] = list(points)
        self._epoch_index = self._points[0].epoch_index if self._points else 0
        self._us = np.array([p.u for p in self._points], dtype=float)
        self._taus = np.array([p.tau for p in self._points], dtype=float)
        self._prices = np.array([p.price for p in self._points], dtype=float)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def is_empty(self) -> bool:
        return not self._points

    @property
    def u_range(self) -> Optional[tuple]:
        """(first u, last u) of the samples."""
        if self.is_empty:
            return None
        return float(self._us[0]), float(self._us[-1])

    @property
    def tau_range(self) -> Optional[tuple]:
        if self.is_empty:
            return None
        return float(self._taus[0]), float(self._taus[-1])

    def at_u(self, u: float) -> Optional[CurvePoint]:
        """Interpolated point at normalized time ``u``."""
        if self.is_empty:
            return None
        u = float(np.clip(u, self._us[0], self._us[-1]))
        return CurvePoint(
            epoch_index=self._epoch_index,
            tau=float(np.interp(u, self._us, self._taus)),
            u=u,
            price=float(np.interp(u, self._us, self._prices)),
        )

    def at_tau(self, tau: float) -> Optional[CurvePoint]:
        """Interpolated point at ``tau`` seconds since epoch start."""
        if self.is_empty:
            return None
        tau = float(np.clip(tau, self._taus[0], self._taus[-1]))
        return CurvePoint(
            epoch_index=self._epoch_index,
            tau=tau,
            u=float(np.interp(tau, self._taus, self._us)),
            price=float(np.interp(tau, self._taus, self._prices)),
        )

    def at_fraction(self, fraction: float) -> Optional[CurvePoint]:
        """Point at a 0..1 fraction of the window (e.g. pointer x over chart width)."""
        if self.is_empty:
            return None
        lo, hi = self._us[0], self._us[-1]
        return self.at_u(lo + (hi - lo) * float(fraction))

    def nearest(self, u: float) -> Optional[CurvePoint]:
        """Closest precomputed sample to ``u``."""
        if self.is_empty:
            return None
        idx = int(np.argmin(np.abs(self._us - u)))
        return self._points[idx]


def interpolate_point(points: Sequence[CurvePoint], u: float) -> Optional[CurvePoint]:
    """One-shot interpolated query; see ``CurveLookup.at_u``."""
    return CurveLookup(points).at_u(u)
