"""Pulse auction pricing curve.

The ask decays hyperbolically from ``floor + D`` towards ``floor``:

    price(tau) = floor + k / (tau + k / D)

Normalizing time by the half-life ``T = k / D`` gives ``u = tau / T`` and

    price(u) = floor + D / (u + 1)

so the premium is exactly ``D / 2`` after one half-life. The genesis epoch
uses the same shape with ``D = genesis_price - genesis_floor``. When no
premium seed is known the curve falls back to the limit form
``floor + k / tau``.

Equivalently, in wall-clock time ``t`` the curve is ``k / (t - a) + floor``
with anchor ``a = start - k / D``.
"""

import math
from typing import List, Optional

from pulse.core.constants import EPS, DEFAULT_CURVE_STEPS, DEFAULT_U_MAX, DEGENERATE_WINDOW_SEC
from pulse.core.models import CurvePoint, EpochParameters


def _is_real(value) -> bool:
    return value is not None and math.isfinite(value)


def compute_half_life(k: float, D: Optional[float]) -> float:
    """
    Half-life of the premium in seconds.

    Args:
        k: Decay constant
        D: Premium seed, None in the degenerate regime

    Returns:
        ``k / D``, or ``math.inf`` when no positive premium seed is defined
    """
    if D is None or not math.isfinite(D) or D <= 0:
        return math.inf
    return k / max(D, EPS)


def compute_ask(floor: float, k: float, D: Optional[float], tau: float) -> float:
    """
    Ask price ``tau`` seconds after epoch start.

    Args:
        floor: Epoch floor
        k: Decay constant
        D: Premium seed (None selects the ``k / tau`` limit curve)
        tau: Seconds since epoch start

    Returns:
        Ask in human units
    """
    if D is None:
        return floor + k / max(tau, EPS)

    premium = k / (max(tau, 0.0) + k / max(D, EPS))
    return floor + premium


def genesis_premium(genesis_price: float, genesis_floor: float) -> Optional[float]:
    """Premium seeding the genesis epoch, or None if it is not positive."""
    premium = genesis_price - genesis_floor
    if not math.isfinite(premium) or premium <= 0:
        return None
    return premium


def curve_anchor(epoch: EpochParameters) -> float:
    """
    Wall-clock anchor ``a`` of the equivalent form ``k / (t - a) + floor``.

    In the degenerate regime the anchor is the epoch start itself.
    """
    half_life = compute_half_life(epoch.k, epoch.premium_rate)
    if math.isinf(half_life):
        return epoch.start_time_sec
    return epoch.start_time_sec - half_life


def ask_at_time(epoch: EpochParameters, t_sec: float) -> float:
    """Ask at wall-clock time ``t_sec``; times before the epoch clamp to its start."""
    tau = max(0.0, t_sec - epoch.start_time_sec)
    return compute_ask(epoch.floor, epoch.k, epoch.premium_rate, tau)


def resolve_u_max(
    epoch: EpochParameters,
    u_max: Optional[float] = None,
    u_max_default: float = DEFAULT_U_MAX,
    degenerate_window: float = DEGENERATE_WINDOW_SEC,
) -> Optional[float]:
    """
    Upper bound of the sampled window.

    With a half-life the window covers "now" and at least ``u_max_default``
    half-lives; a caller value wins. Without one, ``u`` is seconds and the
    window ends at "now", the caller value, or ``degenerate_window``.

    Returns:
        The bound, or None when it is not positive and finite
    """
    tau_now = epoch.tau_now

    if epoch.premium_rate is None:
        bound = tau_now or u_max or degenerate_window
    elif u_max is not None:
        bound = u_max
    else:
        half_life = compute_half_life(epoch.k, epoch.premium_rate)
        bound = max(tau_now / half_life, u_max_default)

    if not _is_real(bound) or bound <= 0:
        return None
    return bound


def build_curve_points(
    epoch: EpochParameters,
    u_max: Optional[float] = None,
    steps: int = DEFAULT_CURVE_STEPS,
    u_max_default: float = DEFAULT_U_MAX,
    degenerate_window: float = DEGENERATE_WINDOW_SEC,
) -> List[CurvePoint]:
    """
    Sample the epoch's ask curve at ``steps + 1`` evenly spaced ``u`` values.

    In the degenerate regime the window always ends at the elapsed time once
    any time has passed, so ``u_max`` only applies to an epoch evaluated at
    its own start.

    Args:
        epoch: Epoch to sample
        u_max: Window end in half-lives; in the degenerate regime, seconds,
            used only while no time has elapsed
        steps: Number of segments
        u_max_default: Minimum window in half-lives when ``u_max`` is None
        degenerate_window: Window in seconds when nothing else defines one

    Returns:
        Points ordered by ``u`` with the last one exactly at the window end,
        or an empty list when the inputs do not define a curve
    """
    floor, k, D = epoch.floor, epoch.k, epoch.premium_rate

    if steps < 1:
        return []
    if not _is_real(floor) or not _is_real(k) or k <= 0:
        return []
    if D is not None and (not math.isfinite(D) or D <= 0):
        return []
    if u_max is not None and (not _is_real(u_max) or u_max <= 0):
        return []

    bound = resolve_u_max(epoch, u_max, u_max_default, degenerate_window)
    if bound is None:
        return []

    # u and tau coincide when there is no half-life
    half_life = 1.0 if D is None else compute_half_life(k, D)

    points: List[CurvePoint] = []
    for i in range(steps + 1):
        u = bound if i == steps else bound * i / steps
        tau = u * half_life
        points.append(
            CurvePoint(
                epoch_index=epoch.epoch_index,
                tau=tau,
                u=u,
                price=compute_ask(floor, k, D, tau),
            )
        )

    return points
