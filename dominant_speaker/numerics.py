"""Stateless math helpers for activity scoring."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence

from .config import MIN_ACTIVITY_SCORE


def binomial_coefficient(n: int, r: int) -> int:
    """Return C(n, r); 0 when ``r < 0`` or ``r > n``."""
    if r < 0 or r > n:
        return 0
    r = max(r, n - r)
    result = 1
    for j, i in enumerate(range(n, r, -1), start=1):
        result = result * i // j
    return result


def compute_activity_score(v_l: int, n_r: int, p: float, lam: float) -> float:
    """Return the log-domain activity score for one time-scale window.

    ``v_l`` is the number of active subbands (clamped to ``n_r``), ``p`` the
    binomial success probability and ``lam`` the Poisson rate. The result
    is never below ``MIN_ACTIVITY_SCORE``.
    """
    v_l = min(v_l, n_r)
    bc = max(binomial_coefficient(n_r, v_l), 1)
    score = (
        math.log(bc)
        + v_l * math.log(p)
        + (n_r - v_l) * math.log(1.0 - p)
        - math.log(lam)
        + lam * v_l
    )
    return max(score, MIN_ACTIVITY_SCORE)


def compute_bigs(
    littles: Sequence[int], bigs: MutableSequence[int], threshold: int
) -> bool:
    """Downsample ``littles`` into ``bigs`` in place.

    Each slot of ``bigs`` receives the count of samples in its bucket that
    exceed ``threshold``. Returns True if any slot changed.
    """
    per = len(littles) // len(bigs)
    changed = False
    for slot, start in enumerate(range(0, per * len(bigs), per)):
        count = sum(1 for value in littles[start : start + per] if value > threshold)
        if bigs[slot] != count:
            bigs[slot] = count
            changed = True
    return changed