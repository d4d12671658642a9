"""
Bounded composition of performance multipliers.

Independent factors (season x industry x creative x competition x audience) compound
quickly, so every composed multiplier goes through:
    1. floor each factor at MIN_MULTIPLIER
    2. combine: exp(sum(log m)) for "log-sum" (default) or a plain product
    3. soft cap: x > soft -> soft + 0.5 * (x - soft)
    4. hard cap: min(x, hard)
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np

MIN_MULTIPLIER = 0.01
SOFT_CAP_PASS_THROUGH = 0.5
METHODS = ("log-sum", "product")


@dataclass(frozen=True)
class CapPair:
    soft: float
    hard: float

    def __post_init__(self):
        if self.soft <= 0 or self.hard <= 0:
            raise ValueError(f"Caps must be positive, got soft={self.soft}, hard={self.hard}")


# Single source for every composition bound, keyed by KPI type.
# season_* bound the combination of the (at most two) active seasons.
CAP_TABLE: Dict[str, CapPair] = {
    "cpm": CapPair(soft=2.0, hard=3.0),
    "ctr": CapPair(soft=1.8, hard=2.5),
    "cvr": CapPair(soft=2.0, hard=3.0),
    "season_cpm": CapPair(soft=1.6, hard=2.0),
    "season_ctr": CapPair(soft=1.5, hard=1.8),
    "season_cvr": CapPair(soft=1.6, hard=2.0),
}


def combine_multipliers(multipliers: Iterable[float], soft_cap: float, hard_cap: float,
                        method: str = "log-sum") -> float:
    """Combine positive multipliers into one bounded multiplier."""
    if method not in METHODS:
        raise ValueError(f"Unknown composition method: {method}")
    safe = np.maximum(np.asarray(list(multipliers), dtype=float), MIN_MULTIPLIER)
    if safe.size == 0:
        combined = 1.0
    elif method == "log-sum":
        combined = float(np.exp(np.sum(np.log(safe))))
    else:
        combined = float(np.prod(safe))

    if combined > soft_cap:
        combined = soft_cap + SOFT_CAP_PASS_THROUGH * (combined - soft_cap)
    return min(combined, hard_cap)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3), unlike round()."""
    return int(np.floor(value + 0.5))


class ModifierComposer:
    """Applies the cap table to a list of factors for a given KPI type."""

    def __init__(self, caps: Optional[Dict[str, CapPair]] = None, method: str = "log-sum"):
        if method not in METHODS:
            raise ValueError(f"Unknown composition method: {method}")
        self.caps = dict(CAP_TABLE)
        if caps:
            self.caps.update(caps)
        self.method = method

    def caps_for(self, kpi: str) -> CapPair:
        try:
            return self.caps[kpi]
        except KeyError:
            raise KeyError(f"No caps configured for '{kpi}'") from None

    def combine(self, kpi: str, multipliers: Iterable[float]) -> float:
        pair = self.caps_for(kpi)
        return combine_multipliers(multipliers, pair.soft, pair.hard, self.method)
