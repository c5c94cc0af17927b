# relchart/util/jitter.py
from __future__ import annotations

LCG_SEED = 123456
LCG_MUL = 9301
LCG_INC = 49297
LCG_MOD = 233280


class LcgJitter:
    """Fixed-seed linear-congruential sequence in [0, 1).

    Cosmetic only: callers must not feed its output into lane assignment or
    hit-testing.
    """

    def __init__(self, seed: int = LCG_SEED) -> None:
        self._seed = int(seed) % LCG_MOD

    def next(self) -> float:
        self._seed = (self._seed * LCG_MUL + LCG_INC) % LCG_MOD
        return self._seed / LCG_MOD

    def offset(self, amplitude: float) -> float:
        """Symmetric jitter in [-amplitude, amplitude)."""
        return (self.next() - 0.5) * 2 * amplitude
