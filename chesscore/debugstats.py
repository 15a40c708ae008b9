"""Run-time statistics collectors for debugging: hit rates, means, deviations and more."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field

__all__ = ["DebugStats", "MAX_DEBUG_SLOTS"]

MAX_DEBUG_SLOTS = 32

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _divide(num: float, den: float) -> float:
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num)


def _fmt(x: float) -> str:
    return f"{x:g}"


@dataclass
class _Hit:
    total: int = 0
    hits: int = 0


@dataclass
class _Mean:
    total: int = 0
    sum: int = 0


@dataclass
class _Stdev:
    total: int = 0
    sum: int = 0
    sum_sq: int = 0


@dataclass
class _Extremes:
    total: int = 0
    max: int = _INT64_MIN
    min: int = _INT64_MAX


@dataclass
class _Correl:
    total: int = 0
    sum1: int = 0
    sum1_sq: int = 0
    sum2: int = 0
    sum2_sq: int = 0
    sum12: int = 0


@dataclass
class DebugStats:
    """A set of numbered slots collecting simple statistics, safe across threads."""

    slots: int = MAX_DEBUG_SLOTS
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.slots < 0:
            raise ValueError("slots must not be negative")
        self.clear()

    def _slot(self, table: list, slot: int):
        if not 0 <= slot < self.slots:
            raise IndexError(f"debug slot out of range: {slot}")
        return table[slot]

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        """Count one event, and one hit if ``cond`` holds."""
        with self._lock:
            entry = self._slot(self._hit, slot)
            entry.total += 1
            if cond:
                entry.hits += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        """Add a value to the running mean."""
        with self._lock:
            entry = self._slot(self._mean, slot)
            entry.total += 1
            entry.sum += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        """Add a value to the running standard deviation."""
        with self._lock:
            entry = self._slot(self._stdev, slot)
            entry.total += 1
            entry.sum += value
            entry.sum_sq += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        """Track the smallest and largest value seen."""
        with self._lock:
            entry = self._slot(self._extremes, slot)
            entry.total += 1
            entry.max = max(entry.max, value)
            entry.min = min(entry.min, value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        """Add a pair of values to the running correlation coefficient."""
        with self._lock:
            entry = self._slot(self._correl, slot)
            entry.total += 1
            entry.sum1 += value1
            entry.sum1_sq += value1 * value1
            entry.sum2 += value2
            entry.sum2_sq += value2 * value2
            entry.sum12 += value1 * value2

    def report(self) -> str:
        """Return a line for every slot that has collected anything."""
        lines: list[str] = []
        with self._lock:
            for i, h in enumerate(self._hit):
                if h.total:
                    rate = 100.0 * h.hits / h.total
                    lines.append(
                        f"Hit #{i}: Total {h.total} Hits {h.hits} Hit Rate (%) {_fmt(rate)}"
                    )
            for i, m in enumerate(self._mean):
                if m.total:
                    lines.append(f"Mean #{i}: Total {m.total} Mean {_fmt(m.sum / m.total)}")
            for i, s in enumerate(self._stdev):
                if s.total:
                    n = s.total
                    r = _sqrt(s.sum_sq / n - (s.sum / n) ** 2)
                    lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")
            for i, e in enumerate(self._extremes):
                if e.total:
                    lines.append(f"Extremity #{i}: Total {e.total} Min {e.min} Max {e.max}")
            for i, c in enumerate(self._correl):
                if c.total:
                    n = c.total
                    e1, e2 = c.sum1 / n, c.sum2 / n
                    num = c.sum12 / n - e1 * e2
                    den = _sqrt(c.sum1_sq / n - e1 * e1) * _sqrt(c.sum2_sq / n - e2 * e2)
                    lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(_divide(num, den))}")
        return "".join(line + "\n" for line in lines)

    def clear(self) -> None:
        """Reset every slot."""
        with self._lock:
            self._hit = [_Hit() for _ in range(self.slots)]
            self._mean = [_Mean() for _ in range(self.slots)]
            self._stdev = [_Stdev() for _ in range(self.slots)]
            self._extremes = [_Extremes() for _ in range(self.slots)]
            self._correl = [_Correl() for _ in range(self.slots)]