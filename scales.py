from __future__ import annotations

from bisect import bisect_right
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from plotly.colors import diverging


class BandScale:
    """
    Maps a discrete domain onto contiguous, equal-width bands of the output
    range. Repeated domain values collapse onto their first occurrence.
    """

    def __init__(self, domain: Iterable[Hashable], range_: Tuple[float, float]):
        self._index = {}
        for value in domain:
            self._index.setdefault(value, len(self._index))
        self.range = (float(range_[0]), float(range_[1]))
        n = len(self._index)
        self.step = (self.range[1] - self.range[0]) / n if n else 0.0

    @property
    def domain(self) -> List[Hashable]:
        return list(self._index)

    @property
    def bandwidth(self) -> float:
        return self.step

    def __call__(self, value: Hashable) -> Optional[float]:
        i = self._index.get(value)
        if i is None:
            return None
        return self.range[0] + i * self.step

    def center(self, value: Hashable) -> Optional[float]:
        start = self(value)
        return None if start is None else start + self.step / 2


class ThresholdScale:
    """Step function: values below domain[i] map to range_[i]."""

    def __init__(self, domain: Sequence[float], range_: Sequence):
        if len(range_) < len(domain) + 1:
            raise ValueError("Threshold range needs one more entry than its domain.")
        self.domain = list(domain)
        self.range = list(range_)

    def bucket(self, value: float) -> int:
        return bisect_right(self.domain, value)

    def __call__(self, value: float):
        return self.range[self.bucket(value)]


class LinearScale:
    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        t = (value - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)


def threshold_breakpoints(lo: float, hi: float, count: int) -> List[float]:
    """
    `count` evenly spaced breakpoints starting at `lo`. The first one equals
    `lo`, leaving `count - 1` interior breakpoints.
    """
    step = (hi - lo) / count
    return [lo + i * step for i in range(count)]


def interior_breakpoints(lo: float, hi: float, count: int) -> List[float]:
    return threshold_breakpoints(lo, hi, count)[1:]


def heat_palette(count: int) -> List[str]:
    """`count + 1` diverging colours ordered cold to hot."""
    ramp = list(diverging.RdYlBu)
    if count + 1 != len(ramp):
        raise ValueError(f"RdYlBu ramp provides {len(ramp)} colours, need {count + 1}")
    return ramp[::-1]
