"""
Immutable date-keyed numeric series used by the indicator layer.

``TimeSeries`` holds an ordered, strictly increasing key index (calendar
dates in practice) and a float value per key.  Missing observations are
``NaN`` and stay distinct from zero.  The value buffer is copied on
construction and flagged read-only, and every operation returns a new
series, so a single instance can be shared freely between threads.

Supported primitives:
    - ``shift``: positional look-back with missing leading values.
    - ``rolling``: fixed-size trailing window reduction.
    - ``fill_missing``: constant or per-key fill of NaN positions.
    - ``reindex``: projection onto an arbitrary key set.
    - ``+ - * /``: key-aligned elementwise arithmetic with IEEE-754 semantics.
"""
from __future__ import annotations

import operator
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

Number = Union[int, float]


def _as_readonly(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


class TimeSeries:
    """Ordered mapping from strictly increasing keys to float values.

    Parameters
    ----------
    index : sequence
        Keys in strictly increasing order (no duplicates).
    values : sequence of float
        One value per key.  ``None`` and ``NaN`` both mean "missing".

    Raises
    ------
    ValueError
        If lengths differ or the keys are not strictly increasing.
    """

    __slots__ = ("_index", "_values", "_positions")

    def __init__(self, index: Iterable[Any], values: Iterable[Optional[Number]]):
        keys = tuple(index)
        arr = np.array(
            [np.nan if v is None else v for v in values], dtype=np.float64,
        ).reshape(-1)
        if len(keys) != len(arr):
            raise ValueError(
                f"index has {len(keys)} keys but {len(arr)} values were given"
            )
        for prev, cur in zip(keys, keys[1:]):
            if not prev < cur:
                raise ValueError(
                    f"index must be strictly increasing; found {prev!r} before {cur!r}"
                )
        self._index = keys
        self._values = _as_readonly(arr)
        self._positions = None

    @classmethod
    def _trusted(cls, keys: Tuple[Any, ...], values: np.ndarray) -> "TimeSeries":
        """Build from an already validated key tuple without re-checking order."""
        obj = cls.__new__(cls)
        obj._index = keys
        obj._values = _as_readonly(np.array(values, dtype=np.float64))
        obj._positions = None
        return obj

    @classmethod
    def empty(cls) -> "TimeSeries":
        return cls._trusted((), np.empty(0))

    @classmethod
    def from_pandas(cls, series: pd.Series) -> "TimeSeries":
        """Convert a pandas Series; the index is sorted and must be unique."""
        if not series.index.is_unique:
            raise ValueError("pandas index contains duplicate keys")
        ordered = series.sort_index()
        keys = [k.date() if isinstance(k, pd.Timestamp) else k for k in ordered.index]
        return cls(keys, ordered.to_numpy(dtype=np.float64, na_value=np.nan))

    def to_pandas(self, name: Optional[str] = None) -> pd.Series:
        return pd.Series(np.array(self._values), index=list(self._index), name=name, dtype=np.float64)

    # ── Basic accessors ─────────────────────────────────────────────────

    @property
    def index(self) -> Tuple[Any, ...]:
        return self._index

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the value buffer."""
        return self._values

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[Tuple[Any, float]]:
        return zip(self._index, self._values.tolist())

    def __repr__(self) -> str:
        if not self._index:
            return "TimeSeries([])"
        return (
            f"TimeSeries(n={len(self)}, first={self._index[0]!r}, "
            f"last={self._index[-1]!r})"
        )

    def _position_map(self) -> dict:
        if self._positions is None:
            self._positions = {k: i for i, k in enumerate(self._index)}
        return self._positions

    def value_at(self, key: Any) -> float:
        """Value stored at *key*; ``KeyError`` if the key is not in the index."""
        return float(self._values[self._position_map()[key]])

    def last(self, default: float = np.nan) -> float:
        """Most recent value, or *default* for an empty series."""
        if not self._index:
            return default
        return float(self._values[-1])

    def is_missing(self) -> np.ndarray:
        return np.isnan(self._values)

    @property
    def has_missing(self) -> bool:
        return bool(np.isnan(self._values).any())

    def equals(self, other: "TimeSeries") -> bool:
        """True when keys match and values match, treating NaN == NaN."""
        if not isinstance(other, TimeSeries) or self._index != other._index:
            return False
        return bool(np.array_equal(self._values, other._values, equal_nan=True))

    # ── Slicing ──────────────────────────────────────────────────────────

    def slice(self, start: Optional[int] = None, stop: Optional[int] = None) -> "TimeSeries":
        """Positional slice ``[start:stop]``."""
        return TimeSeries._trusted(self._index[start:stop], self._values[start:stop])

    def tail(self, n: int) -> "TimeSeries":
        """Last *n* observations (the whole series when n >= len)."""
        if n <= 0:
            return TimeSeries.empty()
        return self.slice(max(len(self) - n, 0), None)

    # ── Time-series primitives ──────────────────────────────────────────

    def shift(self, n: int) -> "TimeSeries":
        """Shift values by *n* positions along the fixed index.

        Position ``i`` of the result holds the value at position ``i - n``.
        The first *n* positions (the last ``|n|`` for negative *n*) become
        missing.
        """
        size = len(self)
        out = np.full(size, np.nan)
        if n == 0:
            out[:] = self._values
        elif 0 < n < size:
            out[n:] = self._values[:size - n]
        elif -size < n < 0:
            out[:size + n] = self._values[-n:]
        return TimeSeries._trusted(self._index, out)

    def rolling(self, window: int, func: Callable[[np.ndarray], float]) -> "TimeSeries":
        """Apply *func* to each trailing window of *window* values.

        Position ``i >= window - 1`` receives ``func(values[i-window+1 : i+1])``;
        earlier positions are missing.  Missing values inside a window are
        handed to *func* unchanged.
        """
        if isinstance(window, bool) or not isinstance(window, (int, np.integer)) or window < 1:
            raise ValueError(f"rolling window must be a positive integer, got {window!r}")
        size = len(self)
        out = np.full(size, np.nan)
        with np.errstate(divide="ignore", invalid="ignore"):
            for i in range(window - 1, size):
                out[i] = func(self._values[i - window + 1:i + 1])
        return TimeSeries._trusted(self._index, out)

    def fill_missing(self, fill: Union[Number, Callable[[Any], Number]]) -> "TimeSeries":
        """Replace every missing value with a constant or ``fill(key)``."""
        mask = np.isnan(self._values)
        if not mask.any():
            return self
        out = np.array(self._values)
        if callable(fill):
            for pos in np.flatnonzero(mask):
                out[pos] = fill(self._index[pos])
        else:
            out[mask] = fill
        return TimeSeries._trusted(self._index, out)

    def reindex(self, keys: Sequence[Any]) -> "TimeSeries":
        """Project onto *keys*; keys absent from this series become missing.

        *keys* must be strictly increasing, like any series index; otherwise
        ``ValueError`` is raised.
        """
        keys = tuple(keys)
        if keys == self._index:
            return self
        positions = self._position_map()
        out = np.full(len(keys), np.nan)
        for i, key in enumerate(keys):
            pos = positions.get(key)
            if pos is not None:
                out[i] = self._values[pos]
        return TimeSeries(keys, out)

    def map_values(self, func: Callable[[np.ndarray], np.ndarray]) -> "TimeSeries":
        """Vectorised value transform; *func* maps an ndarray to an ndarray."""
        with np.errstate(divide="ignore", invalid="ignore"):
            out = np.asarray(func(np.array(self._values)), dtype=np.float64)
        if out.shape != self._values.shape:
            raise ValueError("map_values function must preserve the series length")
        return TimeSeries._trusted(self._index, out)

    # ── Key-aligned arithmetic ──────────────────────────────────────────

    def _align(self, other: "TimeSeries") -> Tuple[Tuple[Any, ...], np.ndarray, np.ndarray]:
        if self._index == other._index:
            return self._index, self._values, other._values
        union = tuple(sorted(set(self._index) | set(other._index)))
        return union, self.reindex(union)._values, other.reindex(union)._values

    def _binary(self, other: Any, op: Callable, reflected: bool = False) -> "TimeSeries":
        if isinstance(other, TimeSeries):
            keys, left, right = self._align(other)
        elif isinstance(other, (int, float, np.number)) and not isinstance(other, bool):
            keys, left, right = self._index, self._values, float(other)
        else:
            return NotImplemented
        if reflected:
            left, right = right, left
        # NaN propagates through every IEEE operation, so missing stays missing.
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            out = op(left, right)
        return TimeSeries._trusted(keys, out)

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __radd__(self, other):
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __rsub__(self, other):
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __rmul__(self, other):
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, np.true_divide)

    def __rtruediv__(self, other):
        return self._binary(other, np.true_divide, reflected=True)

    def __neg__(self) -> "TimeSeries":
        return TimeSeries._trusted(self._index, -self._values)
