from enum import IntEnum

import numpy as np

from .errors import InvalidStepError


class Mark(IntEnum):
    """Per-bar display category. Presentation only, never sort state."""
    IDLE      = 0
    COMPARING = 1
    MUTATING  = 2
    SETTLED   = 3


def make_rng(seed=None) -> np.random.Generator:
    return np.random.default_rng(seed)


class ValueBuffer:
    """
    The array being sorted plus one Mark per element.

    Attributes
    ----------
    values : list[int]   — a permutation of 1..size
    marks  : list[Mark]  — aligned index-for-index with values
    """
    __slots__ = ('values', 'marks')

    def __init__(self, values=None):
        self.values = list(values) if values is not None else []
        self.marks  = [Mark.IDLE] * len(self.values)

    @property
    def size(self) -> int:
        return len(self.values)

    def reset(self, size: int, rng: np.random.Generator):
        """Replace the contents with a uniformly random permutation of 1..size."""
        if size < 1:
            raise ValueError(f"Buffer size must be positive, got {size}")
        self.values = [int(v) for v in rng.permutation(size) + 1]
        self.marks  = [Mark.IDLE] * size

    def clear_marks(self):
        self.marks = [Mark.IDLE] * len(self.values)

    def settle_all(self):
        self.marks = [Mark.SETTLED] * len(self.values)

    def check_index(self, i):
        if not 0 <= i < len(self.values):
            raise InvalidStepError(f"Index {i} out of range for buffer of size {len(self.values)}")

    def is_sorted(self) -> bool:
        v = self.values
        return all(v[k] < v[k+1] for k in range(len(v) - 1))

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"ValueBuffer({self.values!r})"
