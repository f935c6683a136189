"""
Step records and the recorder that produces them.

A Step is plain data: the absolute values it writes, the marks it sets and
the counter deltas it contributes. A driver runs its algorithm once on a
private working copy inside a StepRecorder, committing a Step at every point
the animation should show. Replaying the Steps in order from the same initial
permutation reproduces the working copy exactly, so the live buffer never
drifts from the algorithm's true intermediate state.
"""

from dataclasses import dataclass, field
from enum import Enum

from .buffer import Mark, ValueBuffer
from .errors import InvalidStepError


class StepKind(Enum):
    COMPARE_SWAP = "compare_swap"
    SELECT_MIN   = "select_min"
    INSERT_KEY   = "insert_key"
    MERGE_WINDOW = "merge_window"
    PARTITION    = "partition"
    SIFT_DOWN    = "sift_down"
    HEAP_SWAP    = "heap_swap"
    SETTLE_ALL   = "settle_all"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind        : which driver operation produced the step.
        indices     : the positions that define it, e.g. (j, j+1) or (lo, hi).
        writes      : ((index, value), ...) applied in order.
        marks       : ((index, Mark), ...) applied after the writes.
        comparisons : comparisons made while producing the step.
        mutations   : swaps / writes counted while producing the step.
    """
    kind:        StepKind
    indices:     tuple = ()
    writes:      tuple = ()
    marks:       tuple = ()
    comparisons: int   = 0
    mutations:   int   = 0

    def touched(self):
        yield from self.indices
        for i, _ in self.writes: yield i
        for i, _ in self.marks:  yield i


@dataclass
class Counters:
    comparisons: int = 0
    mutations:   int = 0

    def add(self, step: Step):
        self.comparisons += step.comparisons
        self.mutations   += step.mutations

    def reset(self):
        self.comparisons = 0
        self.mutations   = 0


def apply_step(buffer: ValueBuffer, step: Step, counters: Counters = None):
    """
    Apply one Step to the buffer. Every index is validated first, so a Step
    whose indices are out of range raises InvalidStepError and changes nothing.
    """
    for i in step.touched():
        buffer.check_index(i)
    buffer.clear_marks()
    for i, v in step.writes:
        buffer.values[i] = v
    for i, m in step.marks:
        buffer.marks[i] = m
    if counters is not None:
        counters.add(step)


@dataclass(frozen=True)
class StepSequence:
    """The full, immutable trace of one (algorithm, initial permutation) run."""
    algorithm: str
    initial:   tuple
    steps:     tuple = field(default=())

    def __len__(self):
        return len(self.steps)

    def __getitem__(self, i):
        return self.steps[i]

    def __iter__(self):
        return iter(self.steps)

    @property
    def comparisons(self) -> int:
        return sum(s.comparisons for s in self.steps)

    @property
    def mutations(self) -> int:
        return sum(s.mutations for s in self.steps)

    def replay(self, skip=None):
        """Apply every Step (optionally leaving out the one at index `skip`)
        to a fresh buffer holding the initial permutation."""
        buffer   = ValueBuffer(self.initial)
        counters = Counters()
        for k, step in enumerate(self.steps):
            if k != skip:
                apply_step(buffer, step, counters)
        return buffer, counters


class StepRecorder:
    """
    Scratch-pad the drivers write into.

    Usage inside a driver:
        rec = StepRecorder("bubble", values)
        v = rec.values
        if rec.greater(v[0], v[1]):
            rec.swap(0, 1)
        rec.mark(0, Mark.COMPARING)
        rec.commit(StepKind.COMPARE_SWAP, 0, 1)
        return rec.finish()

    `values` is the recorder's private working copy; the caller's list is
    never touched.
    """

    def __init__(self, algorithm, values):
        self.algorithm = algorithm
        self.initial   = tuple(values)
        self.values    = list(values)
        self._steps    = []
        self._begin()

    def _begin(self):
        self._writes      = {}
        self._marks       = {}
        self._comparisons = 0
        self._mutations   = 0

    def _check(self, i):
        if not 0 <= i < len(self.values):
            raise InvalidStepError(
                f"{self.algorithm}: index {i} out of range for size {len(self.values)}")

    # -- counting --
    def greater(self, a, b) -> bool:
        """Count one comparison and return a > b."""
        self._comparisons += 1
        return a > b

    def count_mutation(self, n=1):
        self._mutations += n

    # -- working copy --
    def write(self, i, value):
        self._check(i)
        self.values[i]  = value
        self._writes[i] = value

    def swap(self, i, j):
        v = self.values
        a, b = v[i], v[j]
        self.write(i, b)
        self.write(j, a)

    # -- annotations --
    def mark(self, i, m: Mark):
        self._check(i)
        self._marks[i] = m

    def settle(self, indices):
        for i in indices:
            self.mark(i, Mark.SETTLED)

    def commit(self, kind: StepKind, *indices) -> Step:
        for i in indices:
            self._check(i)
        step = Step(
            kind=kind,
            indices=tuple(indices),
            writes=tuple(self._writes.items()),
            marks=tuple(self._marks.items()),
            comparisons=self._comparisons,
            mutations=self._mutations,
        )
        self._steps.append(step)
        self._begin()
        return step

    def finish(self) -> StepSequence:
        """Seal the sequence with the terminal step that settles every bar."""
        self.settle(range(len(self.values)))
        self.commit(StepKind.SETTLE_ALL)
        return StepSequence(self.algorithm, self.initial, tuple(self._steps))
