import logging

from .buffer import Mark
from .errors import UnknownAlgorithmError
from .steps import StepKind, StepRecorder, StepSequence

logger = logging.getLogger(__name__)

# ============================================================
# ===================== SORTING DRIVERS ======================
# ============================================================
#
# Each driver runs its algorithm to completion on the recorder's working
# copy, committing one Step per animated unit of work, and returns the
# finished StepSequence. The list passed in is left untouched.

def record_bubble(values) -> StepSequence:
    rec = StepRecorder("bubble", values); v = rec.values
    n = len(v)
    for i in range(n - 1):
        for j in range(n - 1 - i):
            rec.mark(j, Mark.COMPARING); rec.mark(j+1, Mark.COMPARING)
            if rec.greater(v[j], v[j+1]):
                rec.swap(j, j+1); rec.count_mutation()
                rec.mark(j, Mark.MUTATING); rec.mark(j+1, Mark.MUTATING)
            rec.settle(range(n - i, n))
            rec.commit(StepKind.COMPARE_SWAP, j, j+1)
    return rec.finish()


def record_selection(values) -> StepSequence:
    rec = StepRecorder("selection", values); v = rec.values
    n = len(v)
    for i in range(n - 1):
        mi = i; rec.mark(i, Mark.MUTATING)
        for j in range(i + 1, n):
            rec.mark(j, Mark.COMPARING)
            if rec.greater(v[mi], v[j]):
                if mi != i: rec.mark(mi, Mark.IDLE)
                mi = j; rec.mark(mi, Mark.MUTATING)
        if mi != i:
            rec.swap(i, mi); rec.count_mutation()
        rec.settle(range(i + 1))
        rec.commit(StepKind.SELECT_MIN, i, mi)
    return rec.finish()


def record_insertion(values) -> StepSequence:
    rec = StepRecorder("insertion", values); v = rec.values
    for i in range(1, len(v)):
        key = v[i]; j = i - 1
        rec.mark(i, Mark.MUTATING)
        while j >= 0 and rec.greater(v[j], key):
            rec.write(j+1, v[j]); rec.count_mutation()
            rec.mark(j+1, Mark.COMPARING); j -= 1
        rec.write(j+1, key); rec.mark(j+1, Mark.MUTATING)
        rec.commit(StepKind.INSERT_KEY, i, j+1)
    return rec.finish()


def record_merge(values) -> StepSequence:
    rec = StepRecorder("merge", values); v = rec.values
    n = len(v); w = 1
    while w < n:
        for lo in range(0, n, 2 * w):
            mid = min(lo + w - 1, n - 1); hi = min(lo + 2*w - 1, n - 1)
            if mid >= hi: continue
            L = v[lo:mid+1]; R = v[mid+1:hi+1]
            i = j = 0; k = lo
            while i < len(L) and j < len(R):
                if not rec.greater(L[i], R[j]): rec.write(k, L[i]); i += 1
                else: rec.write(k, R[j]); j += 1; rec.count_mutation()
                k += 1
            while i < len(L): rec.write(k, L[i]); i += 1; k += 1
            while j < len(R): rec.write(k, R[j]); j += 1; k += 1
            for x in range(lo, hi + 1): rec.mark(x, Mark.MUTATING)
            rec.commit(StepKind.MERGE_WINDOW, lo, mid, hi)
        w *= 2
    return rec.finish()


def record_quick(values) -> StepSequence:
    """
    Iterative quicksort: explicit (lo, hi) work-stack, last-element pivot,
    Lomuto partition. One Step per partition, each computed against the
    working copy as it stands when that partition runs.
    """
    rec = StepRecorder("quick", values); v = rec.values
    n = len(v)
    settled = set()
    work = [(0, n - 1)]
    while work:
        lo, hi = work.pop()
        if lo >= hi:
            if lo == hi: settled.add(lo)
            continue
        pivot = v[hi]; i = lo - 1
        rec.mark(hi, Mark.MUTATING)
        for j in range(lo, hi):
            rec.mark(j, Mark.COMPARING)
            if not rec.greater(v[j], pivot):
                i += 1; rec.swap(i, j); rec.count_mutation()
                rec.mark(i, Mark.MUTATING)
        p = i + 1
        rec.swap(p, hi)
        settled.add(p)
        # ranges that will never be partitioned are already in place
        if p - 1 == lo: settled.add(lo)
        if p + 1 == hi: settled.add(hi)
        rec.settle(sorted(settled))
        rec.commit(StepKind.PARTITION, lo, hi)
        if p - 1 > lo: work.append((lo, p - 1))
        if p + 1 < hi: work.append((p + 1, hi))
    return rec.finish()


def record_heap(values) -> StepSequence:
    rec = StepRecorder("heap", values); v = rec.values
    n = len(v)

    def sift_down(size, root):
        while True:
            lg, l, r = root, 2*root + 1, 2*root + 2
            if l >= size: return
            if rec.greater(v[l], v[lg]): lg = l
            if r < size and rec.greater(v[r], v[lg]): lg = r
            rec.settle(range(size, n))
            if lg == root:
                rec.mark(root, Mark.COMPARING)
                rec.commit(StepKind.SIFT_DOWN, root)
                return
            rec.swap(root, lg); rec.count_mutation()
            rec.mark(root, Mark.MUTATING); rec.mark(lg, Mark.COMPARING)
            rec.commit(StepKind.SIFT_DOWN, root, lg)
            root = lg

    for i in range(n // 2 - 1, -1, -1):
        sift_down(n, i)
    for end in range(n - 1, 0, -1):
        rec.swap(0, end); rec.count_mutation()
        rec.mark(0, Mark.MUTATING)
        rec.settle(range(end, n))
        rec.commit(StepKind.HEAP_SWAP, 0, end)
        sift_down(end, 0)
    return rec.finish()


# ============================================================
# ========================= REGISTRY =========================
# ============================================================

DRIVERS = {
    "bubble":    record_bubble,
    "selection": record_selection,
    "insertion": record_insertion,
    "merge":     record_merge,
    "quick":     record_quick,
    "heap":      record_heap,
}


def get_driver(key):
    if key in DRIVERS: return DRIVERS[key]
    raise UnknownAlgorithmError(f"Unknown algorithm: {key}")


def build_sequence(key, values) -> StepSequence:
    seq = get_driver(key)(values)
    logger.debug("Recorded %d steps for %s over %d values", len(seq), key, len(values))
    return seq
