"""Shared fixtures and plain (non-animated) reference sorts.

Each reference sorts a copy of its input and returns
(sorted_list, comparisons, mutations), counting exactly the events the
matching driver counts.
"""

import itertools

import numpy as np
import pytest

from stepsorter.settings import algorithm_keys

ALGORITHM_KEYS = algorithm_keys()


def ref_bubble(values):
    a = list(values); n = len(a); c = m = 0
    for i in range(n - 1):
        for j in range(n - 1 - i):
            c += 1
            if a[j] > a[j + 1]:
                a[j], a[j + 1] = a[j + 1], a[j]; m += 1
    return a, c, m


def ref_selection(values):
    a = list(values); n = len(a); c = m = 0
    for i in range(n - 1):
        mi = i
        for j in range(i + 1, n):
            c += 1
            if a[j] < a[mi]: mi = j
        if mi != i:
            a[i], a[mi] = a[mi], a[i]; m += 1
    return a, c, m


def ref_insertion(values):
    a = list(values); c = m = 0
    for i in range(1, len(a)):
        key = a[i]; j = i - 1
        while j >= 0:
            c += 1
            if a[j] <= key: break
            a[j + 1] = a[j]; m += 1; j -= 1
        a[j + 1] = key
    return a, c, m


def ref_merge(values):
    a = list(values); n = len(a); c = m = 0
    width = 1
    while width < n:
        for lo in range(0, n, 2 * width):
            mid = min(lo + width, n); hi = min(lo + 2 * width, n)
            left, right = a[lo:mid], a[mid:hi]
            if not right: continue
            out = []
            while left and right:
                c += 1
                if left[0] <= right[0]: out.append(left.pop(0))
                else: out.append(right.pop(0)); m += 1
            a[lo:hi] = out + left + right
        width *= 2
    return a, c, m


def ref_quick(values):
    a = list(values); counts = [0, 0]

    def _q(lo, hi):
        if lo >= hi: return
        pivot = a[hi]; i = lo - 1
        for j in range(lo, hi):
            counts[0] += 1
            if a[j] <= pivot:
                i += 1; a[i], a[j] = a[j], a[i]; counts[1] += 1
        a[i + 1], a[hi] = a[hi], a[i + 1]
        _q(lo, i); _q(i + 2, hi)

    _q(0, len(a) - 1)
    return a, counts[0], counts[1]


def ref_heap(values):
    a = list(values); counts = [0, 0]

    def hfy(n, i):
        lg, l, r = i, 2 * i + 1, 2 * i + 2
        if l < n:
            counts[0] += 1
            if a[l] > a[lg]: lg = l
        if r < n:
            counts[0] += 1
            if a[r] > a[lg]: lg = r
        if lg != i:
            a[i], a[lg] = a[lg], a[i]; counts[1] += 1
            hfy(n, lg)

    n = len(a)
    for i in range(n // 2 - 1, -1, -1): hfy(n, i)
    for i in range(n - 1, 0, -1):
        a[0], a[i] = a[i], a[0]; counts[1] += 1
        hfy(i, 0)
    return a, counts[0], counts[1]


REFERENCES = {
    "bubble":    ref_bubble,
    "selection": ref_selection,
    "insertion": ref_insertion,
    "merge":     ref_merge,
    "quick":     ref_quick,
    "heap":      ref_heap,
}


def permutation(size, seed):
    return [int(v) for v in np.random.default_rng(seed).permutation(size) + 1]


def corpus():
    """Every permutation of sizes 1, 2, 3 and 5 plus seeded shuffles of 25 and 100."""
    perms = []
    for size in (1, 2, 3, 5):
        perms.extend(list(p) for p in itertools.permutations(range(1, size + 1)))
    for size in (25, 100):
        perms.extend(permutation(size, seed) for seed in range(5))
        perms.append(list(range(size, 0, -1)))
        perms.append(list(range(1, size + 1)))
    return perms


@pytest.fixture(params=ALGORITHM_KEYS)
def algorithm(request):
    return request.param


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
