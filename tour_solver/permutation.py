# building-tour-solver/tour_solver/permutation.py
"""
In-place permutation engine (Heap's algorithm).

One mutable buffer is rearranged by single swaps; the caller sees every
ordering of it exactly once through a visit callback. Nothing is allocated
per ordering, which is what lets a partition worker enumerate (n - 2)!
tours with constant extra memory.

The buffer must be owned by one caller. Two workers sharing a buffer
would corrupt each other's enumeration.
"""

from __future__ import annotations

import math
from typing import Callable, Iterator, List, MutableSequence, Sequence, Tuple, TypeVar

T = TypeVar("T")


def heap_permute(
    buffer: MutableSequence[T],
    size: int,
    visit: Callable[[MutableSequence[T]], None]
) -> None:
    """
    Visit every ordering of buffer[:size], rearranging buffer in place.

    For size <= 1 the current arrangement is the only ordering and is
    visited once; this covers an empty remainder too.

    The swap depends on parity: odd sizes always swap position 0 with the
    last position, even sizes swap position i. Swapping the same pair in
    both cases would repeat some orderings and skip others.

    Args:
        buffer: Items to permute, modified in place
        size: Length of the prefix being permuted at this depth
        visit: Called once per ordering with the buffer itself. It must
            not keep a reference expecting the contents to stay put.
    """
    if size <= 1:
        visit(buffer)
        return

    last = size - 1
    for i in range(size):
        heap_permute(buffer, last, visit)
        if size % 2 == 1:
            buffer[0], buffer[last] = buffer[last], buffer[0]
        else:
            buffer[i], buffer[last] = buffer[last], buffer[i]


def iter_permutations(items: Sequence[T]) -> Iterator[Tuple[T, ...]]:
    """
    Yield a snapshot of every ordering produced by heap_permute.

    Works on a private copy of items. Meant for inspection and tests,
    since it materializes all n! snapshots.
    """
    snapshots: List[Tuple[T, ...]] = []
    buffer = list(items)
    heap_permute(buffer, len(buffer), lambda b: snapshots.append(tuple(b)))
    yield from snapshots


def count_orderings(location_count: int) -> int:
    """
    Orderings one partition enumerates: (n - 2)! for n >= 2, else 0.

    Example:
        >>> count_orderings(5)
        6
    """
    if location_count < 2:
        return 0
    return math.factorial(location_count - 2)
