# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Lazy enumeration of all orderings of a finite sequence.

Example
-------
>>> from matperm import Permutations
>>> sorted(tuple(p) for p in Permutations("abc"))[:2]
[('a', 'b', 'c'), ('a', 'c', 'b')]
"""

import logging
import math
from typing import Generic, Iterator, List, Sequence, TypeVar

from .errors import IteratorExhaustedError, UnsupportedOperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PermutationIterator(Iterator[List[T]]):
    """
    One traversal over the n! orderings of a sequence.

    The state is a factorial-number-system counter c[0..n-1] with
    c[i] in {0, ..., i}. Each counter value decodes to one permutation:
    starting from a copy of the elements, repeatedly pop the element at
    index c[n-1-k] (k = 0, 1, ...) of the shrinking copy. The counter is
    then incremented with carry; carrying past the last digit ends the
    enumeration. The resulting order is NOT lexicographic.
    """

    def __init__(self, source: Sequence[T]) -> None:
        self._size = len(source)
        self._counter = [0] * self._size
        self._list = list(source)  # private working copy
        self._done = False
        logger.debug(
            f"PermutationIterator: {self._size}! = "
            f"{math.factorial(self._size)} permutations to go"
        )

    def _advance_counter(self) -> None:
        i = 0
        while i < self._size:
            self._counter[i] += 1
            if self._counter[i] <= i:
                return
            # digit overflowed its radix, carry into the next one
            self._counter[i] = 0
            i += 1
        self._done = True
        logger.debug("PermutationIterator: exhausted")

    def _next_permutation(self) -> List[T]:
        remaining = list(self._list)
        n = self._size
        return [remaining.pop(self._counter[n - k - 1]) for k in range(n)]

    def has_next(self) -> bool:
        return not self._done

    def __next__(self) -> List[T]:
        if self._done:
            raise IteratorExhaustedError("all permutations have been produced")
        permutation = self._next_permutation()
        self._advance_counter()
        return permutation

    def next(self) -> List[T]:
        return self.__next__()

    def remove(self) -> None:
        raise UnsupportedOperationError(
            "removing from a permutation iteration is not supported"
        )


class Permutations(Generic[T]):
    """
    Iterable over every ordering of `sequence`, produced lazily.

    >>> for perm in Permutations([1, 2, 3]):
    ...     ...

    yields six fresh lists. Each call to iter() starts an independent
    traversal with its own counter and its own copy of the elements
    taken at that moment.

    The sequence itself is NOT copied at construction: it is held by
    reference and never modified. Mutating it while a traversal is in
    progress is a contract violation with undefined results, nothing
    guards against it. Elements need not be hashable or orderable.
    """

    def __init__(self, sequence: Sequence[T]) -> None:
        self._sequence = sequence

    def __iter__(self) -> PermutationIterator[T]:
        return PermutationIterator(self._sequence)

    def count(self) -> int:
        """
        n!, the number of permutations a traversal produces.

        Not spelled __len__: len() is capped at sys.maxsize, and 21! is
        already past it.
        """
        return math.factorial(len(self._sequence))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sequence!r})"
