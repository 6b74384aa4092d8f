# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import itertools
import logging
import math
import sys

import pytest

from matperm.errors import IteratorExhaustedError, UnsupportedOperationError
from matperm.permutations import PermutationIterator, Permutations

logger = logging.getLogger(__name__)


def test_three_elements_then_exhausted():
    it = iter(Permutations([1, 2, 3]))
    assert isinstance(it, PermutationIterator)

    seen = []
    for _ in range(6):
        assert it.has_next()
        seen.append(it.next())
    assert not it.has_next()
    with pytest.raises(IteratorExhaustedError):
        next(it)
    assert {tuple(p) for p in seen} == set(itertools.permutations([1, 2, 3]))


@pytest.mark.parametrize("n", range(0, 7))
def test_all_orderings_exactly_once(n):
    source = list(range(n))
    perms = [tuple(p) for p in Permutations(source)]
    logger.debug(f"n={n}: {len(perms)} permutations")
    assert len(perms) == math.factorial(n)
    assert set(perms) == set(itertools.permutations(source))


def test_empty_sequence_has_one_permutation():
    assert list(Permutations([])) == [[]]


def test_first_permutation_is_source_order():
    assert next(iter(Permutations("abcd"))) == ["a", "b", "c", "d"]


def test_results_are_fresh_lists():
    perms = list(Permutations([1, 2, 3]))
    assert all(isinstance(p, list) and len(p) == 3 for p in perms)
    perms[0].append(99)
    perms[0][0] = -1
    assert all(len(p) == 3 for p in perms[1:])


def test_unhashable_elements():
    a, b, c = [1], [2], [3]
    perms = list(Permutations([a, b, c]))
    assert len(perms) == 6
    for p in perms:
        assert sorted(id(x) for x in p) == sorted(id(x) for x in (a, b, c))


def test_independent_traversals():
    perms = Permutations([1, 2, 3, 4])
    first = iter(perms)
    second = iter(perms)
    a = [next(first) for _ in range(5)]
    b = [next(second) for _ in range(24)]
    assert not second.has_next()
    assert first.has_next()
    a.extend(first)
    assert a == b


def test_source_is_held_by_reference():
    source = [1, 2]
    perms = Permutations(source)
    source.append(3)
    assert perms.count() == 6
    assert len(list(perms)) == 6


def test_source_is_not_mutated():
    source = [3, 1, 2]
    list(Permutations(source))
    assert source == [3, 1, 2]


def test_remove_unsupported():
    it = iter(Permutations([1, 2]))
    with pytest.raises(UnsupportedOperationError):
        it.remove()
    with pytest.raises(NotImplementedError):
        it.remove()


def test_count_is_factorial():
    assert Permutations(range(5)).count() == 120
    assert Permutations([]).count() == 1


def test_count_beyond_machine_size():
    perms = Permutations(list(range(21)))
    assert perms.count() == math.factorial(21)
    assert perms.count() > sys.maxsize
    # enumeration stays lazy, the first result comes back immediately
    assert next(iter(perms)) == list(range(21))
