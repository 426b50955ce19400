"""
"Stress" tests, which perform a large number of inserts over
permutations of fixed key sets, and validate the tree after each one.

These should compliment the static unit tests, in that they
cover many more insertion orders, and thus expose issues
that unit-tests can't catch.
"""
import logging
import itertools
import math

from typing import Iterable

from .btree import BPTree


STRESS_TEST_CASES = [
    [1, 2, 3, 4],
    [64, 5, 13, 82],
    [82, 13, 5, 2, 0],
    [10, 20, 30, 40, 50, 60, 70],
    [72, 79, 96, 38, 47],
    [432, 507, 311, 35, 246, 950, 956, 929, 769, 744, 994, 438],
    [159, 597, 520, 189, 822, 725, 504, 397, 218, 134, 516],
    [960, 267, 947, 400, 795, 327, 464, 884, 667, 870, 92],
    [229, 653, 248, 298, 801, 947, 63, 619, 475, 422, 856, 57, 38],
    [103, 394, 484, 380, 834, 677, 604, 611, 952, 71, 568, 291, 433, 305],
    [15, 382, 653, 668, 139, 70, 828, 17, 891, 121, 175, 642, 491, 281, 920],
    # duplicate keys
    [5, 5, 5, 5, 5, 5, 5],
    [3, 1, 3, 2, 3, 1, 3, 2, 3],
]


def run_insert_stress_test(branching_factor: int, insert_keys: Iterable) -> BPTree:
    """
    insert keys into a fresh tree, validating the tree after each insert,
    and check the tree holds exactly the inserted keys

    :param branching_factor:
    :param insert_keys:
    :return: the populated tree
    """
    tree = BPTree(branching_factor)
    inserted = []
    for idx, key in enumerate(insert_keys):
        # value records arrival order, so duplicate ordering can be checked
        tree.insert(key, (key, idx))
        inserted.append(key)
        tree.validate()

    actual = tree.keys()
    expected = sorted(inserted)
    assert actual == expected, f"expected: {expected}; received {actual}"

    for key in set(inserted):
        found = tree.range_search(key, "==")
        arrival = [idx for idx, k in enumerate(inserted) if k == key]
        assert found == [(key, idx) for idx in arrival], (
            f"key [{key}] expected: {arrival}; received {found}"
        )
        assert tree.get(key) == (key, arrival[0])
    return tree


def run_insert_stress_suite(branching_factors: Iterable[int] = (3, 4, 5), num_perms: int = 3):
    """
    Perform a large number of inserts and validate btree correctness.

    :param branching_factors: branching factors to run each case under
    :param num_perms: number of insert orders tried per test case
    """
    for test_case in STRESS_TEST_CASES:
        # there is a large number of perms ~O(n!)
        # and they are generated in a predictable order
        # we'll skip based on fixed step
        total_perms = math.factorial(len(test_case))
        step_size = max(min(total_perms // num_perms, 10), 1)
        perm_iter = itertools.islice(itertools.permutations(test_case), 0, None, step_size)
        perms = list(itertools.islice(perm_iter, num_perms))

        for branching_factor in branching_factors:
            for insert_keys in perms:
                logging.info(f"running test case: {insert_keys} with branching factor {branching_factor}")
                try:
                    run_insert_stress_test(branching_factor, insert_keys)
                except Exception as e:
                    logging.error(
                        f"stress test failed on: {insert_keys} (branching factor {branching_factor}) with {e}"
                    )
                    raise
