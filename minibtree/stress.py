"""
"Stress" tests, which perform a large number of inserts
through the command language, and validate the btree after each one.

These should compliment, static unit tests, in that they
cover many insertion orders, and thus expose splitting issues
that hand-picked cases can't catch.
"""
import logging
import itertools
import math

from .constants import NOT_FOUND_MSG


logger = logging.getLogger(__name__)


STRESS_TEST_CASES = [
    [1, 2, 3, 4],
    [64, 5, 13, 82],
    [82, 13, 5, 2, 0],
    [10, 20, 30, 40, 50, 60, 70],
    [72, 79, 96, 38, 47],
    [432, 507, 311, 35, 246, 950, 956, 929, 769, 744, 994, 438],
    [159, 597, 520, 189, 822, 725, 504, 397, 218, 134, 516],
    [960, 267, 947, 400, 795, 327, 464, 884, 667, 870, 92],
    [793, 651, 165, 282, 177, 439, 593],
    [229, 653, 248, 298, 801, 947, 63, 619, 475, 422, 856, 57, 38],
    [103, 394, 484, 380, 834, 677, 604, 611, 952, 71, 568, 291, 433, 305],
    [15, 382, 653, 668, 139, 70, 828, 17, 891, 121, 175, 642, 491, 281, 920],
    [726, 361, 583, 121, 908, 789, 842, 67, 871, 461, 522, 394, 225, 637, 792, 393, 656, 748, 39, 696],
    # duplicate keys
    [7, 7, 7, 7, 7, 7, 7, 7, 7],
    [3, 1, 3, 2, 3, 1, 3, 2, 3, 3],
]


def value_for(key, occurrence: int = 0) -> str:
    return f"value_{key}_{occurrence}"


def run_insert_stress_test(shell, insert_keys) -> None:
    """
    insert keys one by one; validate the tree after each insert,
    then check every key resolves to the value of its first insert

    :param shell: IndexShell
    :param insert_keys:
    """
    shell.reset()
    logger.info(f"running test case: {insert_keys}")

    occurrences = {}
    for key in insert_keys:
        occurrence = occurrences.get(key, 0)
        occurrences[key] = occurrence + 1
        cmd = f"insert {key} '{value_for(key, occurrence)}'"
        logger.debug(f"handling [{cmd}]")
        resp = shell.handle_input(cmd)
        assert resp.success, f"cmd {cmd} failed with {resp.error_message}"
        # ensure tree is valid
        shell.tree.validate()

    for key in occurrences:
        resp = shell.handle_input(f"search {key}")
        assert resp.success
        result = shell.get_pipe().read()
        assert result == value_for(key), f"expected: {value_for(key)}; received {result}"

    missing_key = max(insert_keys) + 1
    shell.handle_input(f"search {missing_key}")
    result = shell.get_pipe().read()
    assert result == NOT_FOUND_MSG, f"expected key {missing_key} to be missing; received {result}"


def run_insert_stress_suite(shell, test_cases=None, num_perms: int = 3):
    """
    Insert each test case in several orders and
    validate btree correctness.

    :param shell: IndexShell
    :param test_cases: lists of integer keys
    :param num_perms: number of insertion orders tried per test case
    """
    if test_cases is None:
        test_cases = STRESS_TEST_CASES

    for test_case in test_cases:
        # there is a large number of perms ~O(n!)
        # and they are generated in a predictable order
        # we'll skip based on fixed step
        total_perms = math.factorial(len(test_case))
        perms_wanted = min(num_perms, total_perms)
        step_size = max(min(total_perms // perms_wanted, 10), 1)
        perm_iter = itertools.permutations(test_case)

        insert_perms = []
        while len(insert_perms) < perms_wanted:
            for _ in range(step_size - 1):
                # skip n-1 orders
                next(perm_iter)
            insert_perms.append(list(next(perm_iter)))

        for insert_keys in insert_perms:
            try:
                run_insert_stress_test(shell, insert_keys)
            except Exception as e:
                logger.error(f"Stress test failed on: {insert_keys} with {e}")
                raise
