from datetime import date, timedelta
from itertools import product

import pytest

from src.bookings.conflicts import overlaps

D0 = date(2025, 6, 1)


def d(n):
    return D0 + timedelta(days=n)


# Every non-empty range with both ends in [0, 6]; enough to hit each
# ordering of four endpoints, including all the touching cases.
RANGES = [(s, e) for s in range(7) for e in range(7) if s < e]


def test_touching_ranges_do_not_overlap():
    assert overlaps(d(0), d(5), d(5), d(10)) is False
    assert overlaps(d(5), d(10), d(0), d(5)) is False


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((0, 5), (0, 5), True),     # identical
        ((0, 5), (1, 6), True),     # partial, later start
        ((1, 6), (0, 5), True),     # partial, earlier start
        ((0, 10), (3, 4), True),    # containment
        ((3, 4), (0, 10), True),    # contained
        ((0, 5), (5, 10), False),   # checkout day == check-in day
        ((0, 5), (6, 10), False),   # gap
        ((6, 10), (0, 5), False),
    ],
)
def test_overlap_cases(a, b, expected):
    assert overlaps(d(a[0]), d(a[1]), d(b[0]), d(b[1])) is expected


def test_overlap_is_symmetric():
    for (a_s, a_e), (b_s, b_e) in product(RANGES, RANGES):
        assert overlaps(d(a_s), d(a_e), d(b_s), d(b_e)) == overlaps(d(b_s), d(b_e), d(a_s), d(a_e))


def test_non_empty_range_overlaps_itself():
    for s, e in RANGES:
        assert overlaps(d(s), d(e), d(s), d(e))


def _nested_booking_check(new_in, new_out, ex_in, ex_out):
    # Per-unit check written as two nested conditions.
    if new_in < ex_out:
        if new_out > ex_in:
            return True
    return False


def _nested_extension_check(ex_in, new_out, other_in):
    # Extension check written as two nested conditions on the later start.
    if ex_in < other_in:
        if new_out > other_in:
            return True
    return False


def test_nested_booking_check_equals_overlaps():
    for (a_s, a_e), (b_s, b_e) in product(RANGES, RANGES):
        assert _nested_booking_check(d(a_s), d(a_e), d(b_s), d(b_e)) == overlaps(
            d(a_s), d(a_e), d(b_s), d(b_e)
        )


def test_nested_extension_check_equals_later_start_and_overlaps():
    for (ex_in, new_out), (o_in, o_out) in product(RANGES, RANGES):
        later = d(ex_in) < d(o_in)
        expected = later and overlaps(d(ex_in), d(new_out), d(o_in), d(o_out))
        assert _nested_extension_check(d(ex_in), d(new_out), d(o_in)) == expected
