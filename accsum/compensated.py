"""
Classic single-pass summation algorithms.

These are the simple accumulator patterns the accurate algorithms are built
upon and compared against: plain sequential summation, Kahan's compensated
summation, the Kahan-Babuska-Neumaier balancing variant and Priest's doubly
compensated summation.
"""

from .core import Values, as_float_list, fast_two_sum


def naive_sum(values: Values) -> float:
    """Simple sequential sum, len(values) floating-point additions."""
    total = 0.0
    for x in as_float_list(values):
        total += x
    return total


def kahan_sum(values: Values) -> float:
    """
    Compute sum using Kahan compensated summation.

    Performs 4 * len(values) floating-point operations.

    Args:
        values: Sequence of values to sum

    Returns:
        Compensated sum with reduced floating-point error
    """
    s = 0.0
    c = 0.0
    for x in as_float_list(values):
        y = x - c
        t = s + y
        c = (t - s) - y
        s = t
    return s


def kahan_babuska_sum(values: Values) -> float:
    """
    Compute sum using the Kahan-Babuska-Neumaier balancing algorithm.

    Unlike kahan_sum the correction is computed from whichever of the running
    sum and the next term is larger, so it also survives terms that are
    bigger than the running sum.

    Args:
        values: Sequence of values to sum

    Returns:
        Compensated sum
    """
    p = as_float_list(values)
    if len(p) == 0:
        return 0.0

    s = p[0]
    c = 0.0
    for x in p[1:]:
        t = s + x
        if abs(s) >= abs(x):
            c += (s - t) + x
        else:
            c += (x - t) + s
        s = t
    return s + c


def priest_sum(values: Values) -> float:
    """
    Priest's doubly compensated summation.

    Sorts a private copy by decreasing magnitude, O(n log n), then cascades
    fast_two_sum, whose precondition the ordering guarantees.
    """
    p = as_float_list(values)
    if len(p) == 0:
        return 0.0

    p.sort(key=abs, reverse=True)
    s = p[0]
    c = 0.0
    for x in p[1:]:
        y, u = fast_two_sum(c, x)
        t, v = fast_two_sum(s, y)
        z = u + v
        s, c = fast_two_sum(t, z)
    return s
