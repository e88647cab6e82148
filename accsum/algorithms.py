"""
K-fold precision summation and dot product algorithms.

This module provides the algorithms of Ogita, Rump and Oishi, "Accurate Sum
and Dot Product": cascades of error-free transformations whose results are
as accurate as if computed in twice, or K times, the working precision and
then rounded back.
"""

from typing import Tuple

from .core import FLOAT64, Values, as_float_list, check_buffer, two_product, two_sum


def sum2(values: Values) -> float:
    """
    Compute sum as if in twice the working precision.

    One pass of cascaded two_sum with the rounding errors collected in a
    side total.

    Args:
        values: Sequence of values to sum

    Returns:
        2-fold precision sum
    """
    p = as_float_list(values)
    if len(p) == 0:
        return 0.0

    s = p[0]
    e = 0.0
    for x in p[1:]:
        s, y = two_sum(s, x)
        e += y
    return s + e


def vec_sum_(p) -> None:
    """
    Error-free vector transformation, in place.

    Afterwards p[-1] holds the floating-point sum and the other elements
    hold rounding errors; the exact sum of p is unchanged.
    """
    n = len(p)
    if n < 2:
        return
    s = float(p[0])
    for i in range(1, n):
        s, p[i - 1] = two_sum(s, float(p[i]))
    p[n - 1] = s


def sum_k_(p, k: int) -> float:
    """Sum of p as if in k-fold precision, destroying p."""
    check_buffer(p)
    for _ in range(k - 1):
        vec_sum_(p)
    total = 0.0
    for x in p:
        total += float(x)
    return total


def sum_k(values: Values, k: int) -> float:
    """
    Compute sum as if in k-fold precision.

    Applies k - 1 error-free vector transformations to a private copy, each
    pushing the rounding errors further down, then sums plainly.

    Args:
        values: Sequence of values to sum
        k: Fold of the working precision

    Returns:
        k-fold precision sum
    """
    return sum_k_(as_float_list(values), k)


def sum_k_vert(values: Values, k: int) -> float:
    """
    Compute sum as if in k-fold precision, vertical variant.

    Same result contract as sum_k, but instead of repeated passes over the
    whole vector it keeps k - 1 running error accumulators and makes a
    single pass, never modifying its input.

    Args:
        values: Sequence of values to sum
        k: Fold of the working precision

    Returns:
        k-fold precision sum
    """
    p = as_float_list(values)
    n = len(p)
    if n == 0:
        return 0.0
    if n < k:
        k = n
    if k <= 1:
        total = 0.0
        for x in p:
            total += x
        return total

    m = k - 1
    q = [0.0] * m
    for i in range(m):
        s = p[i]
        for j in range(i):
            q[j], s = two_sum(q[j], s)
        q[i] = s

    # The paper leaves this initial value open; 0.0 matches the reference
    # results.
    s = 0.0
    for alpha in p[m:]:
        for j in range(m):
            q[j], alpha = two_sum(q[j], alpha)
        s += alpha

    for j in range(m - 1):
        alpha = q[j]
        for i in range(j + 1, m):
            q[i], alpha = two_sum(q[i], alpha)
        s += alpha
    return s + q[m - 1]


def dot2(x: Values, y: Values) -> float:
    """
    Compute dot product as if in twice the working precision.

    Lengths are not checked; see checked_dot2.

    Args:
        x: First vector
        y: Second vector, same length as x

    Returns:
        2-fold precision dot product
    """
    xs = as_float_list(x)
    ys = as_float_list(y)
    if len(xs) == 0:
        return 0.0

    p, s = two_product(xs[0], ys[0])
    for a, b in zip(xs[1:], ys[1:]):
        h, r = two_product(a, b)
        p, q = two_sum(p, h)
        s += q + r
    return p + s


def dot2_err(x: Values, y: Values) -> Tuple[float, float]:
    """
    Compute dot2 together with a rigorous error bound.

    The bound accounts for underflow, so it holds for any finite input
    whose computation does not overflow.

    Args:
        x: First vector
        y: Second vector, same length as x

    Returns:
        Tuple of (dot product, bound on its absolute error)
    """
    xs = as_float_list(x)
    ys = as_float_list(y)
    if len(xs) == 0:
        return 0.0, 0.0

    eps = FLOAT64.eps
    p, s = two_product(xs[0], ys[0])
    e = abs(s)
    for a, b in zip(xs[1:], ys[1:]):
        h, r = two_product(a, b)
        p, q = two_sum(p, h)
        t = q + r
        s += t
        e += abs(t)
    dot = p + s

    n = float(len(xs))
    delta = n * eps / (1 - 2 * n * eps)
    alpha = eps * abs(dot) + (delta * e + 3 * FLOAT64.eta / eps)
    bound = alpha / (1 - 2 * eps)
    return dot, bound


def dot_k(x: Values, y: Values, k: int) -> float:
    """
    Compute dot product as if in k-fold precision.

    The products are expanded error-free into a vector of 2n terms whose
    exact sum is the exact dot product, which is then summed in (k-1)-fold
    precision.

    Args:
        x: First vector
        y: Second vector, same length as x
        k: Fold of the working precision

    Returns:
        k-fold precision dot product
    """
    xs = as_float_list(x)
    ys = as_float_list(y)
    n = len(xs)
    if n == 0:
        return 0.0

    r = [0.0] * (2 * n)
    p, r[0] = two_product(xs[0], ys[0])
    for i in range(1, n):
        h, r[i] = two_product(xs[i], ys[i])
        p, r[n + i - 1] = two_sum(p, h)
    r[2 * n - 1] = p
    return sum_k_(r, k - 1)


def _check_lengths(x: Values, y: Values) -> None:
    if len(x) != len(y):
        raise ValueError(f"Vectors must have same length, got {len(x)} and {len(y)}")


def checked_dot2(x: Values, y: Values) -> float:
    """dot2 that raises ValueError on mismatched lengths."""
    _check_lengths(x, y)
    return dot2(x, y)


def checked_dot2_err(x: Values, y: Values) -> Tuple[float, float]:
    """dot2_err that raises ValueError on mismatched lengths."""
    _check_lengths(x, y)
    return dot2_err(x, y)


def checked_dot_k(x: Values, y: Values, k: int) -> float:
    """dot_k that raises ValueError on mismatched lengths."""
    _check_lengths(x, y)
    return dot_k(x, y, k)
