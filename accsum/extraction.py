"""
Extraction-based accurate summation.

Implements the algorithms of Rump, Ogita and Oishi, "Accurate Floating-Point
Summation", Parts I and II: values are split against a power-of-two
extraction unit sigma into high parts, which add up without error, and low
order remainders, which are refined in further passes until they can no
longer change the rounded result.

Routines ending in an underscore work in place and leave residuals in the
buffer they are given. Their counterparts without the underscore copy the
input first.
"""

import logging
import math
from typing import Callable, List, Tuple

from .core import FLOAT64, Values, as_float_list, check_buffer, fast_two_sum

logger = logging.getLogger(__name__)

# Above this, inv_eps * v overflows
_SCALE_LIMIT = math.ldexp(1.0, FLOAT64.emax - FLOAT64.precision)


class InputTooLargeError(ValueError):
    """Input longer than the extraction unit margin math supports."""

    def __init__(self, length: int, limit: int):
        super().__init__(f"len(p) = {length} exceeds limit, {limit}")
        self.length = length
        self.limit = limit


def next_power_two(v: float) -> float:
    """
    Smallest power of two not less than abs(v).

    Computed in 4 floating-point operations from the rounding of
    2**precision * v. Returns 0 for 0. Values large enough for that product
    to overflow are scaled down by eps first, which is exact.
    """
    if math.isfinite(v) and abs(v) > _SCALE_LIMIT:
        return next_power_two(v * FLOAT64.eps) * FLOAT64.inv_eps
    q = FLOAT64.inv_eps * v
    return abs((q - v) - q)


def extract_scalar(sigma: float, v: float) -> Tuple[float, float]:
    """
    Split v relative to sigma, which must be an integral power of two.

    Args:
        sigma: Extraction unit
        v: Value to split

    Returns:
        Tuple of (high order part q, remainder r) with q + r == v exactly
    """
    q = (sigma + v) - sigma
    r = v - q
    return q, r


def extract_slice(sigma: float, p) -> float:
    """
    Split every element of p relative to sigma, in place.

    Each p[i] is replaced by its low order remainder and the high order parts
    are summed into the result. The high parts are multiples of the unit in
    the last place of sigma and small enough that their sum is exact, so the
    result plus the new sum of p equals the old sum of p exactly.

    Args:
        sigma: Extraction unit, an integral power of two
        p: Mutable sequence of floats

    Returns:
        Sum tau of the extracted high order parts
    """
    tau = 0.0
    for i in range(len(p)):
        q, p[i] = extract_scalar(sigma, float(p[i]))
        tau += q
    return tau


def stop_sum(ms: float) -> float:
    """Stopping criterion sufficient for a faithfully rounded sum."""
    return FLOAT64.u * ms * ms


def stop_sign(ms: float) -> float:
    """Looser stopping criterion, sufficient to decide the sign of the sum."""
    return FLOAT64.u * ms


def _max_magnitude(p) -> float:
    mu = 0.0
    for x in p:
        a = abs(float(x))
        if a > mu:
            mu = a
    return mu


def _overflow_result(p, mu: float) -> float:
    # Maxima of both signs, infinities included, have no meaningful sum.
    signs = {math.copysign(1.0, float(x)) for x in p if abs(float(x)) == mu}
    if len(signs) != 1:
        return math.nan
    return math.copysign(math.inf, signs.pop())


def transform(p, rho: float = 0.0,
              stop: Callable[[float], float] = stop_sum) -> Tuple[float, float]:
    """
    Iterative extraction loop shared by the accurate summation routines.

    Repeatedly extracts p against a shrinking extraction unit, accumulating
    the extracted parts, until the accumulated total is large enough relative
    to the unit (as judged by stop) or the unit reaches the underflow range.
    p is modified in place and left holding the low order remainders.

    Args:
        p: Mutable sequence of floats
        rho: Value carried in from a previous pass, added to the total
        stop: Maps the length margin Ms to the stopping threshold factor

    Returns:
        Tuple (tau1, tau2) with tau1 + tau2 + sum(p after) equal to
        rho + sum(p before) exactly, tau1 the leading term
    """
    n = len(p)
    while True:
        mu = _max_magnitude(p)
        if mu == 0.0:
            return rho, 0.0

        ms = next_power_two(float(n + 2))
        sigma = ms * next_power_two(mu)  # extraction unit
        if not math.isfinite(sigma):
            logger.debug(f"Extraction unit overflowed for max magnitude {mu!r}")
            inf = _overflow_result(p, mu)
            return inf, inf

        phi = ms * FLOAT64.u  # factor to decrease sigma
        threshold = stop(ms)

        t = rho
        while True:
            tau = extract_slice(sigma, p)
            tau1 = t + tau
            if abs(tau1) >= threshold * sigma or sigma <= FLOAT64.min_pos:
                return fast_two_sum(t, tau)
            t = tau1
            if t == 0.0:
                break
            sigma *= phi

        # Everything extracted so far cancelled exactly; start over on the
        # remainders with a fresh extraction unit.
        logger.debug("Running total cancelled to zero, restarting extraction")
        rho = 0.0


def acc_sum_(p) -> float:
    """
    Faithfully rounded sum of p, destroying p.

    Args:
        p: List, float64 ndarray or float64 tensor, overwritten with residuals

    Returns:
        Faithful rounding of the sum of the original values of p
    """
    check_buffer(p)
    tau1, tau2 = transform(p)
    total = 0.0
    for x in p:  # order not important
        total += float(x)
    return total + tau2 + tau1  # order important


def acc_sum(values: Values) -> float:
    """
    Compute an accurate sum using AccSum.

    The result is a faithful rounding of the exact sum: the correctly
    rounded value or one of its immediate floating-point neighbours. The
    input is left unmodified.

    Args:
        values: Sequence of values to sum

    Returns:
        Faithfully rounded sum
    """
    return acc_sum_(as_float_list(values))


def acc_sign_bit_(p) -> bool:
    """Sign bit of the sum of p, destroying p. True means negative."""
    check_buffer(p)
    tau1, _ = transform(p, 0.0, stop_sign)
    return math.copysign(1.0, tau1) < 0


def acc_sign_bit(values: Values) -> bool:
    """
    Sign bit of the exact sum of values.

    Runs the extraction loop with a looser stopping criterion, somewhat
    faster than computing the accurate sum itself.
    """
    return acc_sign_bit_(as_float_list(values))


def _transform_k(p, rho: float) -> Tuple[float, float]:
    tau1, tau2 = transform(p, rho, stop_sum)
    total = 0.0
    for x in p:
        total += float(x)
    res = total + tau2 + tau1  # as in acc_sum_
    r = tau2 - (res - tau1)
    return res, r


def acc_sum_k_(p, k: int) -> List[float]:
    """
    K-term expansion of the sum of p, destroying p.

    Each pass refines the residual left by the previous one. The sum of the
    returned terms approximates the exact sum with K-fold accuracy; the first
    term equals the acc_sum result. Terms after an underflowing one are 0.0.

    Args:
        p: List, float64 ndarray or float64 tensor, overwritten with residuals
        k: Number of terms, at least 1

    Returns:
        List of k floats of decreasing magnitude
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")
    check_buffer(p)

    res = [0.0] * k
    r = 0.0
    for i in range(k):
        res[i], r = _transform_k(p, r)
        if abs(res[i]) <= FLOAT64.min_pos:
            logger.debug(f"acc_sum_k stopped after {i + 1} of {k} terms")
            break
    return res


def acc_sum_k(values: Values, k: int) -> List[float]:
    """Non-destructive acc_sum_k_."""
    return acc_sum_k_(as_float_list(values), k)


def prec_sum(values: Values, k: int) -> float:
    """
    Compute an accurate sum with a tunable error bound.

    Extracts every value against k-dependent levels of extraction units in a
    single pass, one accumulator per level. The result is a faithful rounding
    of the exact sum or else has a relative error of at most
    2**(-53*k) * cond(values). The input is left unmodified.

    Args:
        values: Sequence of values to sum
        k: Precision factor, larger k tightens the bound

    Returns:
        Accurate sum

    Raises:
        InputTooLargeError: If len(values) exceeds 2**26 - 2
    """
    p = as_float_list(values)
    n = len(p)
    if n == 0:
        return 0.0
    if n > FLOAT64.prec_sum_max_len:
        raise InputTooLargeError(n, FLOAT64.prec_sum_max_len)

    mu = _max_magnitude(p)
    mu /= 1.0 - n * 2 * FLOAT64.eps
    if mu == 0.0:
        return 0.0
    sigma0 = next_power_two(mu)
    if not math.isfinite(sigma0):
        return _overflow_result(p, _max_magnitude(p))

    ms = next_power_two(float(n + 2))
    m = math.log2(ms)
    phi = ms * FLOAT64.u
    log2_u = math.log2(FLOAT64.u)
    levels = int(math.ceil((k * log2_u - 2) / (log2_u + m))) - 1

    sigmas = []
    while len(sigmas) < levels and sigma0 > FLOAT64.min_pos:
        sigmas.append(sigma0)
        sigma0 *= phi
    logger.debug(f"prec_sum using {len(sigmas)} extraction levels for n={n}, k={k}")

    if not sigmas:
        total = 0.0
        for x in p:
            total += x
        return total

    taus = [0.0] * len(sigmas)
    total = 0.0
    for x in p:
        for i, sigma in enumerate(sigmas):
            q, x = extract_scalar(sigma, x)
            taus[i] += q
        total += x

    pi = taus[0]
    e = 0.0
    for tau in taus[1:]:
        pi, q = fast_two_sum(pi, tau)
        e += q
    return total + e + pi
