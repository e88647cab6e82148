"""
Condition numbers and ill-conditioned test data.

The condition number of a sum or dot product bounds how much a relative
perturbation of the inputs can be amplified in the result. gen_dot builds
dot product problems with a prescribed condition number for testing the
accurate algorithms.
"""

import logging
import math
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from .algorithms import dot_k, sum2
from .core import Values, as_float_list

logger = logging.getLogger(__name__)


SumFunction = Callable[[List[float]], float]
DotFunction = Callable[[List[float], List[float]], float]


def cond_sum(f: SumFunction, values: Values) -> float:
    """
    Condition number of summing values with reduction f.

    Computed as f(|values|) / |f(values)|. f is only ever handed private
    copies, so values is left intact even if f destroys its argument.

    Args:
        f: Summation function taking a list of floats
        values: Sequence of values

    Returns:
        Condition number, inf when the sum is zero
    """
    c = as_float_list(values)
    abs_sum = abs(f(c))
    c = [abs(x) for x in as_float_list(values)]
    if abs_sum == 0.0:
        return math.inf
    return f(c) / abs_sum


def cond(values: Values, f: Optional[SumFunction] = None) -> float:
    """Condition number of the sum of values, by default under sum2."""
    return cond_sum(f or sum2, values)


def cond_dot(f: DotFunction, x: Values, y: Values) -> float:
    """
    Condition number of the dot product of x and y under f.

    Computed as 2 * f(|x|, |y|) / |f(x, y)| on private copies.
    """
    xs = as_float_list(x)
    ys = as_float_list(y)
    abs_dot = abs(f(list(xs), list(ys)))
    if abs_dot == 0.0:
        return math.inf
    return 2 * f([abs(a) for a in xs], [abs(b) for b in ys]) / abs_dot


def gen_dot(n: int, c: float,
            rng: Union[None, int, np.random.Generator] = None
            ) -> Tuple[np.ndarray, np.ndarray, float, float]:
    """
    Generate vectors whose dot product is ill-conditioned.

    The first half of the entries get random exponents up to about
    log2(c) / 2, producing large products; each entry of the second half has
    its y chosen so the running dot product cancels down to a small random
    value. The pairs are then shuffled.

    Args:
        n: Length of the vectors, at least 4
        c: Approximate condition number wanted, greater than 1
        rng: Seed or numpy Generator, for reproducible output

    Returns:
        Tuple of (x, y, dot, condition) where dot is the dot product computed
        in high fold precision and condition is the achieved condition number
    """
    if n < 4:
        raise ValueError(f"n must be at least 4, got {n}")
    if not c > 1:
        raise ValueError(f"condition number must be greater than 1, got {c}")

    rng = np.random.default_rng(rng)
    n2 = (n + 1) // 2
    x = [0.0] * n
    y = [0.0] * n

    b = math.log2(c)
    b2 = b / 2
    k = max(3, int(b / 20))
    logger.debug(f"gen_dot n={n}, log2(c)={b:.1f}, reference dot_k fold {k}")

    def dot_exact(xs, ys):
        return dot_k(xs, ys, k)

    e = [0] * n2
    last = n2 - 1
    for i in range(1, last):
        e[i] = int(rng.random() * b2 + 0.5)
    e[0] = int(b2 + 0.5) + 1
    e[last] = 0
    for i in range(n2):
        x[i] = math.ldexp(rng.random() * 2 - 1, e[i])
        y[i] = math.ldexp(rng.random() * 2 - 1, e[i])

    f = b2 / (n - 1 - n2)
    for i in range(n2, n):
        e2 = int((n - 1 - i) * f + 0.5)
        x[i] = math.ldexp(rng.random() * 2 - 1, e2)
        y[i] = (math.ldexp(rng.random() * 2 - 1, e2) - dot_exact(x, y)) / x[i]

    for i in range(n - 1, 0, -1):
        j = int(rng.integers(i + 1))
        x[i], x[j] = x[j], x[i]
        y[i], y[j] = y[j], y[i]

    d = dot_exact(x, y)
    achieved = cond_dot(dot_exact, x, y)
    return np.array(x, dtype=np.float64), np.array(y, dtype=np.float64), d, achieved
