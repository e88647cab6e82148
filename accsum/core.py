"""
Core error-free transformations.

This module contains the floating-point format constants shared by every
algorithm in the package and the error-free primitives built on them:
TwoSum, FastTwoSum, Split and TwoProduct.

Each primitive returns a pair (x, y) where x is the rounded result of the
operation and y is the exact rounding error, so that x + y equals the true
mathematical result. The operation sequences below must not be reordered.
CPython evaluates float expressions left to right in IEEE-754 binary64 and
never fuses a multiply with an add, so they are written exactly as derived.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np
import torch


Values = Union[Sequence[float], np.ndarray, torch.Tensor]


@dataclass(frozen=True)
class FloatFormat:
    """
    Parameters of a binary floating-point format.

    Attributes:
        precision: Significand width in bits, implicit bit included
        emax: Largest binary exponent
        eps: Relative rounding error unit, 2**-precision
        inv_eps: 2**precision
        u: Half the error unit, used for the extraction unit decay
        eta: Underflow unit, the smallest positive subnormal
        min_pos: Smallest positive normalized number
        split_factor: Veltkamp splitter 2**ceil(precision/2) + 1
        prec_sum_max_len: Longest input the PrecSum margin math supports
    """

    precision: int
    emax: int
    eps: float
    inv_eps: float
    u: float
    eta: float
    min_pos: float
    split_factor: float
    prec_sum_max_len: int

    @classmethod
    def from_dtype(cls, dtype=np.float64) -> "FloatFormat":
        """Derive the format parameters from a numpy floating dtype."""
        info = np.finfo(dtype)
        precision = int(info.nmant) + 1
        emax = int(info.maxexp) - 1
        half = (precision + 1) // 2
        return cls(
            precision=precision,
            emax=emax,
            eps=math.ldexp(1.0, -precision),
            inv_eps=math.ldexp(1.0, precision),
            u=math.ldexp(1.0, -precision - 1),
            eta=math.ldexp(1.0, 2 - emax - precision),
            min_pos=math.ldexp(1.0, 1 - emax),
            split_factor=math.ldexp(1.0, half) + 1.0,
            prec_sum_max_len=(1 << (half - 1)) - 2,
        )


# IEEE 754 binary64, the Python float
FLOAT64 = FloatFormat.from_dtype(np.float64)


def two_sum(a: float, b: float) -> Tuple[float, float]:
    """
    Error-free sum of two floats.

    Knuth's algorithm, 6 floating-point operations. Valid for any finite
    a and b, with no condition on their relative magnitudes.

    Args:
        a: First addend
        b: Second addend

    Returns:
        Tuple of (a + b rounded, exact rounding error)
    """
    x = a + b
    z = x - a
    y = (a - (x - z)) + (b - z)
    return x, y


def fast_two_sum(a: float, b: float) -> Tuple[float, float]:
    """
    Error-free sum of two floats with a magnitude precondition.

    Dekker's algorithm, 3 floating-point operations. The result is exact when
    |a| >= |b|, and more generally whenever no nonzero trailing bit of a is
    smaller than the least significant bit of b. The precondition is not
    checked; see checked_fast_two_sum.

    Args:
        a: Addend of larger magnitude
        b: Addend of smaller magnitude

    Returns:
        Tuple of (a + b rounded, exact rounding error)
    """
    x = a + b
    y = (a - x) + b
    return x, y


def checked_fast_two_sum(a: float, b: float) -> Tuple[float, float]:
    """fast_two_sum that raises ValueError when |a| < |b|."""
    if abs(a) < abs(b):
        raise ValueError(f"fast_two_sum requires |a| >= |b|, got a={a!r}, b={b!r}")
    return fast_two_sum(a, b)


def split(a: float) -> Tuple[float, float]:
    """
    Split a into two halves of at most 26 significant bits each.

    hi + lo == a exactly. Reliable unless split_factor * a overflows.
    """
    c = FLOAT64.split_factor * a
    hi = c - (c - a)
    lo = a - hi
    return hi, lo


def two_product(a: float, b: float) -> Tuple[float, float]:
    """
    Error-free product of two floats.

    Dekker/Veltkamp algorithm, 17 floating-point operations.

    Args:
        a: First factor
        b: Second factor

    Returns:
        Tuple of (a * b rounded, exact rounding error)
    """
    x = a * b
    a1, a2 = split(a)
    b1, b2 = split(b)
    y = a2 * b2 - (((x - a1 * b1) - a2 * b1) - a1 * b2)
    return x, y


def as_float_list(values: Values) -> List[float]:
    """
    Copy a sequence into a new list of Python floats.

    Args:
        values: List, tuple, numpy array or torch tensor

    Returns:
        Private list the caller may mutate freely
    """
    if isinstance(values, torch.Tensor):
        return values.detach().cpu().double().flatten().tolist()
    if isinstance(values, np.ndarray):
        return values.astype(np.float64).ravel().tolist()
    return [float(v) for v in values]


def check_buffer(p) -> None:
    """
    Validate a buffer handed to an in-place routine.

    Residuals are written back element by element, so the buffer has to be
    mutable and hold binary64 values; a narrower dtype would round them.

    Raises:
        TypeError: If p cannot store float64 residuals in place
    """
    if isinstance(p, torch.Tensor):
        if p.dtype != torch.float64:
            raise TypeError(f"in-place routines need a torch.float64 tensor, got {p.dtype}")
        if p.dim() != 1:
            raise TypeError(f"in-place routines need a 1-D tensor, got shape {tuple(p.shape)}")
    elif isinstance(p, np.ndarray):
        if p.dtype != np.float64:
            raise TypeError(f"in-place routines need a float64 array, got {p.dtype}")
        if p.ndim != 1:
            raise TypeError(f"in-place routines need a 1-D array, got shape {p.shape}")
    elif not isinstance(p, list):
        raise TypeError(f"in-place routines need a list, ndarray or tensor, got {type(p).__name__}")
