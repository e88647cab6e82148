"""
Accurate Summation Library

Accurate floating-point sums and dot products for ill-conditioned data,
implementing the algorithms of S. Rump, T. Ogita and S. Oishi:
"Accurate Sum and Dot Product" and "Accurate Floating-Point Summation",
Parts I and II.

This library provides:
- Error-free transformations (TwoSum, FastTwoSum, Split, TwoProduct)
- Faithfully rounded summation by extraction (AccSum, AccSumK, PrecSum)
- K-fold precision summation and dot products (Sum2, SumK, Dot2, DotK)
- Condition numbers and ill-conditioned test data generation
- Classic compensated summation for comparison

Routines with a trailing underscore (acc_sum_, sum_k_, ...) work in place
and overwrite their argument with residuals.
"""

from .core import (
    FLOAT64,
    FloatFormat,
    two_sum,
    fast_two_sum,
    checked_fast_two_sum,
    split,
    two_product,
)
from .compensated import naive_sum, kahan_sum, kahan_babuska_sum, priest_sum
from .extraction import (
    InputTooLargeError,
    next_power_two,
    extract_scalar,
    extract_slice,
    transform,
    acc_sum,
    acc_sum_,
    acc_sign_bit,
    acc_sign_bit_,
    acc_sum_k,
    acc_sum_k_,
    prec_sum,
)
from .algorithms import (
    sum2,
    vec_sum_,
    sum_k,
    sum_k_,
    sum_k_vert,
    dot2,
    dot2_err,
    dot_k,
    checked_dot2,
    checked_dot2_err,
    checked_dot_k,
)
from .conditioning import cond, cond_sum, cond_dot, gen_dot

__version__ = "1.0.0"
__author__ = "Accurate Summation Contributors"

__all__ = [
    "FLOAT64",
    "FloatFormat",
    "two_sum",
    "fast_two_sum",
    "checked_fast_two_sum",
    "split",
    "two_product",
    "naive_sum",
    "kahan_sum",
    "kahan_babuska_sum",
    "priest_sum",
    "InputTooLargeError",
    "next_power_two",
    "extract_scalar",
    "extract_slice",
    "transform",
    "acc_sum",
    "acc_sum_",
    "acc_sign_bit",
    "acc_sign_bit_",
    "acc_sum_k",
    "acc_sum_k_",
    "prec_sum",
    "sum2",
    "vec_sum_",
    "sum_k",
    "sum_k_",
    "sum_k_vert",
    "dot2",
    "dot2_err",
    "dot_k",
    "checked_dot2",
    "checked_dot2_err",
    "checked_dot_k",
    "cond",
    "cond_sum",
    "cond_dot",
    "gen_dot",
]
