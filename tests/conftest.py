#!/usr/bin/env python3
"""
Pytest configuration and fixtures for accurate summation tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest
import numpy as np
from fractions import Fraction
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session")
def random_seed():
    """Seed shared by the generator fixtures."""
    return 42


@pytest.fixture
def rng(random_seed):
    """Seeded numpy generator."""
    return np.random.default_rng(random_seed)


@pytest.fixture
def triangle_data():
    """[1e20, 1, 2, ..., 54321]: the small terms vanish in a naive sum."""
    p = [float(i) for i in range(54322)]
    p[0] = 1e20
    return p


@pytest.fixture
def cancellation_data():
    """Huge terms that cancel exactly around a tiny one."""
    return [1e100, 1e-100, -1e100]


@pytest.fixture
def ill_conditioned_data(rng):
    """Values spanning many orders of magnitude that nearly cancel."""
    n = 200
    mantissas = rng.uniform(-1, 1, n)
    exponents = rng.integers(-60, 60, n)
    values = [float(np.ldexp(m, e)) for m, e in zip(mantissas, exponents)]

    # Append the negations of all but the last few terms, so the exact sum
    # is tiny compared with the sum of magnitudes.
    data = values + [-v for v in values[:-3]]
    order = rng.permutation(len(data))
    return [data[i] for i in order]


@pytest.fixture
def random_integers(rng):
    """Integers whose exact sum is representable."""
    return [float(v) for v in rng.integers(-2 ** 40, 2 ** 40, 1000)]


class AccuracyChecker:
    """Utility class for checking numerical accuracy against exact rationals."""

    @staticmethod
    def exact_sum(values) -> Fraction:
        """Compute the exact sum of floats."""
        return sum((Fraction(float(v)) for v in values), Fraction(0))

    @staticmethod
    def exact_dot(x, y) -> Fraction:
        """Compute the exact dot product of floats."""
        return sum((Fraction(float(a)) * Fraction(float(b)) for a, b in zip(x, y)),
                   Fraction(0))

    @staticmethod
    def relative_error(computed: float, reference: Fraction) -> float:
        """Calculate relative error."""
        if reference == 0:
            return abs(computed)
        return float(abs(Fraction(computed) - reference) / abs(reference))

    @staticmethod
    def condition_number(values) -> float:
        """Exact condition number of the summation."""
        abs_sum = sum((abs(Fraction(float(v))) for v in values), Fraction(0))
        result_sum = abs(AccuracyChecker.exact_sum(values))

        if result_sum == 0:
            return float('inf')
        return float(abs_sum / result_sum)


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
