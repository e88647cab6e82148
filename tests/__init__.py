"""
Test suite for the Accurate Summation Library.

Test Structure:
- test_core.py: Format constants and error-free transformations
- test_compensated.py: Classic compensated summation
- test_extraction.py: Extraction engine, AccSum, AccSumK, PrecSum, AccSignBit
- test_algorithms.py: K-fold summation and dot products
- test_conditioning.py: Condition numbers and GenDot
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run tests with coverage
    pytest --cov=accsum

    # Run only fast tests
    pytest -m "not slow"
"""

__version__ = "1.0.0"
