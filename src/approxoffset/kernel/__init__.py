"""Exact geometric kernels for approxoffset.

This module provides the exact primitives the offset algorithm is built on:

- NumericKernel / RationalKernel: sign and comparison predicates, squared
  distances, line construction and intersection over Fractions
- CircleKernel: circular arc construction and x-monotone decomposition
"""

from approxoffset.kernel.circle import CircleKernel
from approxoffset.kernel.numeric import (
    DEFAULT_KERNEL,
    Comparison,
    Line,
    NumericKernel,
    RationalKernel,
    Sign,
)

__all__ = [
    "DEFAULT_KERNEL",
    "CircleKernel",
    "Comparison",
    "Line",
    "NumericKernel",
    "RationalKernel",
    "Sign",
]
