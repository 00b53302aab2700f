"""Rational approximation of edge lengths.

The length d of an edge (dx, dy) is usually irrational. The approximator
produces a rational app_d with a certified bound on |d^2 - app_d^2| and with
app_d strictly larger than both |dx| and |dy|, which keeps the tangent
half-angle formulas of the edge offsetter away from division by zero.

The edge offsetter turns the bound into an error in the direction of the
outward normal. Offset points then deviate from distance r by at most about
eps in coordinate units, plus a term from the tangent join that grows with r,
so eps bounds the deviation as eps * max(1, r).
"""

import math
from dataclasses import dataclass
from fractions import Fraction

from approxoffset.config.settings import (
    DEFAULT_MAX_DENOMINATOR_BITS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MAX_SCALED_LENGTH,
)
from approxoffset.exceptions import ConsistencyError, ConvergenceError, PreconditionError
from approxoffset.kernel import DEFAULT_KERNEL, Comparison, NumericKernel


@dataclass(frozen=True, slots=True)
class Approximation:
    """Result of approximating sqrt(sqr_d).

    Attributes:
        value: Rational approximation app_d
        error: Residual sqr_d - app_d^2 (sign tells lower / upper bound)
        bound: Bound the absolute residual was required to meet
        iterations: Number of Newton steps taken after seeding
    """

    value: Fraction
    error: Fraction
    bound: Fraction
    iterations: int


class SqrtApproximator:
    """Newton-refined rational square roots with a certified error bound.

    An edge offset by radius r built from these approximations stays within
    eps * max(1, r) of the exact offset.

    Example:
        approximator = SqrtApproximator(epsilon=0.01)
        result = approximator.approximate(Fraction(1), Fraction(2))
        # result.value ~ sqrt(5), |5 - value^2| <= result.bound
    """

    def __init__(
        self,
        epsilon: float,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_scaled_length: int = DEFAULT_MAX_SCALED_LENGTH,
        max_denominator_bits: int = DEFAULT_MAX_DENOMINATOR_BITS,
        kernel: NumericKernel | None = None,
    ) -> None:
        """Initialize the approximator.

        Args:
            epsilon: Error bound, scaled by the radius when r > 1 (must be positive)
            max_iterations: Cap on Newton refinement steps
            max_scaled_length: Largest allowed value of d * denominator
            max_denominator_bits: Cap on the bit length of app_d's denominator
            kernel: Numeric kernel for conversions and square roots

        Raises:
            PreconditionError: If epsilon is not positive
        """
        if not epsilon > 0:
            raise PreconditionError(f"Approximation error bound must be positive, got {epsilon}")

        self._epsilon = float(epsilon)
        self._max_iterations = max_iterations
        self._max_scaled_length = max_scaled_length
        self._max_denominator_bits = max_denominator_bits
        self._kernel = kernel or DEFAULT_KERNEL

        self._inv_sqrt_eps = max(int(1.0 / math.sqrt(self._epsilon)), 1)

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def inv_sqrt_eps(self) -> int:
        """Integer part of 1 / sqrt(epsilon), at least 1."""
        return self._inv_sqrt_eps

    def error_bound(self, dx: Fraction, dy: Fraction) -> Fraction:
        """Bound on |d^2 - app_d^2| for the edge vector (dx, dy).

        The bound is evaluated in floating point and converted exactly:

                                  |  (d - dy)  |
            bound = 2 * d * eps * | ---------- |
                                  |     dx     |

        For dy > 0 the ratio is computed as dx / (d + dy), which is the same
        value without the cancellation of d - dy on steep edges.

        Args:
            dx: Edge x extent (non-zero)
            dy: Edge y extent

        Returns:
            The bound as an exact, positive rational

        Raises:
            ConsistencyError: If the edge is outside the floating point range
        """
        try:
            dd = self._kernel.sqrt_to_double(dx * dx + dy * dy)
            fdx = float(dx)
            fdy = float(dy)
        except OverflowError as e:
            raise ConsistencyError(
                f"Edge ({dx}, {dy}) is too long for a floating point length estimate"
            ) from e

        if fdy > 0:
            ratio = abs(fdx) / (dd + fdy)
        else:
            ratio = (dd - fdy) / abs(fdx)
        derr_bound = 2 * dd * self._epsilon * ratio

        if not derr_bound > 0 or math.isinf(derr_bound):
            raise ConsistencyError(
                f"Edge ({dx}, {dy}) is outside the floating point range of the error bound"
            )
        return self._kernel.to_exact(derr_bound)

    def seed_denominator(self, dd: float) -> int:
        """Largest power-of-two fraction of inv_sqrt_eps keeping dd * denom in range."""
        denom = self._inv_sqrt_eps
        while denom > 1 and self._max_scaled_length / denom < dd:
            denom //= 2
        return denom

    def approximate(self, dx: Fraction, dy: Fraction) -> Approximation:
        """Approximate the length of the edge vector (dx, dy).

        Args:
            dx: Edge x extent (non-zero)
            dy: Edge y extent (non-zero)

        Returns:
            Approximation whose value exceeds |dx| and |dy| and whose residual
            is within the error bound

        Raises:
            ConsistencyError: If the edge is outside the floating point range
            ConvergenceError: If the bound is not met within max_iterations
                or before the denominator outgrows max_denominator_bits
        """
        sqr_d = dx * dx + dy * dy
        abs_dx = abs(dx)
        abs_dy = abs(dy)
        bound = self.error_bound(dx, dy)

        dd = self._kernel.sqrt_to_double(sqr_d)
        denom = self.seed_denominator(dd)
        app_d = Fraction(int(dd * denom + 0.5), denom)
        if app_d == 0:
            app_d = abs_dx + abs_dy
        app_err = sqr_d - app_d * app_d

        compare = self._kernel.compare
        iterations = 0
        while (
            compare(abs(app_err), bound) == Comparison.LARGER
            or compare(app_d, abs_dx) != Comparison.LARGER
            or compare(app_d, abs_dy) != Comparison.LARGER
        ):
            if iterations >= self._max_iterations:
                raise ConvergenceError(iterations, sqr_d)
            app_d = (app_d + sqr_d / app_d) / 2
            iterations += 1
            if app_d.denominator.bit_length() > self._max_denominator_bits:
                raise ConvergenceError(iterations, sqr_d)
            app_err = sqr_d - app_d * app_d

        return Approximation(value=app_d, error=app_err, bound=bound, iterations=iterations)
