"""Exception hierarchy for Approxoffset."""


class ApproxOffsetError(Exception):
    """Base exception for all Approxoffset errors."""

    pass


class PreconditionError(ApproxOffsetError, ValueError):
    """Caller violated an input contract (bad epsilon, radius or polygon).

    Raised before any curve of the affected cycle is produced.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConsistencyError(ApproxOffsetError):
    """Fatal numeric fault inside the offset computation.

    Indicates a violated upstream invariant (non-simple polygon, degenerate
    tangents) or an internal defect. The computation is deterministic, so it
    is never retried.
    """

    pass


class IntersectionError(ConsistencyError):
    """Two tangent lines that must meet in a single point did not."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ArcConstructionError(ConsistencyError):
    """Circular arc could not be built or split into x-monotone pieces."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConvergenceError(ConsistencyError):
    """Square-root refinement did not meet its bound within the iteration cap."""

    def __init__(self, iterations: int, sqr_length: object) -> None:
        self.iterations = iterations
        self.sqr_length = sqr_length
        super().__init__(
            f"Square-root approximation of {sqr_length} did not converge "
            f"after {iterations} iterations"
        )


class PolygonIOError(ApproxOffsetError):
    """Errors related to reading polygons or writing curves."""

    pass


class PolygonLoadError(PolygonIOError):
    """Error loading a polygon file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load polygons '{path}': {reason}")


class PolygonFormatError(PolygonIOError):
    """Polygon file content does not follow the expected layout."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid polygon file '{path}': {details}")


class CurveSaveError(PolygonIOError):
    """Error saving the offset curves."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save curves '{path}': {reason}")

