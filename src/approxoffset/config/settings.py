"""Configuration settings for Approxoffset."""

from fractions import Fraction
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Defaults shared with the square-root approximator.
DEFAULT_MAX_ITERATIONS = 16
# Largest value d * denominator may take when seeding. Mirrors a 32-bit
# signed integer with two bits of headroom.
DEFAULT_MAX_SCALED_LENGTH = 1 << 30
# Each Newton step on a Fraction roughly doubles the denominator size.
DEFAULT_MAX_DENOMINATOR_BITS = 1 << 14


class ApproximationConfig(BaseModel):
    """Configuration for the rational square-root approximation."""

    epsilon: float = Field(
        default=0.01,
        gt=0.0,
        description="Offset approximation error bound, scaled by the radius when r > 1",
    )
    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS,
        ge=1,
        le=64,
        description="Maximum Newton refinement steps per edge",
    )
    max_denominator_bits: int = Field(
        default=DEFAULT_MAX_DENOMINATOR_BITS,
        ge=64,
        description="Largest bit length of an approximated length denominator",
    )
    max_scaled_length: int = Field(
        default=DEFAULT_MAX_SCALED_LENGTH,
        ge=2,
        description="Largest edge length times seed denominator",
    )


class OffsetConfig(BaseModel):
    """Configuration for the offset operation."""

    radius: str = Field(
        default="1",
        description="Offset radius as an exact number (e.g. '1', '0.5', '1/3')",
    )

    @field_validator("radius", mode="before")
    @classmethod
    def _normalize_radius(cls, value: object) -> str:
        try:
            radius = Fraction(str(value))
        except (ValueError, ZeroDivisionError) as e:
            raise ValueError(f"radius is not a number: {value!r}") from e
        if radius <= 0:
            raise ValueError("radius must be positive")
        return str(value)

    def exact_radius(self) -> Fraction:
        """Get the radius as an exact Fraction."""
        return Fraction(self.radius)


class ProcessingConfig(BaseModel):
    """Configuration for multi-polygon processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    parallel: bool = Field(
        default=True,
        description="Process independent cycles in worker processes",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class OffsetSettings(BaseModel):
    """Main application settings."""

    approximation: ApproximationConfig = Field(default_factory=ApproximationConfig)
    offset: OffsetConfig = Field(default_factory=OffsetConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> OffsetSettings:
    """Get default application settings."""
    return OffsetSettings()
