"""Tests for configuration models."""

from fractions import Fraction

import pytest
from pydantic import ValidationError

from approxoffset.config import (
    ApproximationConfig,
    OffsetConfig,
    OffsetSettings,
    get_default_settings,
)
from approxoffset.core.approximator import (
    DEFAULT_MAX_DENOMINATOR_BITS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MAX_SCALED_LENGTH,
)


class TestApproximationConfig:
    """Tests for ApproximationConfig."""

    def test_defaults_match_approximator(self):
        """Test config defaults agree with the approximator defaults."""
        config = ApproximationConfig()
        assert config.epsilon == 0.01
        assert config.max_iterations == DEFAULT_MAX_ITERATIONS
        assert config.max_scaled_length == DEFAULT_MAX_SCALED_LENGTH
        assert config.max_denominator_bits == DEFAULT_MAX_DENOMINATOR_BITS

    @pytest.mark.parametrize("epsilon", [0, -0.1])
    def test_epsilon_must_be_positive(self, epsilon: float):
        """Test non-positive epsilon is rejected."""
        with pytest.raises(ValidationError):
            ApproximationConfig(epsilon=epsilon)

    def test_iteration_limits(self):
        """Test the iteration cap is bounded."""
        with pytest.raises(ValidationError):
            ApproximationConfig(max_iterations=0)
        with pytest.raises(ValidationError):
            ApproximationConfig(max_iterations=5000)

    def test_denominator_bits_floor(self):
        """Test the denominator budget cannot be made uselessly small."""
        with pytest.raises(ValidationError):
            ApproximationConfig(max_denominator_bits=8)


class TestOffsetConfig:
    """Tests for OffsetConfig."""

    @pytest.mark.parametrize(
        "radius,expected",
        [("1", Fraction(1)), ("0.5", Fraction(1, 2)), ("1/3", Fraction(1, 3)), (2, Fraction(2))],
    )
    def test_exact_radius(self, radius: object, expected: Fraction):
        """Test radii are kept exactly."""
        assert OffsetConfig(radius=radius).exact_radius() == expected

    @pytest.mark.parametrize("radius", ["0", "-1", "abc", "1/0"])
    def test_invalid_radius(self, radius: str):
        """Test unusable radii are rejected."""
        with pytest.raises(ValidationError):
            OffsetConfig(radius=radius)


class TestOffsetSettings:
    """Tests for OffsetSettings."""

    def test_default_settings(self):
        """Test default settings are complete."""
        settings = get_default_settings()
        assert isinstance(settings, OffsetSettings)
        assert settings.offset.radius == "1"
        assert settings.processing.parallel is True
        assert settings.processing.max_workers is None
        assert settings.logging.log_file is None

    def test_approximation_round_trip(self):
        """Test the approximation config survives model_dump for worker IPC."""
        settings = OffsetSettings(approximation=ApproximationConfig(epsilon=1e-3))
        restored = ApproximationConfig(**settings.approximation.model_dump())
        assert restored == settings.approximation
