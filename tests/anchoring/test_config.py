"""Tests for anchoring configuration."""

import pytest

from anchoring.config import (
    DEFAULT_CONTEXT_LENGTH,
    DEFAULT_FUZZY_THRESHOLD,
    FUZZY_CONTEXT_LENGTH,
    AnchoringConfig,
    validate_context_length,
    validate_error_ratio,
    validate_threshold,
)


class TestValidators:
    """Tests for the validation helpers."""

    @pytest.mark.parametrize("threshold", [0.0, 0.5, 0.8, 1.0])
    def test_valid_thresholds(self, threshold: float) -> None:
        validate_threshold(threshold)

    @pytest.mark.parametrize("threshold", [-0.1, 1.01, 80])
    def test_invalid_thresholds(self, threshold: float) -> None:
        with pytest.raises(ValueError, match="Invalid threshold"):
            validate_threshold(threshold)

    def test_negative_context_length(self) -> None:
        with pytest.raises(ValueError, match="Invalid context length"):
            validate_context_length(-1)

    def test_error_ratio_must_be_below_one(self) -> None:
        with pytest.raises(ValueError, match="Invalid error ratio"):
            validate_error_ratio(1.0)


class TestAnchoringConfig:
    """Tests for the AnchoringConfig dataclass."""

    def test_defaults(self) -> None:
        config = AnchoringConfig()
        assert config.context_length == DEFAULT_CONTEXT_LENGTH == 30
        assert config.fuzzy_context_length == FUZZY_CONTEXT_LENGTH == 50
        assert config.fuzzy_threshold == DEFAULT_FUZZY_THRESHOLD == 0.8

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(ValueError):
            AnchoringConfig(fuzzy_threshold=1.5)

    def test_max_errors_scales_with_length(self) -> None:
        config = AnchoringConfig(max_error_ratio=0.25)
        assert config.max_errors(3) == 0
        assert config.max_errors(18) == 4
        assert config.max_errors(100) == 25

    def test_config_is_immutable(self) -> None:
        config = AnchoringConfig()
        with pytest.raises(AttributeError):
            config.context_length = 10  # type: ignore[misc]
