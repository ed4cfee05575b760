"""Tests for SimulationConfig."""

import pytest

from seq2seq_viz import SimulationConfig
from seq2seq_viz.config import PLACEHOLDER_API_KEY, is_missing_credential


class TestSimulationConfig:
    """Tests for defaults, clamping and env loading."""

    def test_defaults(self):
        """Test the default timing and vector settings."""
        config = SimulationConfig()
        assert config.default_speed_ms == 1200
        assert (config.min_speed_ms, config.max_speed_ms) == (200, 2000)
        assert config.context_settle_ms == 500
        assert config.vector_size == 25
        assert config.autoplay is False

    @pytest.mark.parametrize(
        "speed,expected", [(5000, 2000), (10, 200), (800, 800), (200, 200), (2000, 2000)]
    )
    def test_clamp_speed(self, speed, expected):
        """Test that speeds are clamped into [min, max]."""
        assert SimulationConfig().clamp_speed(speed) == expected

    def test_default_speed_is_clamped(self):
        """Test that an out-of-range default speed is clamped on construction."""
        assert SimulationConfig(default_speed_ms=99999).default_speed_ms == 2000

    def test_invalid_bounds_rejected(self):
        """Test that min > max raises ValueError."""
        with pytest.raises(ValueError):
            SimulationConfig(min_speed_ms=3000, max_speed_ms=2000)

    def test_api_key_hidden_from_repr(self):
        """Test that the API key never appears in repr()."""
        assert "secret" not in repr(SimulationConfig(api_key="secret"))

    def test_from_env(self):
        """Test that GEMINI_* variables are read."""
        config = SimulationConfig.from_env(
            {"GEMINI_API_KEY": "abc", "GEMINI_MODEL": "gemini-2.0-flash"}
        )
        assert config.api_key == "abc"
        assert config.model == "gemini-2.0-flash"
        assert config.has_credential

    def test_from_env_overrides_skip_none(self):
        """Test that None overrides fall back to defaults."""
        config = SimulationConfig.from_env({}, default_speed_ms=600, seed=None)
        assert config.default_speed_ms == 600
        assert config.seed is None
        assert not config.has_credential


class TestIsMissingCredential:
    """Tests for credential detection."""

    @pytest.mark.parametrize("credential", [None, "", "   ", PLACEHOLDER_API_KEY])
    def test_missing(self, credential):
        """Test that absent, blank and placeholder keys count as missing."""
        assert is_missing_credential(credential)

    def test_present(self):
        """Test that a real-looking key is accepted."""
        assert not is_missing_credential("AIza-real-key")
