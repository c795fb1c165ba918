"""Tests for environment-driven defaults."""

import os

import pytest
from pydantic import ValidationError

from subtiming.config import ENV_PREFIX, get_timing_defaults, load_env_file
from subtiming.models import TimingDefaults


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in TimingDefaults.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)


class TestTimingDefaults:
    """Tests for get_timing_defaults."""

    def test_literal_defaults(self):
        assert get_timing_defaults() == TimingDefaults()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SUBTIMING_FPS", "25")
        monkeypatch.setenv("SUBTIMING_MIN_GAP_MS", "80")

        defaults = get_timing_defaults()

        assert defaults.fps == 25.0
        assert defaults.min_gap_ms == 80
        assert defaults.target_cps == 15.0

    def test_blank_value_ignored(self, monkeypatch):
        monkeypatch.setenv("SUBTIMING_TARGET_CPS", "  ")
        assert get_timing_defaults().target_cps == 15.0

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("SUBTIMING_FPS", "0")
        with pytest.raises(ValidationError):
            get_timing_defaults()

    def test_inverted_duration_range(self, monkeypatch):
        monkeypatch.setenv("SUBTIMING_MIN_DURATION", "9")
        with pytest.raises(ValidationError):
            get_timing_defaults()

    def test_equal_duration_range_allowed(self, monkeypatch):
        monkeypatch.setenv("SUBTIMING_MIN_DURATION", "7")
        defaults = get_timing_defaults()
        assert defaults.min_duration == defaults.max_duration == 7.0

    def test_infinite_value(self, monkeypatch):
        monkeypatch.setenv("SUBTIMING_FPS", "inf")
        with pytest.raises(ValidationError):
            get_timing_defaults()


class TestLoadEnvFile:
    """Tests for .env loading."""

    def test_loads_values(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nSUBTIMING_MAX_GAP_MS = 300\n\nnot a pair\n")
        # Register the variable with monkeypatch so it is removed afterwards
        monkeypatch.setenv("SUBTIMING_MAX_GAP_MS", "placeholder")
        monkeypatch.delenv("SUBTIMING_MAX_GAP_MS")

        load_env_file(env_file)

        assert os.environ["SUBTIMING_MAX_GAP_MS"] == "300"
        assert get_timing_defaults().max_gap_ms == 300

    def test_existing_values_kept(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("SUBTIMING_FPS=30\n")
        monkeypatch.setenv("SUBTIMING_FPS", "24")

        load_env_file(env_file)

        assert os.environ["SUBTIMING_FPS"] == "24"

    def test_missing_file(self, tmp_path):
        load_env_file(tmp_path / "missing.env")
