"""Unit tests for the command line interface."""

import pandas as pd
import pytest
import yaml
from click.testing import CliRunner

from imu_height.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestMeasureCommand:
    """Test the measure command."""

    def test_measure_recording(self, runner, rise_recording):
        """Test measuring a recorded rise."""
        result = runner.invoke(main, ["measure", str(rise_recording)])

        assert result.exit_code == 0, result.output
        assert "Height:" in result.output
        assert "Accuracy:" in result.output

    def test_measure_writes_trace(self, runner, rise_recording, tmp_path):
        """Test that --trace-out writes the per-sample trace."""
        trace_path = tmp_path / "trace.csv"

        result = runner.invoke(
            main, ["measure", str(rise_recording), "--trace-out", str(trace_path)]
        )

        assert result.exit_code == 0, result.output
        trace = pd.read_csv(trace_path, sep=";")
        assert "peak_displacement_cm" in trace.columns
        assert len(trace) > 0

    def test_measure_broken_recording(self, runner, tmp_path):
        """Test that a bad recording aborts."""
        path = tmp_path / "broken.csv"
        path.write_text("timestamp_ms;ax\n0;0\n")

        result = runner.invoke(main, ["measure", str(path)])

        assert result.exit_code == 1

    def test_measure_missing_file(self, runner, tmp_path):
        """Test that a missing recording is a usage error."""
        result = runner.invoke(main, ["measure", str(tmp_path / "nope.csv")])

        assert result.exit_code == 2


class TestSimulateCommand:
    """Test the simulate command."""

    def test_simulate_rise(self, runner):
        """Test the default rise scenario."""
        result = runner.invoke(main, ["simulate"])

        assert result.exit_code == 0, result.output
        assert "Height:" in result.output

    def test_simulate_flat_saves_recording(self, runner, tmp_path):
        """Test the flat scenario and saving the generated stream."""
        out = tmp_path / "flat.csv"

        result = runner.invoke(
            main, ["simulate", "--scenario", "flat", "--out", str(out)]
        )

        assert result.exit_code == 0, result.output
        assert "Height: 0.0 cm" in result.output
        assert out.exists()

    def test_simulate_with_noise(self, runner):
        """Test a noisy, seeded simulation."""
        result = runner.invoke(
            main, ["simulate", "--noise", "0.02", "--seed", "3", "--hold", "0.3"]
        )

        assert result.exit_code == 0, result.output


class TestConfigCommand:
    """Test the config command."""

    def test_config_defaults(self, runner):
        """Test printing the default configuration."""
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["gravity_filter"]["alpha"] == 0.01
        assert data["stationary"]["zupt_seconds"] == 0.5

    def test_config_file(self, runner, sample_config_file):
        """Test printing a loaded configuration."""
        result = runner.invoke(main, ["config", "--config", str(sample_config_file)])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["calibration"]["window_seconds"] == 2.0
        assert data["record_trace"] is True


class TestInvalidConfiguration:
    """Test handling of out-of-range configuration values."""

    @pytest.fixture
    def invalid_config_file(self, temp_config_file):
        with open(temp_config_file, "w") as f:
            yaml.dump({"gravity_filter": {"alpha": 2.0}}, f)
        return temp_config_file

    def test_measure_aborts(self, runner, rise_recording, invalid_config_file):
        """Test that measure aborts cleanly on a bad config."""
        result = runner.invoke(
            main, ["measure", str(rise_recording), "--config", str(invalid_config_file)]
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_simulate_aborts(self, runner, invalid_config_file):
        """Test that simulate aborts cleanly on a bad config."""
        result = runner.invoke(main, ["simulate", "--config", str(invalid_config_file)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_config_aborts(self, runner, invalid_config_file):
        """Test that config aborts cleanly on a bad config."""
        result = runner.invoke(main, ["config", "--config", str(invalid_config_file)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
