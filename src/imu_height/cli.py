"""
Command-line interface for the IMU Height package.

This module provides commands to run the estimation engine on recorded or
synthetic motion streams and to inspect the effective configuration.
"""

import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from .constants import CSVConstants
from .data import (
    MotionRecordingLoader,
    ReplayMotionSource,
    RiseProfile,
    Scenario,
    SyntheticStreamGenerator,
)
from .exceptions import ConfigurationError, ImuHeightError
from .services import MeasurementResult, MeasurementService
from .settings import Settings, load_settings


# Configure basic logging
def configure_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _echo_result(result: MeasurementResult) -> None:
    """Print a measurement result."""
    snapshot = result.snapshot
    click.echo("\nHeight Measurement")
    click.echo("=" * 40)
    click.echo(f"Height: {snapshot.height_cm} cm")
    click.echo(f"Imperial: {snapshot.height_feet}' {snapshot.height_inches}\"")
    click.echo(f"Accuracy: {snapshot.confidence_percent}%")
    click.echo(f"Final state: {snapshot.classifier_label.value}")
    click.echo(f"|g|: {result.gravity.norm():.2f} m/s²")
    click.echo(
        f"Samples: {result.accepted_samples} used, {result.dropped_samples} dropped"
    )


def _write_trace(result: MeasurementResult, trace_out: Path) -> None:
    trace_out.parent.mkdir(parents=True, exist_ok=True)
    result.trace.to_csv(trace_out, index=False, sep=CSVConstants.DEFAULT_SEPARATOR)
    logging.getLogger(__name__).info(f"Trace saved to {trace_out}")


def _load(config: Path | None, trace_out: Path | None) -> Settings:
    try:
        settings = load_settings(config)
    except (ValidationError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    if trace_out is not None:
        settings.record_trace = True
    return settings


@click.group()
def main():
    """
    Estimate standing height from inertial motion samples.

    The device is calibrated flat on the ground, then moved straight up to
    head level; the peak vertical displacement is the reported height.
    """


@main.command()
@click.argument(
    "recording",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--duration",
    type=float,
    default=None,
    help="Measurement duration in seconds (default: until the recording ends)",
)
@click.option(
    "--trace-out",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the per-sample integration trace to this CSV file",
)
def measure(
    recording: Path,
    config: Path | None,
    verbose: bool,
    duration: float | None,
    trace_out: Path | None,
) -> None:
    """
    Measure height from a recorded motion stream.

    The first calibration window of the recording is used for calibration,
    the remainder is replayed as the measurement.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = _load(config, trace_out)
        samples = MotionRecordingLoader(settings).load(recording)
        service = MeasurementService(settings, ReplayMotionSource(samples))
        result = service.run(duration)

        _echo_result(result)
        if trace_out is not None:
            _write_trace(result, trace_out)

    except ImuHeightError as e:
        logger.error(f"Measurement failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--scenario",
    type=click.Choice([s.value for s in Scenario]),
    default=Scenario.RISE.value,
    show_default=True,
    help="Motion following calibration",
)
@click.option(
    "--peak-accel",
    type=float,
    default=2.0,
    show_default=True,
    help="Plateau vertical acceleration of a rise (m/s²)",
)
@click.option(
    "--hold",
    type=float,
    default=0.2,
    show_default=True,
    help="Plateau duration of a rise (s)",
)
@click.option(
    "--noise",
    type=float,
    default=0.0,
    show_default=True,
    help="Accelerometer noise standard deviation (m/s²)",
)
@click.option("--seed", type=int, default=None, help="Noise seed")
@click.option(
    "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also save the generated stream as a recording",
)
@click.option(
    "--trace-out",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the per-sample integration trace to this CSV file",
)
def simulate(
    config: Path | None,
    verbose: bool,
    scenario: str,
    peak_accel: float,
    hold: float,
    noise: float,
    seed: int | None,
    out: Path | None,
    trace_out: Path | None,
) -> None:
    """
    Measure height on a synthetic motion stream.

    Useful for checking a configuration against a known motion profile.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = _load(config, trace_out)
        generator = SyntheticStreamGenerator(
            gravity=settings.default_gravity_vector,
            interval_ms=settings.integration.nominal_interval_ms,
            noise_std=noise,
            seed=seed,
        )
        samples = generator.session(
            Scenario(scenario),
            calibration_seconds=settings.calibration.window_seconds,
            profile=RiseProfile(peak_accel=peak_accel, hold_seconds=hold),
        )
        if out is not None:
            MotionRecordingLoader(settings).save(samples, out)

        service = MeasurementService(settings, ReplayMotionSource(samples))
        result = service.run()

        _echo_result(result)
        if trace_out is not None:
            _write_trace(result, trace_out)

    except ImuHeightError as e:
        logger.error(f"Simulation failed: {str(e)}")
        raise click.Abort() from e
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        raise click.Abort() from e


@main.command()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
def config(config: Path | None) -> None:
    """Print the effective configuration as YAML."""
    try:
        settings = _load(config, None)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    click.echo(yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False))


if __name__ == "__main__":
    main()
