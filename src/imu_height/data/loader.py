"""
Motion recording loading and saving.

Recordings are semicolon-separated CSV files with one row per sample:
timestamp_ms;ax;ay;az[;rx;ry;rz][;interval_ms]
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import pandas as pd

from ..constants import CSVConstants, RecordingColumns
from ..exceptions import DataLoadError, InvalidSampleError
from ..models import MotionSample
from ..settings import Settings

logger = logging.getLogger(__name__)


class RecordingLoaderProtocol(Protocol):
    """Protocol for recording loaders."""

    def load(self, path: Path) -> list[MotionSample]:
        """Load the samples of a recording."""
        ...


class MotionRecordingLoader:
    """
    Handles loading and saving of motion recordings.

    This class encapsulates all file I/O for recorded sample streams, providing
    a clean interface for replay and for the command line.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the loader.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    def load_frame(self, path: Path) -> pd.DataFrame:
        """
        Load and clean a recording as a DataFrame.

        Args:
            path: Path to the recording CSV

        Returns:
            DataFrame with numeric columns, sorted by timestamp

        Raises:
            DataLoadError: If the file is missing or lacks essential columns
        """
        if not path.exists():
            raise DataLoadError(f"Recording not found: {path}")

        try:
            df = pd.read_csv(
                path,
                sep=CSVConstants.DEFAULT_SEPARATOR,
                encoding=CSVConstants.DEFAULT_ENCODING,
            )
        except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Failed to read recording {path}: {e}") from e

        missing = [
            col for col in RecordingColumns.essential() if col not in df.columns
        ]
        if missing:
            raise DataLoadError(f"Missing essential columns: {missing}")

        optional = [*RecordingColumns.ROTATION, RecordingColumns.INTERVAL]
        for col in RecordingColumns.essential() + optional:
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors="coerce")

        return df.sort_values(RecordingColumns.TIMESTAMP, kind="stable").reset_index(
            drop=True
        )

    def load(self, path: Path) -> list[MotionSample]:
        """
        Load a recording as motion samples, skipping malformed rows.

        Args:
            path: Path to the recording CSV

        Returns:
            List of samples in timestamp order

        Raises:
            DataLoadError: If the file cannot be loaded or has no valid rows
        """
        df = self.load_frame(path)
        self.logger.info(f"Loading recording from {path}")

        samples: list[MotionSample] = []
        skipped = 0
        for row in df.to_dict(orient="records"):
            try:
                samples.append(MotionSample.from_mapping(row))
            except InvalidSampleError as e:
                skipped += 1
                self.logger.debug(f"Skipping row: {e}")

        if skipped:
            self.logger.warning(f"Skipped {skipped} malformed rows in {path}")
        if not samples:
            raise DataLoadError(f"No valid samples in recording {path}")

        self.logger.info(f"Loaded {len(samples)} samples")
        return samples

    def save(self, samples: Sequence[MotionSample], path: Path) -> None:
        """
        Write samples to a recording CSV.

        Args:
            samples: Samples to write
            path: Destination path (parent directories are created)
        """
        df = samples_to_frame(samples)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(path, index=False, sep=CSVConstants.DEFAULT_SEPARATOR)
        except OSError as e:
            raise DataLoadError(f"Failed to write recording {path}: {e}") from e
        self.logger.info(f"Saved {len(df)} samples to {path}")


def samples_to_frame(samples: Sequence[MotionSample]) -> pd.DataFrame:
    """
    Flatten samples into a DataFrame using recording column names.

    Rotation and interval columns are NaN where a sample lacks them.
    """
    records = []
    for sample in samples:
        record = {RecordingColumns.TIMESTAMP: sample.timestamp_ms}
        record.update(
            zip(
                RecordingColumns.ACCELERATION,
                sample.acceleration_including_gravity.as_tuple(),
                strict=True,
            )
        )
        rotation = (
            sample.rotation_rate.as_tuple()
            if sample.rotation_rate is not None
            else (float("nan"),) * 3
        )
        record.update(zip(RecordingColumns.ROTATION, rotation, strict=True))
        record[RecordingColumns.INTERVAL] = (
            sample.reported_interval_ms
            if sample.reported_interval_ms is not None
            else float("nan")
        )
        records.append(record)

    columns = [
        *RecordingColumns.essential(),
        *RecordingColumns.ROTATION,
        RecordingColumns.INTERVAL,
    ]
    return pd.DataFrame(records, columns=columns)
