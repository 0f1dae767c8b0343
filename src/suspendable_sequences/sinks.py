"""Sinks that pull a generator handle in batches into pandas and Parquet."""

import logging
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterator, List, Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .config import get_engine_config
from .driver import Driver
from .generator.handle import GeneratorHandle
from .generator.models import SinkStatistics
from .generator.protocols import LoggerProtocol

logger = logging.getLogger(__name__)


class HandleBatcher:
    """
    Pulls values from a handle ``batch_size`` at a time.

    Each batch is one ``Driver.take()`` call, so the generator is only resumed
    when the consumer asks for the next batch.
    """

    def __init__(self, batch_size: int = 1000):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size

    def batches(
        self, handle: GeneratorHandle, max_batches: Optional[int] = None
    ) -> Iterator[List[Any]]:
        """
        Pull batches until the handle is exhausted.

        Args:
            handle: Handle to pull from
            max_batches: Stop after this many batches, leaving the generator
                suspended (needed for generators that never finish)

        Yields:
            Non-empty lists of at most batch_size values
        """
        driver = Driver(handle)
        pulled = 0
        while max_batches is None or pulled < max_batches:
            batch = driver.take(self.batch_size)
            if batch:
                pulled += 1
                yield batch
            if len(batch) < self.batch_size:
                # take() came up short: the generator completed
                logger.debug(f"{handle.state.name} exhausted after {pulled} batches")
                return


class FrameTransformer:
    """
    Transforms value batches into pandas DataFrames.

    Mapping values become columns; any other value goes into a single
    ``value`` column.
    """

    def transform(self, batches: Iterator[List[Any]]) -> Iterator[pd.DataFrame]:
        """
        Transform batches to DataFrames.

        Args:
            batches: Iterator of value batches

        Yields:
            One DataFrame per batch, with batch_number and sequence_index columns
        """
        offset = 0
        for batch_num, batch in enumerate(batches, 1):
            if all(isinstance(value, Mapping) for value in batch):
                df = pd.DataFrame.from_records([dict(value) for value in batch])
            else:
                df = pd.DataFrame({"value": batch})

            df["batch_number"] = batch_num
            df["sequence_index"] = range(offset, offset + len(batch))
            offset += len(batch)

            logger.debug(f"Created DataFrame batch {batch_num} with {len(df)} rows")
            yield df


class ParquetSink:
    """
    Appends DataFrames to one Parquet file, one row group per frame.

    The file is created on the first append; ``finish()`` seals it. The
    schema of the first frame is enforced on every later frame.
    """

    def __init__(
        self,
        output_path: Path,
        compression: str = "snappy",
        logger: Optional[LoggerProtocol] = None,
    ):
        self.output_path = Path(output_path)
        self.compression = compression
        self._logger = logger or logging.getLogger(__name__)
        self._writer: Optional[pq.ParquetWriter] = None
        self._stats = SinkStatistics()
        self._opened_at = time.time()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def append(self, df: pd.DataFrame) -> None:
        """Write one DataFrame as a row group."""
        if self._writer is None:
            table = pa.Table.from_pandas(df, preserve_index=False)
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._writer = pq.ParquetWriter(
                str(self.output_path), table.schema, compression=self.compression
            )
        else:
            table = pa.Table.from_pandas(df, schema=self._writer.schema, preserve_index=False)

        self._writer.write_table(table)
        self._stats.total_rows += table.num_rows
        self._stats.total_batches += 1

    def finish(self) -> SinkStatistics:
        """
        Seal the file and report what was written.

        Returns:
            SinkStatistics; file_size_bytes is 0 when nothing was appended
        """
        self.close()
        if self.output_path.exists():
            self._stats.file_size_bytes = self.output_path.stat().st_size
        self._stats.elapsed_time = time.time() - self._opened_at
        self._logger.info(
            f"Sealed {self.output_path}: {self._stats.total_rows} rows "
            f"in {self._stats.total_batches} row groups"
        )
        return self._stats

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            self._writer = None


def _frames(handle: GeneratorHandle, batch_size: Optional[int]) -> Iterator[pd.DataFrame]:
    batcher = HandleBatcher(batch_size or get_engine_config().batch_size)
    return FrameTransformer().transform(batcher.batches(handle))


def _final_value(handle: GeneratorHandle) -> Any:
    if handle.state.disposed:
        return None
    return handle.get_return_value()


def collect_frame(handle: GeneratorHandle, batch_size: Optional[int] = None) -> pd.DataFrame:
    """
    Drain a handle into one DataFrame.

    Args:
        handle: Handle to drain
        batch_size: Values per intermediate batch (configuration default if None)

    Returns:
        Concatenated DataFrame; empty if the generator yields nothing
    """
    frames = list(_frames(handle, batch_size))
    if not frames:
        return pd.DataFrame(columns=["value", "batch_number", "sequence_index"])
    return pd.concat(frames, ignore_index=True)


def write_parquet(
    handle: GeneratorHandle,
    output_path: Path,
    batch_size: Optional[int] = None,
    compression: Optional[str] = None,
) -> SinkStatistics:
    """
    Drain a handle into a Parquet file, one row group per batch.

    Args:
        handle: Handle to drain
        output_path: Destination file
        batch_size: Values per row group (configuration default if None)
        compression: Compression codec (configuration default if None)

    Returns:
        SinkStatistics, including the generator's final value when preserved
    """
    compression = compression or get_engine_config().compression
    with ParquetSink(output_path, compression) as sink:
        for frame in _frames(handle, batch_size):
            sink.append(frame)
        stats = sink.finish()
    stats.final_value = _final_value(handle)
    return stats
