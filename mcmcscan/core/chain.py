"""
Buffered Markov chain backed by an append-only text sink.

A chain keeps its most recent samples in memory. When the buffer reaches its
capacity, every buffered sample except the last is flushed to the sink, so the
chain can always hand out its current sample.

Terminology: the chain length is the number of buffered samples plus the
number of samples already flushed.
"""

from collections import deque
from typing import Tuple

from mcmcscan.core.errors import InvalidArgumentError, SinkUnavailableError
from mcmcscan.core.sample import Sample
from mcmcscan.utils.logging import ScanLogger

logger = ScanLogger.get_logger(__name__)


def format_record(sample: Sample) -> str:
    """
    Serialize one sample as a sink record.

    Parameters and measurements each go on their own line, followed by the
    likelihood and a blank separator line.
    """
    parameters = "".join(f"{value:< 9.8E}  " for value in sample.parameters.ravel())
    measurements = "".join(f"{value:< 9.8E}  " for value in sample.measurements)
    return f"{parameters}\n{measurements}\n{sample.likelihood:< 9.8E}\n\n"


class Chain:
    """
    Ordered, append-only sequence of Samples for one walker.

    Attributes:
        sink (str): Path of the file the chain appends its records to.
        buffer_size (int): Number of buffered samples that triggers a flush.
    """

    def __init__(self, seed: Sample, sink: str, buffer_size: int):
        if seed is None or not isinstance(seed, Sample):
            raise InvalidArgumentError("null point used to initialize chain")
        if not sink:
            raise InvalidArgumentError("invalid sink filename")
        if buffer_size <= 0:
            raise InvalidArgumentError("cannot have zero buffer size")

        self._sink = str(sink)
        self._buffer_size = int(buffer_size)
        self._num_flushed = 0
        self._closed = False

        # Probe the sink once so that a bad path fails at creation time
        try:
            with open(self._sink, "a"):
                pass
        except OSError as exc:
            raise SinkUnavailableError() from exc

        self._buffer = deque([seed])

    # ==================== Introspection ====================
    @property
    def sink(self) -> str:
        return self._sink

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def num_buffered(self) -> int:
        return len(self._buffer)

    @property
    def num_flushed(self) -> int:
        return self._num_flushed

    @property
    def length(self) -> int:
        return len(self._buffer) + self._num_flushed

    @property
    def buffered(self) -> Tuple[Sample, ...]:
        """Snapshot of the buffered samples, oldest first."""
        return tuple(self._buffer)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_sample(self) -> Sample:
        """The most recently appended sample."""
        if self._closed:
            raise InvalidArgumentError("chain is closed")
        return self._buffer[-1]

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return (
            f"Chain(sink={self._sink!r}, buffered={self.num_buffered}, "
            f"flushed={self._num_flushed})"
        )

    # ==================== Mutation ====================
    def append(self, sample: Sample) -> None:
        """
        Append a sample, flushing once the buffer is full.

        Raises:
            InvalidArgumentError: If sample is None or the chain is closed.
            SinkUnavailableError: If the triggered flush could not reach the
                sink. The sample is still appended in that case.
        """
        if sample is None or not isinstance(sample, Sample):
            raise InvalidArgumentError("null point appended")
        if self._closed:
            raise InvalidArgumentError("cannot append to a closed chain")

        self._buffer.append(sample)

        if len(self._buffer) >= self._buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write every buffered sample except the current one to the sink."""
        if len(self._buffer) <= 1:
            return
        self._write(len(self._buffer) - 1)

    def flush_all(self) -> None:
        """
        Write every buffered sample, including the current one, and close the chain.

        Raises:
            SinkUnavailableError: If the sink could not be written. The chain
                stays open and keeps its buffer.
        """
        if self._closed:
            return
        self._write(len(self._buffer))
        self._closed = True

    def close(self) -> None:
        self.flush_all()

    def __enter__(self) -> "Chain":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _write(self, count: int) -> None:
        """Append the oldest ``count`` buffered samples to the sink and drop them."""
        if count <= 0:
            return
        records = "".join(format_record(self._buffer[i]) for i in range(count))

        try:
            with open(self._sink, "a") as output_file:
                output_file.write(records)
        except OSError as exc:
            raise SinkUnavailableError() from exc

        for _ in range(count):
            self._buffer.popleft()
        self._num_flushed += count
        logger.debug("Flushed %d samples to %s", count, self._sink)
