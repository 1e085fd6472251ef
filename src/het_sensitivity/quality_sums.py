"""Parallel sampling of cumulative base-quality sums."""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .config import DEFAULT_CHUNK_SIZE, DEFAULT_JOIN_TIMEOUT, DEFAULT_SEED, DEFAULT_WORKER_COUNT
from .exceptions import SamplingTimeoutError, SamplingWorkerError, ValidationError
from .logging_config import ProgressCallback
from .rng import RandomState
from .sampler import WeightedSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Chunk:
    """A contiguous block of trajectory indices ``[start, stop)``."""

    index: int
    start: int
    stop: int

    @property
    def width(self) -> int:
        return self.stop - self.start


def partition_trajectories(sample_size: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[Chunk]:
    """Split ``sample_size`` trajectories into chunks of at most ``chunk_size``."""
    if chunk_size < 1:
        raise ValidationError("chunk_size must be positive")
    return [
        Chunk(index=k, start=start, stop=min(start + chunk_size, sample_size))
        for k, start in enumerate(range(0, sample_size, chunk_size))
    ]


def sample_chunk(
    sampler: WeightedSampler,
    chunk: Chunk,
    max_summands: int,
    stream: RandomState,
) -> np.ndarray:
    """Cumulative sums of 0..max_summands-1 draws for every trajectory in ``chunk``.

    Returns an ``(max_summands, chunk.width)`` block; row 0 is all zeros.
    """
    sums = np.zeros((max_summands, chunk.width), dtype=np.int64)
    if max_summands > 1:
        qualities = sampler.draws((chunk.width, max_summands - 1), rng=stream.generator)
        sums[1:, :] = np.cumsum(qualities, axis=1).T
    return sums


def sample_cumulative_sums(
    sampler: WeightedSampler,
    max_summands: int,
    sample_size: int,
    *,
    seed: int = DEFAULT_SEED,
    worker_count: int = DEFAULT_WORKER_COUNT,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    join_timeout: Optional[float] = DEFAULT_JOIN_TIMEOUT,
    on_progress: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """Sample sums of 0, 1, ..., ``max_summands - 1`` quality draws.

    Args:
        sampler: Quality score sampler
        max_summands: Number of depths N; the result has N rows
        sample_size: Number of independent trajectories S
        seed: Base seed; chunk k draws from ``SeedSequence([seed, k])``
        worker_count: Size of the thread pool
        chunk_size: Trajectories per task
        join_timeout: Seconds to wait for all tasks, None waits forever
        on_progress: Optional observer called from the calling thread

    Returns:
        ``(N, S)`` int64 matrix where ``[m, i]`` is the sum of the first m
        draws of trajectory i. Column order follows trajectory index and does
        not depend on the pool size or on task completion order.

    Raises:
        SamplingWorkerError: If any task fails; pending tasks are cancelled
        SamplingTimeoutError: If tasks do not finish within ``join_timeout``
    """
    if max_summands < 0:
        raise ValidationError("max_summands cannot be negative")
    if sample_size < 1:
        raise ValidationError("sample_size must be positive")
    if worker_count < 1:
        raise ValidationError("worker_count must be at least 1")

    chunks = partition_trajectories(sample_size, chunk_size)
    base = RandomState.create(seed)
    result = np.zeros((max_summands, sample_size), dtype=np.int64)

    logger.debug(
        "Sampling %d trajectories of %d summands in %d chunks on %d workers",
        sample_size, max_summands, len(chunks), worker_count,
    )

    executor = ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="quality-sums")
    try:
        futures = {}
        for chunk in chunks:
            if on_progress is not None:
                on_progress(
                    f"Starting chunk {chunk.index + 1}/{len(chunks)} "
                    f"(trajectories {chunk.start}-{chunk.stop - 1})"
                )
            future = executor.submit(sample_chunk, sampler, chunk, max_summands, base.spawn(chunk.index))
            futures[future] = chunk

        deadline = None if join_timeout is None else time.monotonic() + join_timeout
        completed = 0
        pending = set(futures)
        while pending:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            done, pending = wait(pending, timeout=remaining, return_when=FIRST_EXCEPTION)
            if not done:
                raise SamplingTimeoutError(
                    f"Quality sum sampling did not finish within {join_timeout}s",
                    details={"pending_chunks": sorted(futures[f].index for f in pending)},
                )
            for future in sorted(done, key=lambda f: futures[f].index):
                chunk = futures[future]
                exc = future.exception()
                if exc is not None:
                    raise SamplingWorkerError(
                        f"Sampling chunk {chunk.index} failed: {exc}",
                        details={"chunk_index": chunk.index, "start": chunk.start, "stop": chunk.stop},
                    ) from exc
                result[:, chunk.start:chunk.stop] = future.result()
                completed += chunk.width
                if on_progress is not None:
                    on_progress(f"{completed} sampling iterations completed")
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    else:
        executor.shutdown(wait=True)

    return result
