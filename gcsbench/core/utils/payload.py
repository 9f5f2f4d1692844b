"""Random payloads for upload benchmarks."""

import os


def make_random_buffer(length: int) -> bytes:
    """Return ``length`` random bytes.

    Random data keeps transparent compression on the path from skewing
    the measured throughput.

    Raises:
        ValueError: If ``length`` is negative.
    """
    if length < 0:
        raise ValueError(f"Buffer length must be non-negative, got {length}")
    return os.urandom(length)
