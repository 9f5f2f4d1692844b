"""Content-Range values for resumable chunk uploads."""

from gcsbench.core.const import MIN_UPLOAD_CHUNK_SIZE
from gcsbench.core.exceptions import ValidationError

STATUS_QUERY_RANGE = "bytes */*"


def build_content_range(offset: int, length: int, is_last: bool) -> str:
    """Build the Content-Range header for a chunk.

    Args:
        offset: Position of the chunk's first byte within the object.
        length: Number of bytes in the chunk.
        is_last: Whether this chunk completes the object.

    Returns:
        ``bytes */<offset>`` for an empty final chunk,
        ``bytes <first>-<last>/<total>`` for a non-empty final chunk and
        ``bytes <first>-<last>/*`` otherwise.

    Raises:
        ValidationError: If the offset is negative, or a non-final chunk is
            empty or not aligned to ``MIN_UPLOAD_CHUNK_SIZE``.
    """
    if offset < 0:
        raise ValidationError(f"negative chunk offset {offset}")

    if is_last:
        if length == 0:
            return f"bytes */{offset}"
        end = offset + length
        return f"bytes {offset}-{end - 1}/{end}"

    if length == 0:
        raise ValidationError("only the last chunk may be empty")
    if length % MIN_UPLOAD_CHUNK_SIZE != 0:
        raise ValidationError(
            f"unaligned chunk, size={length} is not a multiple of "
            f"{MIN_UPLOAD_CHUNK_SIZE}"
        )

    end = offset + length
    return f"bytes {offset}-{end - 1}/*"


def validate_chunk_size(chunk_size: int) -> None:
    """Check that ``chunk_size`` can be used for non-final chunks.

    Raises:
        ValidationError: If it is not a positive multiple of
            ``MIN_UPLOAD_CHUNK_SIZE``.
    """
    if chunk_size <= 0 or chunk_size % MIN_UPLOAD_CHUNK_SIZE != 0:
        raise ValidationError(
            f"chunk size must be a positive multiple of {MIN_UPLOAD_CHUNK_SIZE}, "
            f"got {chunk_size}"
        )
