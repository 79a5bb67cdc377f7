"""File reading with encoding fallback and size limits."""
from pathlib import Path

from syntax_sweep.logging_config import get_logger

logger = get_logger(__name__)


def read_source(file_path: Path, max_size_bytes: int) -> str:
    """Read file with encoding fallback and size checking.

    Tries UTF-8 first, falls back to latin-1. Checks file size before reading.

    Args:
        file_path: Path to file
        max_size_bytes: Maximum allowed file size in bytes

    Returns:
        File content as string

    Raises:
        OSError: If the file cannot be read or exceeds the size limit
    """
    file_size = file_path.stat().st_size
    if file_size > max_size_bytes:
        raise OSError(
            f"File exceeds size limit "
            f"({file_size / 1024 / 1024:.2f}MB > {max_size_bytes / 1024 / 1024:.2f}MB)"
        )

    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        # latin-1 accepts all byte sequences
        logger.warning(f"File {file_path} is not valid UTF-8, reading as latin-1")
        return file_path.read_text(encoding="latin-1")
