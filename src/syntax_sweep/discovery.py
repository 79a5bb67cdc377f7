"""Recursive file discovery with a fixed directory-exclusion policy."""
from pathlib import Path

from syntax_sweep.errors import DiscoveryError
from syntax_sweep.logging_config import get_logger

logger = get_logger(__name__)

EXCLUDED_DIRS = frozenset({"node_modules", ".git", "dist", "build", "uploads"})


def discover(root_dir: Path, suffix: str, excluded: frozenset[str] = EXCLUDED_DIRS) -> list[Path]:
    """Collect every regular file under root_dir whose name ends with suffix.

    Directories named in ``excluded`` are never descended into. Results come
    back in directory-listing order; callers that need a stable order must
    sort them.

    Args:
        root_dir: Directory to search from
        suffix: File name suffix to match (e.g. ".js")
        excluded: Directory base names to skip

    Returns:
        List of matching file paths

    Raises:
        DiscoveryError: If root_dir is missing, not a directory, or a
            directory under it cannot be listed
    """
    if not root_dir.exists():
        raise DiscoveryError(f"Directory does not exist: {root_dir}")
    if not root_dir.is_dir():
        raise DiscoveryError(f"Not a directory: {root_dir}")

    found: list[Path] = []
    seen: set[tuple[int, int]] = set()
    pending = [root_dir]

    while pending:
        directory = pending.pop()

        # Symlinked directories can loop back onto an ancestor
        try:
            stat = directory.stat()
        except OSError as e:
            raise DiscoveryError(f"Cannot stat directory {directory}: {e}") from e
        identity = (stat.st_dev, stat.st_ino)
        if identity in seen:
            logger.info(f"Skipping already visited directory {directory}")
            continue
        seen.add(identity)

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise DiscoveryError(f"Cannot list directory {directory}: {e}") from e

        subdirs = []
        for entry in entries:
            if entry.is_dir():
                if entry.name not in excluded:
                    subdirs.append(entry)
            elif entry.name.endswith(suffix) and entry.is_file():
                found.append(entry)

        # Reversed so the stack pops subdirectories in listing order
        pending.extend(reversed(subdirs))

    logger.info(f"Discovered {len(found)} '{suffix}' files under {root_dir}")
    return found


def relative_name(file_path: Path, project_root: Path) -> str:
    """Return file_path relative to project_root, or unchanged if outside it."""
    try:
        return str(file_path.relative_to(project_root))
    except ValueError:
        return str(file_path)
