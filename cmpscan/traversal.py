"""
File system traversal: list comparison report files in a directory.

Reports are selected by extension, compared case-insensitively, so both
"compare.lst" and "COMPARE.LST" are picked up. By default only the directory
itself is listed; recursive traversal skips common tooling directories.

Typical usage:
    from pathlib import Path
    from cmpscan.traversal import find_report_files

    # Listings directly under ./qc
    reports = find_report_files(Path("./qc"))

    # Every .txt report anywhere below ./qc
    reports = find_report_files(Path("./qc"), extension=".txt", recursive=True)
"""

import logging
from pathlib import Path
from typing import Optional, Set

logger = logging.getLogger(__name__)

# Default directories to ignore during recursive traversal
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Version control
    ".git",
    ".svn",
    ".hg",
    # IDE and editor directories
    ".vscode",
    ".idea",
    # Python virtual environments and caches
    "venv",
    ".venv",
    "__pycache__",
    ".cache",
    ".pytest_cache",
}


def has_extension(path: Path, extension: str) -> bool:
    """
    Check if a file's final suffix matches extension, ignoring case.

    Examples:
        >>> has_extension(Path("qc/COMPARE.LST"), ".lst")
        True
        >>> has_extension(Path("qc/compare.lst.bak"), ".lst")
        False
        >>> has_extension(Path("qc/compare.lst"), "LST")
        True
    """
    if not extension.startswith("."):
        extension = "." + extension
    return path.suffix.lower() == extension.lower()


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check if a directory should be skipped during recursive traversal.

    Only the directory name is checked (case-sensitive), not the full path.
    """
    return dir_path.name in ignore_dirs


def find_report_files(
    root: Path,
    extension: str = ".lst",
    recursive: bool = False,
    ignore_dirs: Optional[Set[str]] = None,
) -> list[Path]:
    """
    Find all report files with the given extension under root.

    Symlinked report files are always included. Symlinked directories are
    never descended into, so recursive traversal cannot loop.

    Args:
        root: Directory containing the listings.
        extension: Report extension, with or without the leading dot.
        recursive: If True, descend into subdirectories (except ignored ones).
        ignore_dirs: Directory names to skip when recursive. If None, uses
                     DEFAULT_IGNORE_DIRS.

    Returns:
        Paths of matching files, sorted for deterministic ordering.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.
        PermissionError: If root itself cannot be listed. Unreadable
                         subdirectories are logged and skipped.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Report directory does not exist: %s", root)
        raise FileNotFoundError(f"Report directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Report path is not a directory: %s", root)
        raise NotADirectoryError(f"Report path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug("Traversal config: extension=%s, recursive=%s", extension, recursive)

    collected_files: list[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        # Only the root's listing failure is fatal
        try:
            entries = list(current_dir.iterdir())
        except OSError as e:
            if current_dir == root:
                logger.error("Cannot open report directory %s: %s", root, e)
                raise
            logger.warning("Error accessing directory %s: %s", current_dir, e)
            return

        for entry in entries:
            if entry.is_dir():
                if not recursive:
                    continue
                if entry.is_symlink():
                    logger.debug("Skipping symlinked directory: %s", entry)
                    continue
                if should_ignore_directory(entry, ignore_dirs):
                    logger.debug("Ignoring directory: %s", entry)
                    continue
                _walk_directory(entry)

            elif entry.is_file() and has_extension(entry, extension):
                logger.debug("Found report file: %s", entry)
                collected_files.append(entry)

    _walk_directory(root)

    collected_files.sort()

    logger.info(
        "Traversal complete: found %d report file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files
