"""
File operation utilities
"""

import logging
import os
from typing import Iterator

logger = logging.getLogger(__name__)


def iter_files(directory: str) -> Iterator[str]:
    """
    Walk `directory` in pre-order and yield the path of every regular file

    Entries are visited in name order. Symlinks are not followed and not
    yielded. Directories that can't be read are logged and skipped.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.warning("Skipping unreadable directory %s: %s", directory, e)
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from iter_files(entry.path)
            elif entry.is_file(follow_symlinks=False):
                yield entry.path
        except OSError as e:
            logger.warning("Skipping %s: %s", entry.path, e)


_SIZE_UNITS = ('B', 'KB', 'MB', 'GB', 'TB', 'PB')


def format_file_size(size_bytes: int) -> str:
    """Human readable size, e.g. 1.50 KB"""
    size = float(size_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.2f} {_SIZE_UNITS[unit]}"
