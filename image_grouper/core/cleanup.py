# image_grouper/core/cleanup.py

import logging
import os
from dataclasses import dataclass

from image_grouper.core.grouping_store import GroupingStore
from image_grouper.utils.file_utils import format_file_size

logger = logging.getLogger(__name__)

GROUP_SEPARATOR = "-----"


@dataclass
class CleanupSummary:
    """What the report/cleanup pass did"""
    groups_reported: int = 0
    files_deleted: int = 0
    bytes_freed: int = 0


def report_groups(store: GroupingStore, delete: bool = False) -> CleanupSummary:
    """
    Print every group with two or more members and optionally delete
    all but the first member of each.

    Groups are reported in creation order, members in discovery order
    with their index. Deletion is not retried: any OSError aborts the
    pass, leaving files already removed as they are.
    """
    summary = CleanupSummary()

    for group in store.duplicate_groups():
        print(GROUP_SEPARATOR)
        summary.groups_reported += 1

        for i, path in enumerate(group.paths):
            print(f"{i} {path}")

            if delete and i > 0:
                size = os.path.getsize(path)
                os.remove(path)
                logger.info("Deleted %s (duplicate of %s)", path, group.primary)
                summary.files_deleted += 1
                summary.bytes_freed += size

    if delete:
        logger.info(
            "Deleted %d files from %d groups, freed %s",
            summary.files_deleted, summary.groups_reported,
            format_file_size(summary.bytes_freed)
        )
    else:
        logger.info("Reported %d duplicate groups", summary.groups_reported)

    return summary
