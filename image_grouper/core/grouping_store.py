# image_grouper/core/grouping_store.py

import logging
import threading
from typing import Iterator, List, Optional, Tuple

import numpy as np

from image_grouper.core.difference import difference_many, within_threshold
from image_grouper.core.thumbnail import Thumbnail

logger = logging.getLogger(__name__)


class Group:
    """
    A representative thumbnail and the paths that matched it, in discovery order
    """

    def __init__(self, representative: Thumbnail, path: str):
        self.representative = representative
        self._paths: List[str] = [path]

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(self._paths)

    @property
    def primary(self) -> str:
        """The first-discovered member, kept on cleanup"""
        return self._paths[0]

    def _append(self, path: str):
        # Only called by GroupingStore while holding its lock
        self._paths.append(path)

    def __len__(self):
        return len(self._paths)

    def __repr__(self):
        return f"Group(primary={self.primary!r}, members={len(self._paths)})"


class GroupingStore:
    """
    Concurrency-safe, append-only collection of image groups

    Each submitted thumbnail joins the first group (in creation order)
    whose representative is within `threshold`, or starts a new group.

    Submissions use a two-phase protocol: the difference scan runs
    without the lock against a snapshot of the groups that exist at that
    moment, and the lock is only held to commit the result. Before a new
    group is created, the groups added since the snapshot are checked
    too, so a visible matching group is always joined.
    """

    _INITIAL_CAPACITY = 64

    def __init__(self, threshold: float):
        self.threshold = threshold
        self._lock = threading.Lock()
        self._groups: List[Group] = []

        # Representative pixels stacked for vectorised scans. Rows below
        # len(self._groups) are never rewritten; growing replaces the
        # array, so older snapshots stay valid.
        self._representatives = np.empty(
            (self._INITIAL_CAPACITY, Thumbnail.SIZE, Thumbnail.SIZE, Thumbnail.CHANNELS),
            dtype=np.uint8
        )

    def submit(self, path: str, thumbnail: Thumbnail) -> Group:
        """
        Add `path` to the first matching group, creating one if none matches

        Returns:
            The group the path was added to
        """
        with self._lock:
            representatives = self._representatives
            seen = len(self._groups)

        match = self._first_match(thumbnail, representatives, 0, seen)

        with self._lock:
            if match is None:
                # Only groups created after the snapshot still need checking
                match = self._first_match(
                    thumbnail, self._representatives, seen, len(self._groups)
                )

            if match is not None:
                group = self._groups[match]
                group._append(path)
                return group

            group = self._create_group(path, thumbnail)
            logger.debug("New group #%d for %s", len(self._groups) - 1, path)
            return group

    def _first_match(self, thumbnail: Thumbnail, representatives: np.ndarray,
                     start: int, stop: int) -> Optional[int]:
        """Index of the first representative in [start, stop) within threshold"""
        if start >= stop:
            return None

        distances = difference_many(thumbnail, representatives[start:stop])
        hits = np.flatnonzero(within_threshold(distances, self.threshold))
        if hits.size == 0:
            return None
        return start + int(hits[0])

    def _create_group(self, path: str, thumbnail: Thumbnail) -> Group:
        # Caller holds the lock
        index = len(self._groups)
        if index == len(self._representatives):
            grown = np.empty(
                (index * 2,) + self._representatives.shape[1:],
                dtype=np.uint8
            )
            grown[:index] = self._representatives
            self._representatives = grown

        self._representatives[index] = thumbnail.pixels
        group = Group(thumbnail, path)
        self._groups.append(group)
        return group

    def groups(self) -> Tuple[Group, ...]:
        """All groups in creation order"""
        with self._lock:
            return tuple(self._groups)

    def duplicate_groups(self) -> Iterator[Group]:
        """Groups with at least two members, in creation order"""
        return (group for group in self.groups() if len(group) > 1)

    def member_count(self) -> int:
        with self._lock:
            return sum(len(group) for group in self._groups)

    def __len__(self):
        with self._lock:
            return len(self._groups)

    def __iter__(self):
        return iter(self.groups())
