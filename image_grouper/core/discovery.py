# image_grouper/core/discovery.py

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from tqdm import tqdm

from image_grouper.core.grouping_store import GroupingStore
from image_grouper.core.thumbnail import Thumbnail, load_thumbnail

logger = logging.getLogger(__name__)


@dataclass
class DiscoverySummary:
    """Counts from one discovery run"""
    visited: int = 0
    grouped: int = 0
    skipped: int = 0


class DiscoveryPipeline:
    """
    Thumbnails candidate files in parallel and feeds them to a GroupingStore

    Decoding and thumbnailing share no state between files; only the
    final `submit` touches the store.
    """

    def __init__(self,
                 store: GroupingStore,
                 n_workers: int = 1,
                 show_progress: bool = True,
                 loader: Callable[[str], Optional[Thumbnail]] = load_thumbnail):
        if n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {n_workers}")

        self.store = store
        self.n_workers = n_workers
        self.show_progress = show_progress
        self.loader = loader

        self._summary_lock = threading.Lock()
        self._summary = DiscoverySummary()

    def run(self, paths: Iterable[str]) -> DiscoverySummary:
        """
        Visit every path, printing it, and group the ones that decode

        Returns:
            Counts of visited, grouped and skipped files
        """
        self._summary = DiscoverySummary()
        paths = list(paths)
        logger.info("Discovering %d files with %d workers", len(paths), self.n_workers)

        progress = tqdm(
            total=len(paths),
            desc="Grouping images",
            unit="file",
            disable=None if self.show_progress else True
        )

        with progress:
            if self.n_workers == 1:
                for path in paths:
                    self._process(path)
                    progress.update(1)
            else:
                with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
                    futures = [executor.submit(self._process, path) for path in paths]
                    for future in as_completed(futures):
                        # Propagate anything unexpected from a worker
                        future.result()
                        progress.update(1)

        summary = self._summary
        logger.info(
            "Visited %d files: %d grouped into %d groups, %d skipped",
            summary.visited, summary.grouped, len(self.store), summary.skipped
        )
        return summary

    def _process(self, path: str):
        """Print, decode, thumbnail and submit a single file"""
        tqdm.write(path)

        thumbnail = self.loader(path)
        if thumbnail is None:
            self._count(skipped=1)
            return

        self.store.submit(path, thumbnail)
        self._count(grouped=1)

    def _count(self, grouped: int = 0, skipped: int = 0):
        with self._summary_lock:
            self._summary.visited += 1
            self._summary.grouped += grouped
            self._summary.skipped += skipped
