import logging
from PIL import Image
from image_grouper.config import ScanConfig, SystemConfig
from image_grouper.core.cleanup import CleanupSummary, report_groups
from image_grouper.core.discovery import DiscoveryPipeline
from image_grouper.core.grouping_store import GroupingStore
from image_grouper.utils.file_utils import iter_files
from image_grouper.utils.performance_monitor import default_worker_count

logger = logging.getLogger(__name__)


def run(scan: ScanConfig, system: SystemConfig) -> CleanupSummary:
    """Discover, group and report near-duplicate images under scan.root_path"""
    logger.info("Scanning %s (threshold %.2f, delete=%s)",
                scan.root_path, scan.threshold, scan.delete)

    Image.MAX_IMAGE_PIXELS = system.max_image_pixels

    store = GroupingStore(threshold=scan.threshold)
    pipeline = DiscoveryPipeline(
        store,
        n_workers=default_worker_count(system.n_workers),
        show_progress=system.show_progress
    )
    pipeline.run(iter_files(scan.root_path))

    # Discovery has finished; groups are final from here on
    return report_groups(store, delete=scan.delete)
