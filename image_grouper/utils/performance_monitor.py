# image_grouper/utils/performance_monitor.py

import logging
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


def get_system_info() -> dict:
    """Get current system information"""
    memory = psutil.virtual_memory()

    return {
        'cpu_count': psutil.cpu_count(logical=False),
        'cpu_count_logical': psutil.cpu_count(logical=True),
        'memory_total_gb': memory.total / (1024**3),
        'memory_available_gb': memory.available / (1024**3),
        'memory_percent': memory.percent
    }


def default_worker_count(requested: Optional[int] = None) -> int:
    """
    Number of discovery workers to use

    Falls back to one worker per logical CPU when nothing was requested.
    """
    if requested is not None:
        return requested

    info = get_system_info()
    logger.debug(
        "System: %s logical CPUs, %.1f GB of %.1f GB memory available",
        info['cpu_count_logical'], info['memory_available_gb'], info['memory_total_gb']
    )
    # cpu_count can report None on some platforms
    return info['cpu_count_logical'] or 1
