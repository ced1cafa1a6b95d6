# tests/test_utils.py

from image_grouper.utils.file_utils import format_file_size
from image_grouper.utils.performance_monitor import default_worker_count, get_system_info


def test_format_file_size():
    assert format_file_size(512) == "512.00 B"
    assert format_file_size(1536) == "1.50 KB"
    assert format_file_size(3 * 1024**3) == "3.00 GB"
    assert format_file_size(2 * 1024**5) == "2.00 PB"
    assert format_file_size(2048 * 1024**5) == "2048.00 PB"


def test_requested_worker_count_wins():
    assert default_worker_count(3) == 3


def test_default_worker_count_uses_cpus():
    assert default_worker_count() >= 1


def test_system_info_keys():
    info = get_system_info()

    assert info['cpu_count_logical'] >= 1
    assert info['memory_total_gb'] > 0
