from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import yaml


class ConfigError(ValueError):
    """Raised for configuration values the scan can't run with"""


@dataclass(frozen=True)
class ScanConfig:
    """Immutable settings for a single scan"""
    root_path: str
    threshold: float = 10.0
    delete: bool = False

    def __post_init__(self):
        if not Path(self.root_path).is_dir():
            raise ConfigError(f"Not a directory: {self.root_path}")
        if self.threshold < 0:
            raise ConfigError(f"Threshold must be non-negative, got {self.threshold}")


@dataclass
class SystemConfig:
    """System-wide configuration"""
    n_workers: Optional[int] = None  # None: one per logical CPU
    log_level: str = "WARNING"
    log_dir: Optional[str] = None  # Rotating file log when set
    log_format: str = "text"  # Options: text, json
    show_progress: bool = True
    max_image_pixels: int = 200_000_000  # Pillow decompression bomb limit

    def save(self, path: str = "config.yaml"):
        """Save configuration to YAML file"""
        config_dict = {
            'n_workers': self.n_workers,
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'log_format': self.log_format,
            'show_progress': self.show_progress,
            'max_image_pixels': self.max_image_pixels
        }

        with open(path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    @classmethod
    def load(cls, path: str = "config.yaml") -> 'SystemConfig':
        """Load configuration from YAML file"""
        if not Path(path).exists():
            return cls()  # Return default config

        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        config = cls()

        config.n_workers = config_dict.get('n_workers', config.n_workers)
        config.log_level = config_dict.get('log_level', config.log_level)
        config.log_dir = config_dict.get('log_dir', config.log_dir)
        config.log_format = config_dict.get('log_format', config.log_format)
        config.show_progress = config_dict.get('show_progress', config.show_progress)
        config.max_image_pixels = config_dict.get('max_image_pixels', config.max_image_pixels)

        if config.n_workers is not None and config.n_workers < 1:
            raise ConfigError(f"n_workers must be at least 1, got {config.n_workers}")
        if config.log_format not in ('text', 'json'):
            raise ConfigError(f"Unknown log_format: {config.log_format}")

        return config
