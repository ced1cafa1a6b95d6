"""Group visually similar images by a coarse thumbnail fingerprint."""

__version__ = "0.1.0"
