"""coursetrack utilities."""

from .yaml_loader import load_yaml, DATA_DIR
from .config import Settings, DEFAULT_PROGRESS_DB, DEFAULT_CATALOG
from .clock import utc_now, as_aware

__all__ = [
    "load_yaml", "DATA_DIR",
    "Settings", "DEFAULT_PROGRESS_DB", "DEFAULT_CATALOG",
    "utc_now", "as_aware",
]
