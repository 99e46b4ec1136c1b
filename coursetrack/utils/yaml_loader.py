"""
YAML loader utility for coursetrack.

Loads YAML data files such as the course catalog.
"""

from pathlib import Path
from typing import Any
import yaml


# Bundled data directory (inside the package)
DATA_DIR = Path(__file__).parent.parent / "data"


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Load a YAML mapping from disk.

    Args:
        path: Path to the .yaml file

    Returns:
        Parsed top-level mapping (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the top level is not a mapping
        yaml.YAMLError: If YAML parsing fails
    """
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data
