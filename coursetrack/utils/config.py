"""
Runtime configuration for coursetrack.

Settings come from environment variables, optionally provided through a
.env file at the project root:
- COURSETRACK_DB_PATH: progress database (default: ~/.coursetrack/progress.db)
- COURSETRACK_CATALOG: catalog YAML (default: bundled catalog)
- COURSETRACK_LOG_LEVEL: logging level name (default: INFO)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from .yaml_loader import DATA_DIR

PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_DATA_DIR = Path.home() / ".coursetrack"
DEFAULT_PROGRESS_DB = DEFAULT_DATA_DIR / "progress.db"
DEFAULT_CATALOG = DATA_DIR / "catalog.yaml"


class Settings(BaseModel):
    db_path: Path = DEFAULT_PROGRESS_DB
    catalog_path: Path = DEFAULT_CATALOG
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def known_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown log level: {v}')
        return level

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """
        Build settings from the environment.

        Values already set in the environment take precedence over the .env
        file.
        """
        load_dotenv(env_file or PROJECT_ROOT / ".env")
        return cls(
            db_path=Path(os.environ.get("COURSETRACK_DB_PATH", DEFAULT_PROGRESS_DB)).expanduser(),
            catalog_path=Path(os.environ.get("COURSETRACK_CATALOG", DEFAULT_CATALOG)).expanduser(),
            log_level=os.environ.get("COURSETRACK_LOG_LEVEL", "INFO"),
        )
