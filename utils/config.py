"""
utils/config.py

Central configuration for the NES-LTER bongo event log merge.
Environment-overridable (including values loaded from a local .env file)
and safe to import from tests, pipelines and QA scripts.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()

# ------------------------
# Environment helpers
# ------------------------
def _env(key: str, default: str) -> str:
    val = os.environ.get(key, default)
    val = val.strip() if val else default
    return val


def _env_optional(key: str) -> Optional[str]:
    val = os.environ.get(key, "").strip()
    return val or None

# ------------------------
# Defaults (can be overridden by env vars or a .env file)
# ------------------------
DEFAULT_RAW_PATH = "raw/"
DEFAULT_FILE_PATTERN = "*.csv"
DEFAULT_MERGED_OUTPUT = "data/merged/NES_LTER_TOW_DATA.csv"
DEFAULT_QA_OUTPUT = "data/assets/qa/"
DEFAULT_VALIDATED_EXCEPTIONS = "config/validated_exceptions.csv"
DEFAULT_LOG_DIR = "/tmp/logs"
DEFAULT_SPARK_MASTER = "local[*]"

# Missing-value conventions of the cruise datasheets
READ_NULL_VALUE = "-"
MISSING_TOKENS = ("NA", "")
EXPORT_NA_REP = "NA"

# NES shelf extent used for the regional coordinate check and static maps
REGION_LON_BOUNDS = (-74.0, -68.0)
REGION_LAT_BOUNDS = (38.0, 44.0)

# Static map extents as (lon bounds, lat bounds)
MAP_EXTENTS = {
    "world": ((-180.0, 180.0), (-90.0, 90.0)),
    "shelf": (REGION_LON_BOUNDS, REGION_LAT_BOUNDS),
    "zoom": ((-72.0, -69.0), (41.0, 43.0)),
}

# ------------------------
# BongoConfig dataclass (single-source-of-truth)
# ------------------------
@dataclass(frozen=True)
class BongoConfig:
    SPARK_APP_NAME: str = "bongo-event-log-merge"
    READ_NULL_VALUE: str = READ_NULL_VALUE
    EXPORT_NA_REP: str = EXPORT_NA_REP
    REGION_LON_BOUNDS: tuple = REGION_LON_BOUNDS
    REGION_LAT_BOUNDS: tuple = REGION_LAT_BOUNDS
    DEFAULT_PARAMS: Dict[str, str] = None

    # ------------------------------------------------------------------
    # Dynamic path getters (evaluate at runtime, not import time)
    # ------------------------------------------------------------------
    @property
    def RAW_DATA_PATH(self) -> str:
        return _env("RAW_DATA_PATH", DEFAULT_RAW_PATH).rstrip("/") + "/"

    @property
    def RAW_FILE_PATTERN(self) -> str:
        return _env("RAW_FILE_PATTERN", DEFAULT_FILE_PATTERN)

    @property
    def MERGED_OUTPUT_PATH(self) -> str:
        return _env("MERGED_OUTPUT_PATH", DEFAULT_MERGED_OUTPUT)

    @property
    def MERGED_PARQUET_PATH(self) -> Optional[str]:
        return _env_optional("MERGED_PARQUET_PATH")

    @property
    def QA_OUTPUT_PATH(self) -> str:
        return _env("QA_OUTPUT_PATH", DEFAULT_QA_OUTPUT).rstrip("/") + "/"

    @property
    def VALIDATED_EXCEPTIONS_PATH(self) -> str:
        return _env("VALIDATED_EXCEPTIONS_PATH", DEFAULT_VALIDATED_EXCEPTIONS)

    @property
    def LOG_DIR(self) -> str:
        return _env("LOG_DIR", DEFAULT_LOG_DIR)

    @property
    def SPARK_MASTER(self) -> str:
        return _env("SPARK_MASTER", DEFAULT_SPARK_MASTER)

    # ------------------------------------------------------------------
    # Runtime parameters
    # ------------------------------------------------------------------
    def __post_init__(self):
        object.__setattr__(self, "DEFAULT_PARAMS", {
            "input_dir": self.RAW_DATA_PATH,
            "pattern": self.RAW_FILE_PATTERN,
            "output": self.MERGED_OUTPUT_PATH,
            "qa_output": self.QA_OUTPUT_PATH,
        })


# single instance to import
CFG = BongoConfig()

# ------------------------
# Logging helper
# ------------------------
def setup_logger(name: str):
    """
    Initialize a logger only once per process.
    """
    try:
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger

        log_dir = Path(CFG.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"bongo_merge_{datetime.now(timezone.utc).strftime('%Y-%m-%d_%H-%M-%S')}.log"
        log_format = "%(asctime)s [%(levelname)s] %(message)s"

        handler_file = logging.FileHandler(log_file, encoding="utf-8")
        handler_stream = logging.StreamHandler()
        formatter = logging.Formatter(log_format)

        handler_file.setFormatter(formatter)
        handler_stream.setFormatter(formatter)

        logger.setLevel(logging.INFO)
        logger.addHandler(handler_file)
        logger.addHandler(handler_stream)

        logger.debug(f"Logging initialized. Log file: {log_file}")
        return logger

    except Exception as e:
        print(f"[WARN] Failed to initialize logger: {e}")
        logging.basicConfig(level=logging.INFO)
        return logging.getLogger(name)
