"""
Ingestion utilities for the per-cruise bongo event log datasheets.
Discovery, per-file loading, per-file column type normalization and the
cross-file merge. Every column leaves this module as nullable text; typed
parsing happens once, after harmonization, in utils.common_functions.
"""

from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Dict, List, Sequence

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F
from pyspark.sql.types import NumericType, StringType, StructField, StructType

from utils.config import CFG, setup_logger
from utils.column_mapping import FORCED_STRING_COLUMNS

# Initialize logger
logger = setup_logger(__name__)

FILE_ORDER_COL = "_file_order"
ROW_ORDER_COL = "_row_order"


class EventLogLoadError(Exception):
    """Raised when an event log file cannot be discovered or read."""


@dataclass(frozen=True)
class ColumnProfile:
    name: str
    dtype: str
    non_null: int
    numeric: int
    representation: str  # numeric | mixed | text | other


def quote_col(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def _try_double(name: str):
    return F.expr(f"try_cast({quote_col(name)} AS DOUBLE)")


# ============================================================== #
# Discovery                                                      #
# ============================================================== #

def list_event_logs(input_dir: str, pattern: str = CFG.RAW_FILE_PATTERN) -> List[Path]:
    """
    Return event log files under input_dir in lexicographic order.
    The order fixes the merged row order, so exports are reproducible.
    """
    base = Path(input_dir)
    if not base.is_dir():
        raise EventLogLoadError(f"Event log directory not found: {base}")

    files = sorted(p for p in base.glob(pattern) if p.is_file())
    if not files:
        raise EventLogLoadError(f"No event logs matching '{pattern}' in {base}")

    logger.info(f"Discovered {len(files)} event log(s) in {base}")
    return files


# ============================================================== #
# Per-file Loader                                                #
# ============================================================== #

def _csv_reader(spark: SparkSession):
    return (
        spark.read
        .option("header", True)
        .option("nullValue", CFG.READ_NULL_VALUE)
        .option("escape", "\"")
        .option("multiLine", True)
        .option("ignoreLeadingWhiteSpace", True)
        .option("ignoreTrailingWhiteSpace", True)
        .option("mode", "PERMISSIVE")
    )


def _loader_schema(inferred: StructType) -> StructType:
    """
    Keep inferred numeric types, read everything else as text.
    Identifier, date and time columns are always text.
    """
    fields = []
    for f in inferred.fields:
        keep = isinstance(f.dataType, NumericType) and f.name not in FORCED_STRING_COLUMNS
        fields.append(StructField(f.name, f.dataType if keep else StringType(), True))
    return StructType(fields)


def load_event_log(spark: SparkSession, path) -> DataFrame:
    """
    Read one event log datasheet. '-' cells are null at parse time.
    Raises EventLogLoadError for a missing, unreadable or header-less file.
    """
    path = Path(path)
    if not path.is_file():
        raise EventLogLoadError(f"Event log not found: {path}")

    try:
        inferred = _csv_reader(spark).option("inferSchema", True).csv(str(path))
        if not inferred.columns:
            raise EventLogLoadError(f"Event log has no header row: {path}")

        df = _csv_reader(spark).schema(_loader_schema(inferred.schema)).csv(str(path))
        logger.info(f"Loaded {path.name}: {len(df.columns)} columns")
        return df

    except EventLogLoadError:
        raise
    except Exception as e:
        logger.error(f"Failed to read event log {path}: {e}", exc_info=True)
        raise EventLogLoadError(f"Failed to read event log {path}: {e}") from e


# ============================================================== #
# Row-level Normalizer                                           #
# ============================================================== #

def profile_columns(df: DataFrame) -> Dict[str, ColumnProfile]:
    """
    Count non-null and number-parseable values for every column in one pass.
    A text column whose values are mostly numbers but not all of them is 'mixed'.
    Diagnostic only: normalize_column_types renders every column as text
    whatever the profile says; the result feeds the mixed-column warning.
    """
    try:
        fields = list(df.schema.fields)
        aggs = []
        for i, f in enumerate(fields):
            aggs.append(F.count(F.col(quote_col(f.name))).alias(f"n{i}"))
            aggs.append(F.count(_try_double(f.name)).alias(f"d{i}"))
        row = df.agg(*aggs).first() if aggs else None

        profiles = {}
        for i, f in enumerate(fields):
            non_null = (row[f"n{i}"] or 0) if row else 0
            numeric = (row[f"d{i}"] or 0) if row else 0
            if isinstance(f.dataType, NumericType):
                representation = "numeric"
            elif isinstance(f.dataType, StringType):
                mostly_numeric = numeric * 2 > non_null
                representation = "mixed" if mostly_numeric and numeric < non_null else "text"
            else:
                representation = "other"
            profiles[f.name] = ColumnProfile(
                f.name, f.dataType.simpleString(), non_null, numeric, representation
            )
        return profiles

    except Exception as e:
        logger.error(f"Error profiling columns: {e}", exc_info=True)
        raise


def normalize_column_types(df: DataFrame, source_name: str = "") -> DataFrame:
    """
    Collapse every column of one file to a single text representation.
    Numeric columns are rendered as strings, mixed number/note columns stay
    text so the coercer can re-parse them uniformly after the merge.
    """
    try:
        profiles = profile_columns(df)
        mixed = [p.name for p in profiles.values() if p.representation == "mixed"]
        if mixed:
            logger.warning(f"{source_name or 'event log'}: mixed numeric/text columns kept as text: {mixed}")

        cols = []
        for f in df.schema.fields:
            col = F.col(quote_col(f.name))
            if not isinstance(f.dataType, StringType):
                col = col.cast(StringType())
            cols.append(col.alias(f.name))
        return df.select(*cols)

    except Exception as e:
        logger.error(f"Error normalizing column types for {source_name}: {e}", exc_info=True)
        raise


def load_and_normalize_event_logs(spark: SparkSession, paths: Sequence) -> List[DataFrame]:
    """Load and normalize each file independently, preserving the given order."""
    frames = []
    for path in paths:
        df = load_event_log(spark, path)
        frames.append(normalize_column_types(df, source_name=Path(path).name))
    return frames


# ============================================================== #
# Merger                                                         #
# ============================================================== #

def tag_source_order(df: DataFrame, file_index: int) -> DataFrame:
    """Attach file position and within-file row position."""
    return (
        df.withColumn(FILE_ORDER_COL, F.lit(file_index))
          .withColumn(ROW_ORDER_COL, F.monotonically_increasing_id())
    )


def merge_event_logs(frames: Sequence[DataFrame]) -> DataFrame:
    """
    Union per-file tables by column name. Columns missing from a file are null
    for that file's rows. Rows keep file order, then original row order.
    No deduplication.
    """
    if not frames:
        raise EventLogLoadError("No event log tables to merge")

    try:
        tagged = [tag_source_order(df, i) for i, df in enumerate(frames)]
        merged = reduce(lambda a, b: a.unionByName(b, allowMissingColumns=True), tagged)
        merged = merged.orderBy(FILE_ORDER_COL, ROW_ORDER_COL).drop(FILE_ORDER_COL, ROW_ORDER_COL)
        logger.info(f"Merged {len(frames)} event log(s) into {len(merged.columns)} columns")
        return merged

    except Exception as e:
        logger.error(f"Error merging event logs: {e}", exc_info=True)
        raise
