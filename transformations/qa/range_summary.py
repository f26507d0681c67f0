# range_summary.py
"""
Range summary and identifier listings for the merged bongo tow table.
Min/max values are reported exactly as stored; an out-of-range value here
is a signal for the operator, nothing is clamped or dropped.
"""

from typing import Dict, List, Sequence

from pyspark.sql import DataFrame, functions as F
from pyspark.sql.types import DoubleType, StringType, StructField, StructType

from utils.config import setup_logger
from utils.column_mapping import EVENT_KEY_COLUMNS, IDENTIFIER_COLUMNS, SUMMARY_COLUMNS
from utils.common_functions_raw import quote_col

logger = setup_logger(__name__)

RANGE_SUMMARY_SCHEMA = StructType([
    StructField("Statistic", StringType(), False),
    StructField("Value", DoubleType(), True),
])


def compute_range_summary(df: DataFrame, columns: Sequence[str] = SUMMARY_COLUMNS) -> DataFrame:
    """
    Long-format min/max table: one row per statistic, named min_<col> / max_<col>.
    Nulls are ignored; a column with no values reports null.
    """
    try:
        present = [c for c in columns if c in df.columns]
        if not present:
            return df.sparkSession.createDataFrame([], RANGE_SUMMARY_SCHEMA)

        aggs = []
        for c in present:
            col = F.expr(f"try_cast({quote_col(c)} AS DOUBLE)")
            aggs.append(F.min(col).alias(f"min_{c}"))
            aggs.append(F.max(col).alias(f"max_{c}"))
        row = df.agg(*aggs).first()

        rows = []
        for c in present:
            for stat in (f"min_{c}", f"max_{c}"):
                value = row[stat]
                rows.append((stat, float(value) if value is not None else None))
        return df.sparkSession.createDataFrame(rows, RANGE_SUMMARY_SCHEMA)

    except Exception as e:
        logger.error(f"Error computing range summary: {e}", exc_info=True)
        raise


def summary_to_dict(summary_df: DataFrame) -> Dict[str, float]:
    return {r["Statistic"]: r["Value"] for r in summary_df.collect()}


def distinct_values(df: DataFrame, columns: Sequence[str] = IDENTIFIER_COLUMNS) -> Dict[str, List]:
    """Sorted distinct values (nulls first) of each identifier column present."""
    out = {}
    for c in columns:
        if c not in df.columns:
            continue
        col = F.col(quote_col(c))
        out[c] = [r[0] for r in df.select(col).distinct().orderBy(col.asc_nulls_first()).collect()]
    return out


def find_duplicate_events(df: DataFrame, keys: Sequence[str] = EVENT_KEY_COLUMNS) -> DataFrame:
    """
    Event keys (cruise, station, cast, sample_name) that occur on more than one row.
    Reported only; the merge never deduplicates.
    """
    present = [k for k in keys if k in df.columns]
    if not present:
        raise ValueError(f"None of the event key columns {list(keys)} are present")
    return (
        df.groupBy(*[F.col(quote_col(k)) for k in present])
          .count()
          .filter(F.col("count") > 1)
          .orderBy(*present)
    )
