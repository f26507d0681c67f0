"""
Harmonization and coercion utilities for the merged bongo event table.
All functions take and return a PySpark DataFrame and keep no state between calls.
"""

from typing import Dict, Iterable, Optional, Sequence

from pyspark.sql import DataFrame
from pyspark.sql import functions as F
from pyspark.sql.types import StringType

from utils.config import setup_logger
from utils.column_mapping import COLUMN_MAPPING, TIME_OF_DAY_COLUMNS
from utils.schema_definitions import NUMERIC_COLUMNS
from utils.common_functions_raw import quote_col

# Initialize logger
logger = setup_logger(__name__)

# Hour and minute around any single non-digit separator
HHMM_PATTERN = r"^([01][0-9]|2[0-3])[^0-9][0-5][0-9]$"


# ============================================================== #
# Column Normalization                                           #
# ============================================================== #

def normalize_columns(df: DataFrame, mapping: Optional[Dict[str, str]] = None) -> DataFrame:
    """
    Rename source columns based on COLUMN_MAPPING.
    Unmapped columns pass through. If a sheet already carried the canonical
    name, the two columns are coalesced into the canonical one.
    """
    mapping = COLUMN_MAPPING if mapping is None else mapping
    try:
        for src, target in mapping.items():
            if src not in df.columns:
                continue
            if target in df.columns:
                logger.info(f"Coalescing {src} into existing column {target}")
                df = df.withColumn(
                    target, F.coalesce(F.col(quote_col(target)), F.col(quote_col(src)))
                ).drop(src)
            else:
                df = df.withColumnRenamed(src, target)
        return df
    except Exception as e:
        logger.error(f"Error normalizing column names: {e}", exc_info=True)
        raise


# ============================================================== #
# Missing Values                                                 #
# ============================================================== #

def replace_tokens_with_null(df: DataFrame, tokens: Iterable[str]) -> DataFrame:
    """
    Replace exact matches of the given tokens with nulls across all string columns.
    """
    tokens = list(tokens)
    try:
        for col_name, dtype in df.dtypes:
            if dtype == "string":
                col = F.col(quote_col(col_name))
                df = df.withColumn(col_name, F.when(col.isin(tokens), None).otherwise(col))
        return df
    except Exception as e:
        logger.error(f"Error replacing {tokens} with nulls: {e}", exc_info=True)
        raise


def replace_na_with_null(df: DataFrame) -> DataFrame:
    """Literal 'NA' text is a missing value, not data."""
    return replace_tokens_with_null(df, ["NA"])


def replace_empty_with_null(df: DataFrame) -> DataFrame:
    """
    Replace empty strings with null values across all string columns.
    """
    return replace_tokens_with_null(df, [""])


def drop_missing_cast(df: DataFrame, key_col: str = "cast") -> DataFrame:
    """
    Drop blank and footer rows, i.e. rows without a cast identifier.
    """
    if key_col not in df.columns:
        raise ValueError(f"Merged event table has no '{key_col}' column")
    try:
        col = F.col(quote_col(key_col))
        kept = df.filter(col.isNotNull() & (F.trim(col) != ""))
        dropped = df.count() - kept.count()
        if dropped:
            logger.info(f"Dropped {dropped} row(s) without a {key_col} value")
        return kept
    except Exception as e:
        logger.error(f"Error dropping rows without {key_col}: {e}", exc_info=True)
        raise


# ============================================================== #
# Time and Numeric Coercion                                      #
# ============================================================== #

def normalize_time_of_day(df: DataFrame, col_name: str) -> DataFrame:
    """
    Normalize a time-of-day column to HH:MM:SS.
    HH:MM (or HH.MM, HH MM) becomes HH:MM:00, 8-character values pass through,
    everything else (including malformed HH:MM) becomes null.
    """
    if col_name not in df.columns:
        logger.info(f"Time column {col_name} not present; skipped")
        return df
    try:
        col = F.col(quote_col(col_name))
        length = F.length(col)
        normalized = (
            F.when(length == 8, col)
             .when(
                 (length == 5) & col.rlike(HHMM_PATTERN),
                 F.concat(F.substring(col, 1, 2), F.lit(":"), F.substring(col, 4, 2), F.lit(":00")),
             )
             .otherwise(F.lit(None).cast(StringType()))
        )
        return df.withColumn(col_name, normalized)
    except Exception as e:
        logger.error(f"Error normalizing time column {col_name}: {e}", exc_info=True)
        raise


def cast_numeric_columns(df: DataFrame, columns: Sequence[str] = NUMERIC_COLUMNS) -> DataFrame:
    """
    Cast specified columns to DoubleType. Values that do not parse become null.
    Columns absent from the table are skipped.
    """
    try:
        for col_name in columns:
            if col_name in df.columns:
                df = df.withColumn(
                    col_name, F.expr(f"try_cast({quote_col(col_name)} AS DOUBLE)")
                )
        return df
    except Exception as e:
        logger.error(f"Error casting numeric columns: {e}", exc_info=True)
        raise


def coerce_canonical_types(df: DataFrame) -> DataFrame:
    """
    Second typing phase on the harmonized table: missing-value passes,
    row filter on cast, time-of-day formatting, then numeric parsing.
    Fields not listed as numeric stay text.
    """
    df = replace_na_with_null(df)
    df = replace_empty_with_null(df)
    df = drop_missing_cast(df)
    for col_name in TIME_OF_DAY_COLUMNS:
        df = normalize_time_of_day(df, col_name)
    return cast_numeric_columns(df)
