"""
Export IO for the merged bongo tow table.
Writes the flat CSV handed to the data package and reads it back for QA runs.
"""

from pathlib import Path

from pyspark.sql import DataFrame, SparkSession

from utils.config import CFG, setup_logger
from utils.common_functions import cast_numeric_columns, replace_na_with_null, replace_empty_with_null

logger = setup_logger(__name__)


# =========================================================
# write_merged_csv
# Purpose: single flat CSV, one row per tow event
# =========================================================
def write_merged_csv(df: DataFrame, output_path: str, na_rep: str = CFG.EXPORT_NA_REP) -> Path:
    """
    Write the merged table as one CSV file with missing values as 'NA'.
    Row and column order are taken from the DataFrame as-is.
    """
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        pdf = df.toPandas()
        pdf.to_csv(path, index=False, na_rep=na_rep)
        logger.info(f"Wrote {len(pdf)} rows x {len(pdf.columns)} columns to {path}")
        return path
    except Exception as e:
        logger.error(f"Failed to write merged CSV to {path}: {e}", exc_info=True)
        raise


# =========================================================
# write_merged_parquet
# Purpose: optional columnar copy for downstream Spark jobs
# =========================================================
def write_merged_parquet(df: DataFrame, output_path: str) -> None:
    """Write the merged table as a single-partition Parquet dataset."""
    (
        df.coalesce(1)
        .write
        .mode("overwrite")
        .parquet(output_path)
    )
    logger.info(f"Wrote merged Parquet to {output_path}")


# =========================================================
# read_merged_table
# Purpose: reload an exported CSV with canonical numeric types
# =========================================================
def read_merged_table(spark: SparkSession, path: str, fallback_empty: bool = False) -> DataFrame:
    """
    Read an exported merged CSV. All columns arrive as text, then the
    missing-value passes and the numeric coercion are re-applied.
    """
    if not Path(path).is_file():
        if not fallback_empty:
            raise FileNotFoundError(f"Merged table not found: {path}")
        logger.warning(f"Merged table not found at {path}; returning empty table")
        return spark.createDataFrame([], "`cast` string")

    df = (
        spark.read
        .option("header", True)
        .option("inferSchema", False)
        .option("escape", "\"")
        .option("multiLine", True)
        .csv(path)
    )
    df = replace_empty_with_null(replace_na_with_null(df))
    return cast_numeric_columns(df)
