"""
Batch job merging the per-cruise bongo event log datasheets into one
harmonized tow table and exporting it for the data package.
"""

import argparse
import sys
from typing import Optional

from pyspark.sql import DataFrame, SparkSession

from utils.config import CFG, setup_logger
from utils.spark_session import get_spark_session
from utils.common_functions_raw import (
    list_event_logs,
    load_and_normalize_event_logs,
    merge_event_logs,
)
from utils.common_functions import normalize_columns, coerce_canonical_types
from utils.export_io import write_merged_csv, write_merged_parquet

logger = setup_logger(__name__)


# ============================================================== #
# Merge Pipeline                                                 #
# ============================================================== #

def run_event_log_merge(spark: SparkSession, input_dir: str, pattern: str = CFG.RAW_FILE_PATTERN) -> DataFrame:
    """
    Discover, load, normalize, merge, harmonize and coerce the event logs.
    Returns the canonical tow table.
    """
    try:
        # ------------------------------------------------------ #
        # Step 1: Discover source datasheets (sorted by name)    #
        # ------------------------------------------------------ #
        paths = list_event_logs(input_dir, pattern)

        # ------------------------------------------------------ #
        # Step 2: Load each file and flatten its columns to text #
        # ------------------------------------------------------ #
        frames = load_and_normalize_event_logs(spark, paths)

        # ------------------------------------------------------ #
        # Step 3: Union by column name in file order             #
        # ------------------------------------------------------ #
        df = merge_event_logs(frames)

        # ------------------------------------------------------ #
        # Step 4: Rename source columns to canonical names       #
        # ------------------------------------------------------ #
        df = normalize_columns(df)

        # ------------------------------------------------------ #
        # Step 5: Missing values, cast filter, time and numbers  #
        # ------------------------------------------------------ #
        df = coerce_canonical_types(df)

        logger.info("Event log merge completed successfully.")
        return df

    except Exception as e:
        logger.error(f"Event log merge failed: {e}", exc_info=True)
        raise


def export_merged_table(df: DataFrame, output_path: str, parquet_path: Optional[str] = None) -> None:
    write_merged_csv(df, output_path)
    if parquet_path:
        write_merged_parquet(df, parquet_path)


# ============================================================== #
# Job Entry Point                                                #
# ============================================================== #

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Merge bongo event log datasheets into one tow table.")
    p.add_argument("--input-dir", default=CFG.RAW_DATA_PATH, help="Directory of event log CSVs")
    p.add_argument("--pattern", default=CFG.RAW_FILE_PATTERN, help="Glob for event log files")
    p.add_argument("--output", default=CFG.MERGED_OUTPUT_PATH, help="Merged CSV output path")
    p.add_argument("--parquet-output", default=CFG.MERGED_PARQUET_PATH, help="Optional Parquet output path")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    spark = get_spark_session()
    try:
        logger.info(f"Merging event logs from {args.input_dir} ({args.pattern})")
        df = run_event_log_merge(spark, args.input_dir, args.pattern)
        export_merged_table(df, args.output, args.parquet_output)
        return 0
    except Exception as e:
        logger.error(f"Pipeline terminated due to fatal error: {e}", exc_info=True)
        return 1
    finally:
        spark.stop()


if __name__ == "__main__":
    sys.exit(main())
