"""
QA job for the merged bongo tow table.
Logs min/max ranges, identifier listings, coordinate issues and duplicate
event keys, and writes position maps for visual inspection.
"""

import argparse
import os
import sys
from typing import Any, Dict, Optional, Sequence, Tuple

from pyspark.sql import DataFrame, SparkSession

from utils.config import CFG, MAP_EXTENTS, setup_logger
from utils.spark_session import get_spark_session
from utils.export_io import read_merged_table
from transformations.qa.range_summary import (
    compute_range_summary,
    distinct_values,
    find_duplicate_events,
    summary_to_dict,
)
from transformations.qa.coordinate_checks import (
    check_coordinates,
    coordinate_issues,
    load_validated_exceptions,
)
from transformations.qa.map_visualization import generate_event_map, plot_event_positions

logger = setup_logger(__name__)

MAP_COLUMNS = ("cruise", "station", "cast", "sample_name", "lat", "lon")


def run_event_log_qa(
    df: DataFrame,
    validated: Optional[Sequence[Tuple[str, str]]] = None,
    output_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run the QA checks on a canonical tow table. Nothing is modified; the
    returned report is meant for a human operator.
    """
    try:
        report: Dict[str, Any] = {}

        # ------------------------------------------------------ #
        # Range summary (min/max per numeric field)              #
        # ------------------------------------------------------ #
        report["range_summary"] = summary_to_dict(compute_range_summary(df))
        for stat, value in report["range_summary"].items():
            logger.info(f"{stat:<28} {value}")

        # ------------------------------------------------------ #
        # Identifier listings                                    #
        # ------------------------------------------------------ #
        report["distinct_values"] = distinct_values(df)
        for col, values in report["distinct_values"].items():
            logger.info(f"{col}: {values}")

        # ------------------------------------------------------ #
        # Coordinates and duplicate events                       #
        # ------------------------------------------------------ #
        checked = check_coordinates(df, validated=validated)
        issues = coordinate_issues(checked)
        report["coordinate_issues"] = [r.asDict() for r in issues.select(
            *[c for c in MAP_COLUMNS if c in checked.columns], "coord_status"
        ).collect()]
        for issue in report["coordinate_issues"]:
            logger.warning(f"Coordinate issue: {issue}")

        report["duplicate_events"] = [r.asDict() for r in find_duplicate_events(df).collect()]
        for dup in report["duplicate_events"]:
            logger.warning(f"Duplicate event key: {dup}")

        # ------------------------------------------------------ #
        # Maps                                                   #
        # ------------------------------------------------------ #
        if output_dir:
            pdf = df.select(*[c for c in MAP_COLUMNS if c in df.columns]).toPandas()
            maps = [generate_event_map(pdf, os.path.join(output_dir, "tow_positions.html"))]
            for extent in MAP_EXTENTS:
                maps.append(plot_event_positions(
                    pdf, os.path.join(output_dir, f"tow_positions_{extent}.png"), extent=extent
                ))
            report["maps"] = [p for p in maps if p]

        return report

    except Exception as e:
        logger.error(f"QA run failed: {e}", exc_info=True)
        raise


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="QA checks for the merged bongo tow table.")
    p.add_argument("--input", default=CFG.MERGED_OUTPUT_PATH, help="Merged CSV to check")
    p.add_argument("--exceptions", default=CFG.VALIDATED_EXCEPTIONS_PATH, help="Validated exceptions CSV")
    p.add_argument("--output-dir", default=CFG.QA_OUTPUT_PATH, help="Directory for maps")
    p.add_argument("--no-maps", action="store_true", help="Skip map rendering")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    spark: SparkSession = get_spark_session()
    try:
        df = read_merged_table(spark, args.input)
        validated = load_validated_exceptions(spark, args.exceptions)
        report = run_event_log_qa(
            df,
            validated=validated,
            output_dir=None if args.no_maps else args.output_dir,
        )
        logger.info(
            f"QA finished: {len(report['coordinate_issues'])} coordinate issue(s), "
            f"{len(report['duplicate_events'])} duplicate event key(s)"
        )
        return 0
    except Exception as e:
        logger.error(f"QA terminated due to fatal error: {e}", exc_info=True)
        return 1
    finally:
        spark.stop()


if __name__ == "__main__":
    sys.exit(main())
