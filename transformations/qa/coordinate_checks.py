# coordinate_checks.py
"""
Coordinate validity checks for bongo tow positions.
Rows are classified, never removed. Cruise/station pairs that were checked
against the paper e-log are listed in a validated-exceptions file and marked
as validated instead of being flagged.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pyspark.sql import DataFrame, SparkSession, functions as F

from utils.config import CFG, setup_logger
from utils.schema_definitions import VALIDATED_EXCEPTIONS_SCHEMA

logger = setup_logger(__name__)

STATUS_OK = "ok"
STATUS_MISSING = "missing"
STATUS_OUT_OF_BOUNDS = "out_of_bounds"
STATUS_OUT_OF_REGION = "out_of_region"


def load_validated_exceptions(
    spark: SparkSession,
    path: str = CFG.VALIDATED_EXCEPTIONS_PATH,
    fallback_empty: bool = True,
) -> List[Tuple[str, str]]:
    """
    Read the validated-exceptions CSV (cruise, station, note) into (cruise, station) pairs.
    """
    if not Path(path).is_file():
        if not fallback_empty:
            raise FileNotFoundError(f"Validated exceptions file not found: {path}")
        logger.warning(f"No validated exceptions file at {path}; every outlier will be flagged")
        return []

    df = (
        spark.read
        .option("header", True)
        .option("ignoreLeadingWhiteSpace", True)
        .option("ignoreTrailingWhiteSpace", True)
        .schema(VALIDATED_EXCEPTIONS_SCHEMA)
        .csv(path)
    )
    pairs = [
        (r["cruise"], r["station"])
        for r in df.dropna(subset=["cruise", "station"]).distinct().collect()
    ]
    logger.info(f"Loaded {len(pairs)} validated exception(s) from {path}")
    return sorted(pairs)


def check_coordinates(
    df: DataFrame,
    validated: Optional[Sequence[Tuple[str, str]]] = None,
    lat_col: str = "lat",
    lon_col: str = "lon",
    lat_bounds: Tuple[float, float] = CFG.REGION_LAT_BOUNDS,
    lon_bounds: Tuple[float, float] = CFG.REGION_LON_BOUNDS,
) -> DataFrame:
    """
    Add coord_status (ok, missing, out_of_bounds, out_of_region) and a
    validated flag for rows whose cruise/station is on the allow-list.
    """
    try:
        lat = F.col(lat_col)
        lon = F.col(lon_col)
        status = (
            F.when(lat.isNull() | lon.isNull(), STATUS_MISSING)
             .when(~(lat.between(-90, 90) & lon.between(-180, 180)), STATUS_OUT_OF_BOUNDS)
             .when(
                 ~(lat.between(*lat_bounds) & lon.between(*lon_bounds)),
                 STATUS_OUT_OF_REGION,
             )
             .otherwise(STATUS_OK)
        )

        flag = F.lit(False)
        if validated and {"cruise", "station"}.issubset(df.columns):
            for cruise, station in validated:
                flag = flag | ((F.col("cruise") == cruise) & (F.col("station") == station))
            flag = F.coalesce(flag, F.lit(False))

        return df.withColumn("coord_status", status).withColumn("validated", flag)

    except Exception as e:
        logger.error(f"Error checking coordinates: {e}", exc_info=True)
        raise


def coordinate_issues(checked: DataFrame) -> DataFrame:
    """Rows flagged by check_coordinates that are not validated exceptions."""
    return checked.filter((F.col("coord_status") != STATUS_OK) & ~F.col("validated"))
