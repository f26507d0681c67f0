"""
Local SparkSession factory for the event log merge and QA jobs.
"""

from pyspark.sql import SparkSession
from utils.config import CFG, setup_logger

logger = setup_logger(__name__)


def get_spark_session(app_name: str = CFG.SPARK_APP_NAME) -> SparkSession:
    """
    Build (or reuse) a local Spark session with UTC timestamps and non-ANSI casts.
    """
    try:
        spark = (
            SparkSession.builder
            .appName(app_name)
            .master(CFG.SPARK_MASTER)
            .config("spark.driver.host", "127.0.0.1")
            .config("spark.sql.session.timeZone", "UTC")
            .config("spark.sql.ansi.enabled", "false")
            .getOrCreate()
        )
        logger.info(f"Spark version: {spark.version}")
        return spark

    except Exception as e:
        logger.error(f"Error initializing Spark: {e}", exc_info=True)
        raise
