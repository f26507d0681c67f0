import pytest
from pyspark.sql import SparkSession

# Fixture to provide a Spark session for tests
@pytest.fixture(scope="session")
def spark():
    try:
        spark = (
            SparkSession.builder
            .master("local[2]")
            .appName("tests")
            .config("spark.driver.host", "127.0.0.1")
            .config("spark.sql.session.timeZone", "UTC")
            .config("spark.sql.shuffle.partitions", "2")
            .getOrCreate()
        )
        yield spark
        spark.stop()
    except Exception as e:
        print("spark init error:", e)
        raise


# Writes a CSV event log under tmp_path and returns its path
@pytest.fixture
def write_log(tmp_path):
    def _write(name, text, subdir="raw"):
        d = tmp_path / subdir
        d.mkdir(parents=True, exist_ok=True)
        path = d / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
