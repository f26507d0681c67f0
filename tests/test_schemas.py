from pyspark.sql.types import DoubleType
from utils.schema_definitions import SCHEMA_MAP, NUMERIC_COLUMNS
from utils.column_mapping import COLUMN_MAPPING, SUMMARY_COLUMNS

# Test canonical schema holds every renamed column
def test_canonical_schema_covers_mapping():
    names = set(SCHEMA_MAP["canonical"].fieldNames())
    for dst in COLUMN_MAPPING.values():
        assert dst in names
    for col in ("cruise", "station", "cast", "sample_name", "lat", "DateUTC", "avg_angle"):
        assert col in names

# Test the numeric field list used by the coercer
def test_numeric_columns():
    assert set(NUMERIC_COLUMNS) == {
        "DateUTC", "lat", "lon", "depth_bottom", "depth_target", "avg_angle", "depth_TDR",
        "FlowMeterSerial_335", "FlowStart_335", "FlowEnd_335", "TotFlow_335", "Vol_Filtered_m3_335",
        "FlowMeterSerial_150", "FlowStart_150", "FlowEnd_150", "TotFlow_150", "Vol_Filtered_m3_150",
    }
    for col in SUMMARY_COLUMNS:
        assert col in NUMERIC_COLUMNS

# Test cast is the only non-nullable canonical field
def test_canonical_schema_nullable_fields():
    schema = SCHEMA_MAP["canonical"]
    assert [f.name for f in schema.fields if not f.nullable] == ["cast"]
    assert isinstance(schema["lat"].dataType, DoubleType)

# Test the validated exceptions schema used by the coordinate QA
def test_validated_exceptions_schema(spark):
    schema = SCHEMA_MAP["validated_exceptions"]
    df = spark.createDataFrame([("EN655", "L6", None)], schema)
    assert df.columns == ["cruise", "station", "note"]
