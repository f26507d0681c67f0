from transformations.qa.coordinate_checks import (
    check_coordinates,
    coordinate_issues,
    load_validated_exceptions,
)

ROWS = [
    ("EN655", "L1", 41.5, -70.5),   # ok
    ("EN655", "L6", 41.0, -75.0),   # out of region, validated
    ("EN661", "L2", 90.1, -70.0),   # out of bounds
    ("EN661", "L3", None, -70.0),   # missing
    ("EN661", "L4", 36.0, -70.0),   # out of region
]
SCHEMA = "cruise string, station string, lat double, lon double"

# Test classification of coordinates against global and regional bounds
def test_check_coordinates_status(spark):
    df = spark.createDataFrame(ROWS, SCHEMA)
    out = check_coordinates(df).collect()
    assert [r.coord_status for r in out] == [
        "ok", "out_of_region", "out_of_bounds", "missing", "out_of_region"
    ]
    assert not any(r.validated for r in out)
    assert len(out) == 5

# Test validated exceptions are marked and excluded from the issue list
def test_validated_exceptions_excluded(spark, write_log):
    path = write_log(
        "validated_exceptions.csv",
        "cruise,station,note\nEN655,L6,double checked on elog\nAR34B,L10,\n",
        subdir="config",
    )
    validated = load_validated_exceptions(spark, str(path))
    assert validated == [("AR34B", "L10"), ("EN655", "L6")]

    checked = check_coordinates(spark.createDataFrame(ROWS, SCHEMA), validated=validated)
    assert [r.validated for r in checked.collect()] == [False, True, False, False, False]
    issues = coordinate_issues(checked).collect()
    assert sorted(r.station for r in issues) == ["L2", "L3", "L4"]

# Test a missing exceptions file falls back to an empty allow-list
def test_load_validated_exceptions_missing(spark, tmp_path):
    assert load_validated_exceptions(spark, str(tmp_path / "none.csv")) == []
