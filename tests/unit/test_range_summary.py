from utils.common_functions_raw import merge_event_logs
from transformations.qa.range_summary import (
    compute_range_summary,
    distinct_values,
    find_duplicate_events,
    summary_to_dict,
)

# Test an out-of-range latitude surfaces as the maximum, not clamped
def test_range_summary_reports_out_of_range_max(spark):
    a = spark.createDataFrame([("1", 41.5, -70.5)], "`cast` string, lat double, lon double")
    b = spark.createDataFrame([("2", 90.1, -70.6), ("3", None, None)], "`cast` string, lat double, lon double")
    df = merge_event_logs([a, b])
    summary = summary_to_dict(compute_range_summary(df))
    assert summary["max_lat"] == 90.1
    assert summary["min_lat"] == 41.5
    assert summary["min_lon"] == -70.6
    assert summary["max_lon"] == -70.5
    assert "min_depth_TDR" not in summary

# Test statistic names and order in long format
def test_range_summary_long_format(spark):
    df = spark.createDataFrame([(1.0, None)], "lat double, avg_angle double")
    rows = compute_range_summary(df, columns=["lat", "avg_angle"]).collect()
    assert [r.Statistic for r in rows] == ["min_lat", "max_lat", "min_avg_angle", "max_avg_angle"]
    assert [r.Value for r in rows] == [1.0, 1.0, None, None]

# Test sorted distinct identifier values
def test_distinct_values(spark):
    df = spark.createDataFrame(
        [("EN661", "L2"), ("EN655", "L1"), ("EN655", None)],
        "cruise string, station string"
    )
    out = distinct_values(df)
    assert out == {"cruise": ["EN655", "EN661"], "station": [None, "L1", "L2"]}

# Test duplicate event keys are reported, not removed
def test_find_duplicate_events(spark):
    df = spark.createDataFrame(
        [
            ("EN655", "L1", "1", "S1"),
            ("EN655", "L1", "1", "S1"),
            ("EN655", "L1", "2", "S2"),
        ],
        "cruise string, station string, `cast` string, sample_name string"
    )
    dups = find_duplicate_events(df).collect()
    assert len(dups) == 1
    assert dups[0]["cast"] == "1"
    assert dups[0]["count"] == 2
    assert df.count() == 3
