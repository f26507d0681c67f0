from utils.common_functions import normalize_time_of_day

# Test HH:MM expansion, HH:MM:SS pass-through and malformed values
def test_normalize_time_of_day(spark):
    df = spark.createDataFrame(
        [("08:5",), ("08:05",), ("08:05:30",), ("invalid",), (None,), ("25:00",), ("8:05",)],
        "Time_start_UTC string"
    )
    out = normalize_time_of_day(df, "Time_start_UTC")
    vals = [r.Time_start_UTC for r in out.collect()]
    assert vals == [None, "08:05:00", "08:05:30", None, None, None, None]

# Test a missing time column is skipped
def test_normalize_time_of_day_absent_column(spark):
    df = spark.createDataFrame([("1",)], ["cast"])
    out = normalize_time_of_day(df, "Time_end_UTC")
    assert out.columns == ["cast"]

# Test HH.MM and HH MM are rewritten with a colon separator
def test_normalize_time_of_day_other_separators(spark):
    df = spark.createDataFrame(
        [("08.05",), ("14 30",), ("0805 ",), ("08.65",)],
        "Time_end_UTC string"
    )
    out = normalize_time_of_day(df, "Time_end_UTC")
    vals = [r.Time_end_UTC for r in out.collect()]
    assert vals == ["08:05:00", "14:30:00", None, None]
